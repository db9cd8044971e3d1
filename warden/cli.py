"""
Warden CLI
===========

Click-based command-line interface for the Warden rogue access point
detector.  Compares the access points of an ``iw`` scan dump against a
registry of authorized BSSIDs and reports every unknown one.

Commands:
    warden check --scan FILE        Classify a scan dump, report rogues
    warden records --scan FILE      List the records of a scan dump
    warden registry --input SRC     List the authorized access points

Common options:
    --input PATH|URL    Registry of authorized access points
    --output PATH|URL   Report destination (JSON/HTML file or POST URL)
    --verbose           Show every verdict and debug logs
    --log-level LEVEL   Logging verbosity

References:
    - Click Documentation: https://click.palletsprojects.com/
    - iw(8). https://wireless.wiki.kernel.org/en/users/documentation/iw
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from shared.config import AppConfig
from shared.console import WardenConsole
from shared.logger import configure_logging

from warden.core.errors import SourceUnavailable

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _setup_logging(
    config: AppConfig,
    *,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """Apply config-file logging settings, overridden by CLI options."""
    settings = config.global_settings
    level = log_level or ("DEBUG" if verbose else settings.log_level)
    configure_logging(
        log_level=level,
        log_file=log_file or settings.log_file or None,
        json_logs=settings.log_json,
        console_output=not quiet,
    )


# ---------------------------------------------------------------------------
# CLI Group
# ---------------------------------------------------------------------------


@click.group(
    name="warden",
    help=(
        "WARDEN - Rogue Access Point Detector\n\n"
        "Compare the access points seen in an `iw <dev> scan` dump with a "
        "registry of authorized BSSIDs and report every unauthorized one."
    ),
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to the configuration file (TOML).",
)
@click.option(
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress console output (report only).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], quiet: bool) -> None:
    """Warden Rogue Access Point Detector - main CLI entry point."""
    ctx.ensure_object(dict)

    try:
        config = AppConfig.load(config_path) if config_path else AppConfig.load()
    except FileNotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    ctx.obj["config"] = config
    ctx.obj["console"] = WardenConsole(quiet=quiet)
    ctx.obj["quiet"] = quiet


# ---------------------------------------------------------------------------
# Check Command
# ---------------------------------------------------------------------------


@cli.command(
    name="check",
    help=(
        "Detect unauthorized access points.\n\n"
        "Parses the scan dump (a file, or - for stdin), classifies every "
        "access point against the registry and prints the unauthorized "
        "ones.  With --output the report is also written to a .json/.html "
        "file or POSTed as JSON to an http(s) URL.\n\n"
        "A missing registry or scan dump is logged and the run continues "
        "with an empty table or zero access points."
    ),
)
@click.option(
    "--scan", "-s",
    "scan",
    type=str,
    default=None,
    help="Scan dump produced by `iw <dev> scan` (- for stdin).",
)
@click.option(
    "--input", "-i",
    "registry",
    type=str,
    default=None,
    help="Registry of authorized APs: file path or http(s) URL.",
)
@click.option(
    "--output", "-o",
    type=str,
    default=None,
    help="Report destination: .json/.html path or http(s) URL.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Show the verdict of every access point.",
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging verbosity (overrides the configuration file).",
)
@click.option(
    "--log-file",
    type=click.Path(),
    default=None,
    help="Also write logs to this rotating file.",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit with status 1 when an unauthorized AP is found.",
)
@click.pass_context
def check(
    ctx: click.Context,
    scan: Optional[str],
    registry: Optional[str],
    output: Optional[str],
    verbose: bool,
    log_level: Optional[str],
    log_file: Optional[str],
    strict: bool,
) -> None:
    """Classify a scan dump and report unauthorized access points."""
    config: AppConfig = ctx.obj["config"]
    console: WardenConsole = ctx.obj["console"]
    settings = config.warden

    scan = scan or settings.scan_file
    if not scan:
        raise click.UsageError("No scan dump given; use --scan FILE or - for stdin.")

    _setup_logging(
        config,
        log_level=log_level,
        log_file=log_file,
        verbose=verbose,
        quiet=ctx.obj["quiet"],
    )

    from warden.core.engine import WardenEngine

    with WardenEngine(config=config, console=console) as engine:
        report = engine.run(
            scan_source=scan,
            registry_source=registry or settings.registry_source or None,
            output=output or settings.report_destination or None,
            verbose=verbose,
        )

    if (strict or settings.strict) and report.new_count > 0:
        sys.exit(1)


# ---------------------------------------------------------------------------
# Records Command
# ---------------------------------------------------------------------------


@cli.command(
    name="records",
    help=(
        "List the access point records of a scan dump.\n\n"
        "Runs the parser only, without any registry or classification."
    ),
)
@click.option(
    "--scan", "-s",
    "scan",
    type=str,
    default=None,
    help="Scan dump produced by `iw <dev> scan` (- for stdin).",
)
@click.option(
    "--details", "-d",
    is_flag=True,
    default=False,
    help="Also print the raw block of every record.",
)
@click.pass_context
def records(ctx: click.Context, scan: Optional[str], details: bool) -> None:
    """Print the parsed records of a scan dump."""
    config: AppConfig = ctx.obj["config"]
    console: WardenConsole = ctx.obj["console"]

    scan = scan or config.warden.scan_file
    if not scan:
        raise click.UsageError("No scan dump given; use --scan FILE or - for stdin.")

    _setup_logging(config, quiet=ctx.obj["quiet"])

    from warden.core.engine import WardenEngine
    from warden.output.console import WardenConsoleOutput

    with WardenEngine(config=config, console=console) as engine:
        try:
            parsed = engine.inspect(scan)
        except SourceUnavailable as exc:
            console.error(str(exc))
            sys.exit(1)

    WardenConsoleOutput(console).display_records(parsed, details=details)


# ---------------------------------------------------------------------------
# Registry Command
# ---------------------------------------------------------------------------


@cli.command(
    name="registry",
    help=(
        "List the authorized access points of a registry.\n\n"
        "The registry holds one `BSSID;SSID` entry per line; blank lines "
        "and lines starting with # are ignored."
    ),
)
@click.option(
    "--input", "-i",
    "source",
    type=str,
    default=None,
    help="Registry of authorized APs: file path or http(s) URL.",
)
@click.pass_context
def registry(ctx: click.Context, source: Optional[str]) -> None:
    """Load a registry and print its entries."""
    config: AppConfig = ctx.obj["config"]
    console: WardenConsole = ctx.obj["console"]

    source = source or config.warden.registry_source
    if not source:
        raise click.UsageError("No registry given; use --input PATH|URL.")

    _setup_logging(config, quiet=ctx.obj["quiet"])

    from shared.network import WardenHTTP
    from warden.output.console import WardenConsoleOutput
    from warden.parsers.registry import RegistryLoader

    with WardenHTTP(
        timeout=config.warden.http_timeout,
        max_retries=config.warden.http_retries,
    ) as http:
        loader = RegistryLoader(http=http, encoding=config.warden.registry_encoding)
        try:
            table, _ = loader.load(source)
        except SourceUnavailable as exc:
            console.error(str(exc))
            sys.exit(1)

    WardenConsoleOutput(console).display_registry(table)
    stats = loader.stats
    console.info(
        f"{stats.entries} entr{'y' if stats.entries == 1 else 'ies'} from "
        f"{stats.lines_read} line(s); {stats.malformed} malformed, "
        f"{stats.duplicates} duplicate(s)"
    )


def main() -> None:
    """Entry point for ``warden`` and ``python -m warden``."""
    cli(obj={})


if __name__ == "__main__":
    main()
