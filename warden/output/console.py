"""
Warden Console Output
======================

Rich-based console output for the Warden detector: run summary panel,
unauthorized access point table, parsed record listing and registry
listing.
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import WardenConsole

from warden import __version__
from warden.core.models import (
    AuthorizedRegistry,
    ClassificationResult,
    RunReport,
    ScanRecord,
    Verdict,
)

_VERDICT_STYLES: dict[Verdict, str] = {
    Verdict.AUTHORIZED: "warden.known",
    Verdict.UNAUTHORIZED: "warden.rogue",
}


class WardenConsoleOutput:
    """Formatted display of Warden results.

    Usage::

        output = WardenConsoleOutput()
        output.display_summary(report)
        output.display_unauthorized(report)
    """

    def __init__(self, console: Optional[WardenConsole] = None) -> None:
        self._console = console or WardenConsole()

    def display_banner(self) -> None:
        """Display the Warden tool banner."""
        self._console.banner(title="WARDEN", version=__version__)

    def display_summary(self, report: RunReport) -> None:
        """Show the counters and elapsed time of a run."""
        counters = report.counters
        body = Text()
        body.append("Scan dump:        ", style="warden.dim")
        body.append(f"{report.scan_source}\n")
        body.append("Registry:         ", style="warden.dim")
        body.append(f"{report.registry_source or '-'} "
                    f"({counters.registry_entries} authorized AP(s))\n")
        body.append("Lines processed:  ", style="warden.dim")
        body.append(f"{counters.lines_processed}\n")
        body.append("Access points:    ", style="warden.dim")
        body.append(f"{counters.processed_count}\n")
        body.append("Authorized:       ", style="warden.dim")
        body.append(f"{counters.known_count}\n", style="warden.known")
        body.append("Unauthorized:     ", style="warden.dim")
        body.append(
            f"{counters.new_count}\n",
            style="warden.rogue" if counters.new_count else "warden.known",
        )
        body.append("Elapsed:          ", style="warden.dim")
        body.append(report.elapsed_human)

        self._console.print(
            Panel(body, title="Run Summary", border_style="bright_cyan")
        )

    def display_unauthorized(self, report: RunReport) -> None:
        """Table of unauthorized access points, in scan order."""
        if not report.unauthorized:
            self._console.success("No unauthorized access points detected")
            return

        self._console.table(
            f"Unauthorized Access Points ({len(report.unauthorized)})",
            ["#", "BSSID", "SSID", "Last seen"],
            [
                (idx, ap.bssid, ap.ssid or "<hidden>", ap.last_seen or "-")
                for idx, ap in enumerate(report.unauthorized, start=1)
            ],
            styles=["dim", "bold red", "", "dim"],
        )

    def display_results(self, results: Sequence[ClassificationResult]) -> None:
        """Table with the verdict of every classified record (verbose mode)."""
        tbl = Table(
            title="Classified Access Points",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
        )
        tbl.add_column("BSSID")
        tbl.add_column("SSID")
        tbl.add_column("Registered SSID")
        tbl.add_column("Verdict")

        for result in results:
            style = _VERDICT_STYLES[result.verdict]
            tbl.add_row(
                Text(result.record.bssid),
                Text(result.record.ssid or "<hidden>"),
                Text(result.registered_ssid if result.registered_ssid is not None else "-"),
                Text(result.verdict.value, style=style),
            )
        self._console.print(tbl)

    def display_records(self, records: Sequence[ScanRecord], details: bool = False) -> None:
        """Table of parsed scan records, optionally with their raw blocks."""
        self._console.table(
            f"Scan Records ({len(records)})",
            ["#", "BSSID", "SSID", "Last seen"],
            [
                (idx, r.bssid, r.ssid or "<hidden>", r.last_seen or "-")
                for idx, r in enumerate(records, start=1)
            ],
        )
        if details:
            for record in records:
                self._console.print(
                    Panel(Text(record.details), title=record.bssid, border_style="dim")
                )

    def display_registry(self, table: AuthorizedRegistry) -> None:
        """Table of authorized access points."""
        self._console.table(
            f"Authorized Access Points ({len(table)})",
            ["BSSID", "SSID"],
            [(entry.bssid, entry.ssid) for entry in table.entries()],
        )
