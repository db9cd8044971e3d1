"""
Warden Engine
==============

Central orchestration engine for the Warden rogue access point detector.

The engine follows a pipeline architecture:
    1. Registry: load the authorized access points (file or URL)
    2. Parse + classify: stream the scan dump through the parser and
       classify every record as it is closed
    3. Synthesis: freeze counters and unauthorized APs into a RunReport
    4. Output: console display and report delivery

All run state (registry table, counters, unauthorized list) is created
inside :meth:`WardenEngine.run` and handed from stage to stage; nothing
is kept in module globals.  Every anomaly degrades instead of aborting:
an unavailable registry yields an empty table, an unavailable scan dump
yields a report of whatever was classified before the failure.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Optional

from shared.config import AppConfig
from shared.console import WardenConsole
from shared.logger import WardenLogger
from shared.network import WardenHTTP

from warden.analyzers.classifier import Classifier
from warden.collectors.sources import open_scan_dump
from warden.core.errors import SourceUnavailable
from warden.core.models import (
    AuthorizedRegistry,
    ClassificationResult,
    RunAccumulator,
    RunReport,
    ScanRecord,
)
from warden.output.console import WardenConsoleOutput
from warden.output.report import ReportSink, build_report
from warden.parsers.registry import RegistryLoader
from warden.parsers.scan_dump import ScanDumpParser

logger = WardenLogger("warden.core.engine")


class WardenEngine:
    """Central orchestration engine for Warden.

    Usage::

        with WardenEngine() as engine:
            report = engine.run("scan.txt", registry_source="authorized.txt")
            report.new_count, report.unauthorized
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        console: Optional[WardenConsole] = None,
        http: Optional[WardenHTTP] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Application configuration. Uses defaults if None.
            console: WardenConsole for output. Creates new if None.
            http: HTTP client for URL registries and report delivery.
                Built from the configuration if None.
        """
        self._config = config or AppConfig()
        self._console = console or WardenConsole()
        self._output = WardenConsoleOutput(self._console)

        settings = self._config.warden
        self._owns_http = http is None
        self._http = http or WardenHTTP(
            timeout=settings.http_timeout,
            max_retries=settings.http_retries,
        )
        self._registry_loader = RegistryLoader(
            http=self._http, encoding=settings.registry_encoding
        )
        self._sink = ReportSink(http=self._http)

    def __enter__(self) -> WardenEngine:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the HTTP client if the engine created it."""
        if self._owns_http:
            self._http.close()

    # ------------------------------------------------------------------ #
    #  Stages
    # ------------------------------------------------------------------ #

    def load_registry(
        self, source: Optional[str]
    ) -> tuple[AuthorizedRegistry, int]:
        """Load the registry, degrading to an empty table on failure."""
        if not source:
            logger.warning("No registry given; every AP will be reported as unauthorized")
            return AuthorizedRegistry(), 0
        try:
            return self._registry_loader.load(source)
        except SourceUnavailable as exc:
            logger.error("%s; continuing with an empty registry", exc)
            return AuthorizedRegistry(), 0

    def inspect(self, scan_source: str) -> list[ScanRecord]:
        """Parse *scan_source* without classification.

        Raises:
            SourceUnavailable: If the scan dump cannot be opened or read.
        """
        parser = ScanDumpParser()
        with open_scan_dump(
            scan_source, encoding=self._config.warden.scan_encoding
        ) as lines:
            records = list(parser.parse(lines))
        logger.info(
            "Parsed %d record(s) from %d line(s) of %s",
            len(records), parser.lines_processed, scan_source,
        )
        return records

    # ------------------------------------------------------------------ #
    #  Full run
    # ------------------------------------------------------------------ #

    def run(
        self,
        scan_source: str,
        registry_source: Optional[str] = None,
        output: Optional[str] = None,
        verbose: bool = False,
    ) -> RunReport:
        """Detect unauthorized access points in a scan dump.

        Args:
            scan_source: Scan dump path, or ``-`` for stdin.
            registry_source: Registry path or URL; ``None`` means empty.
            output: Report destination (URL, ``.html`` or JSON path).
            verbose: Also display the verdict of every access point.

        Returns:
            The RunReport of this run.
        """
        start_time = time.monotonic()
        started_at = datetime.now(timezone.utc)
        self._output.display_banner()

        accumulator = RunAccumulator()
        counters = accumulator.counters

        # Phase 1: Registry
        with logger.timed("registry"):
            table, lines_read = self.load_registry(registry_source)
        counters.registry_lines = lines_read
        counters.registry_entries = len(table)

        # Phase 2: Parse + classify
        classifier = Classifier(table, accumulator)
        parser = ScanDumpParser()
        results: list[ClassificationResult] = []
        scan_available = True

        with logger.operation("classify"), logger.timed("scan dump"):
            try:
                with open_scan_dump(
                    scan_source, encoding=self._config.warden.scan_encoding
                ) as lines:
                    for record in parser.parse(lines):
                        result = classifier.classify(record)
                        if verbose:
                            results.append(result)
            except SourceUnavailable as exc:
                # Records classified before a mid-stream failure stay counted.
                scan_available = False
                logger.error(
                    "%s; stopping after %d line(s) and %d record(s)",
                    exc, parser.lines_processed, parser.records_emitted,
                )

        counters.lines_processed = parser.lines_processed
        counters.skipped_lines = parser.skipped_lines
        logger.debug(
            "Processed %d line(s), skipped %d line(s)",
            parser.lines_processed, parser.skipped_lines,
        )
        logger.info(
            "Identified %d known and %d new AP(s)",
            counters.known_count, counters.new_count,
        )

        # Phase 3: Synthesis
        elapsed = time.monotonic() - start_time
        report = build_report(
            accumulator,
            started_at=started_at,
            elapsed_seconds=elapsed,
            scan_source=scan_source,
            registry_source=registry_source,
            scan_available=scan_available,
        )
        logger.info(
            "Processed %d AP(s) in %s", report.processed_count, report.elapsed_human
        )

        # Phase 4: Output
        self._console.section("Results")
        if verbose and results:
            self._output.display_results(results)
        self._output.display_unauthorized(report)
        self._output.display_summary(report)

        if output:
            if self._sink.deliver(report, output):
                self._console.info(f"Report delivered to {output}")
            else:
                self._console.error(f"Report delivery to {output} failed")

        return report
