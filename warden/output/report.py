"""
Warden Run Report
==================

Builds the :class:`~warden.core.models.RunReport` of a run and delivers
it to its destination: a JSON document POSTed to an http(s) URL, or a
JSON / self-contained HTML file on disk.

JSON payload::

    {
      "tool": "warden",
      "version": "1.0.0",
      "generated_at": "...",
      "summary": {"processed": 2, "known": 1, "new": 1, ...,
                  "elapsed": "3 sec"},
      "unauthorized": [
        {"bssid": "11:22:33:44:55:66", "ssid": "EvilTwin", "lastSeen": ""}
      ]
    }
"""

from __future__ import annotations

import html as html_module
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from shared.logger import WardenLogger
from shared.network import WardenHTTP, WardenHTTPError, is_url

from warden import __version__
from warden.core.models import RunAccumulator, RunReport

logger = WardenLogger("warden.output.report")


# ---------------------------------------------------------------------------
# Elapsed time
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration as ``"1 h 2 min 3 sec"``.

    Hours appear from 3600 s, minutes when the remainder reaches 60 s;
    seconds are always present.  Fractions of a second are dropped.

    >>> format_duration(3723)
    '1 h 2 min 3 sec'
    >>> format_duration(3600)
    '1 h 0 sec'
    >>> format_duration(0.4)
    '0 sec'
    """
    remaining = max(0, int(seconds))
    parts: list[str] = []
    if remaining >= 3600:
        parts.append(f"{remaining // 3600} h")
        remaining %= 3600
    if remaining >= 60:
        parts.append(f"{remaining // 60} min")
        remaining %= 60
    parts.append(f"{remaining} sec")
    return " ".join(parts)


def build_report(
    accumulator: RunAccumulator,
    *,
    started_at: datetime,
    elapsed_seconds: float,
    scan_source: str,
    registry_source: Optional[str] = None,
    scan_available: bool = True,
) -> RunReport:
    """Freeze the accumulated run state into a :class:`RunReport`."""
    return RunReport(
        counters=accumulator.counters.model_copy(),
        unauthorized=list(accumulator.unauthorized),
        started_at=started_at,
        finished_at=datetime.now(timezone.utc),
        elapsed_seconds=elapsed_seconds,
        elapsed_human=format_duration(elapsed_seconds),
        registry_source=registry_source,
        scan_source=scan_source,
        scan_available=scan_available,
    )


def report_payload(report: RunReport) -> dict[str, Any]:
    """Structured form of *report* handed to the report sink."""
    counters = report.counters
    return {
        "tool": "warden",
        "version": __version__,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "scan_source": report.scan_source,
        "registry_source": report.registry_source,
        "scan_available": report.scan_available,
        "summary": {
            "processed": counters.processed_count,
            "known": counters.known_count,
            "new": counters.new_count,
            "lines_processed": counters.lines_processed,
            "skipped_lines": counters.skipped_lines,
            "registry_entries": counters.registry_entries,
            "elapsed_seconds": round(report.elapsed_seconds, 3),
            "elapsed": report.elapsed_human,
        },
        "unauthorized": [
            ap.model_dump(by_alias=True) for ap in report.unauthorized
        ],
    }


# ---------------------------------------------------------------------------
# HTML Report CSS
# ---------------------------------------------------------------------------

_HTML_CSS = """
body {
    font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
    background-color: #0d1117;
    color: #c9d1d9;
    margin: 0;
    padding: 20px;
}
.container { max-width: 1000px; margin: 0 auto; }
h1, h2 { color: #58a6ff; border-bottom: 1px solid #21262d; padding-bottom: 8px; }
.summary-grid {
    display: grid;
    grid-template-columns: repeat(auto-fit, minmax(160px, 1fr));
    gap: 16px;
    margin-bottom: 24px;
}
.summary-card {
    background: #161b22;
    border: 1px solid #30363d;
    border-radius: 8px;
    padding: 16px;
    text-align: center;
}
.summary-card .value { font-size: 2em; font-weight: bold; color: #58a6ff; }
.summary-card .label { color: #8b949e; font-size: 0.9em; }
table { width: 100%; border-collapse: collapse; background: #161b22; }
th { background: #21262d; color: #58a6ff; padding: 10px 12px; text-align: left; }
td { padding: 8px 12px; border-bottom: 1px solid #21262d; }
.rogue { color: #f85149; font-weight: bold; }
footer { text-align: center; color: #8b949e; margin-top: 40px; }
"""


# ---------------------------------------------------------------------------
# Report Generator
# ---------------------------------------------------------------------------


class WardenReportGenerator:
    """Writes a :class:`RunReport` as JSON or self-contained HTML."""

    def generate_json(self, report: RunReport, output_path: str) -> str:
        """Write the JSON payload; return the absolute output path."""
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(
            json.dumps(report_payload(report), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.info("JSON report generated: %s", output)
        return str(output.resolve())

    def generate_html(self, report: RunReport, output_path: str) -> str:
        """Write an HTML report; return the absolute output path."""
        e = html_module.escape
        now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        counters = report.counters

        parts: list[str] = [f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Warden Rogue Access Point Report</title>
    <style>{_HTML_CSS}</style>
</head>
<body>
<div class="container">
<h1>Warden - Rogue Access Point Report</h1>
<p>Scan: {e(report.scan_source)} | Registry: {e(report.registry_source or '-')}</p>
<h2>Summary</h2>
<div class="summary-grid">"""]

        cards = [
            (str(counters.processed_count), "Access Points"),
            (str(counters.known_count), "Authorized"),
            (str(counters.new_count), "Unauthorized"),
            (report.elapsed_human, "Duration"),
        ]
        for value, label in cards:
            parts.append(f"""
    <div class="summary-card">
        <div class="value">{e(value)}</div>
        <div class="label">{label}</div>
    </div>""")
        parts.append("</div>")

        if not report.scan_available:
            parts.append("<p class=\"rogue\">The scan dump could not be read.</p>")

        if report.unauthorized:
            parts.append("<h2>Unauthorized Access Points</h2>")
            parts.append("<table>\n<tr><th>#</th><th>BSSID</th><th>SSID</th><th>Last seen</th></tr>")
            for idx, ap in enumerate(report.unauthorized, start=1):
                ssid = e(ap.ssid) if ap.ssid else "<em>&lt;hidden&gt;</em>"
                parts.append(
                    f"<tr><td>{idx}</td><td class=\"rogue\">{e(ap.bssid)}</td>"
                    f"<td>{ssid}</td><td>{e(ap.last_seen or '-')}</td></tr>"
                )
            parts.append("</table>")
        else:
            parts.append("<p>No unauthorized access points detected.</p>")

        parts.append(f"""
<footer><p>Generated by Warden {e(__version__)} at {now}</p></footer>
</div>
</body>
</html>""")

        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text("\n".join(parts), encoding="utf-8")
        logger.info("HTML report generated: %s", output)
        return str(output.resolve())


# ---------------------------------------------------------------------------
# Report sink
# ---------------------------------------------------------------------------


class ReportSink:
    """Delivers a run report to a URL (POST) or a file.

    Delivery failures are logged and reported through the return value;
    they never invalidate the report itself.
    """

    def __init__(
        self,
        http: Optional[WardenHTTP] = None,
        generator: Optional[WardenReportGenerator] = None,
    ) -> None:
        self._http = http
        self._generator = generator or WardenReportGenerator()

    def deliver(self, report: RunReport, destination: str) -> bool:
        """Send *report* to *destination*; return ``True`` on success."""
        if is_url(destination):
            return self._post(report, destination)

        try:
            if destination.lower().endswith((".html", ".htm")):
                self._generator.generate_html(report, destination)
            else:
                self._generator.generate_json(report, destination)
        except OSError as exc:
            logger.error("Could not write report to %s: %s", destination, exc)
            return False
        return True

    def _post(self, report: RunReport, url: str) -> bool:
        client = self._http or WardenHTTP()
        try:
            client.post_json(url, report_payload(report))
        except WardenHTTPError as exc:
            logger.error("Could not deliver report to %s: %s", url, exc)
            return False
        finally:
            if self._http is None:
                client.close()
        logger.info(
            "Reported %d unauthorized AP(s) to %s", len(report.unauthorized), url
        )
        return True
