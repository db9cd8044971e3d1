"""
Warden Output
==============

Console display and report delivery for the Warden detector.

Modules:
    console -- Rich tables and panels
    report  -- Run report building, JSON / HTML generation and delivery
"""

from warden.output.console import WardenConsoleOutput
from warden.output.report import (
    ReportSink,
    WardenReportGenerator,
    build_report,
    format_duration,
)

__all__ = [
    "ReportSink",
    "WardenConsoleOutput",
    "WardenReportGenerator",
    "build_report",
    "format_duration",
]
