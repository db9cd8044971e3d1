"""
Warden Error Taxonomy
======================

Every anomaly the detector can meet is recoverable; these exceptions
make the recovery paths explicit instead of relying on loose matching.

    WardenError
    ├── SourceUnavailable     registry / scan source cannot be opened
    ├── MalformedLine         a line fails its expected pattern
    └── DuplicateRegistryKey  a BSSID is declared twice in the registry
"""

from __future__ import annotations

from typing import Optional


class WardenError(Exception):
    """Base class for all Warden errors."""


class SourceUnavailable(WardenError):
    """A registry or scan-dump source could not be opened or fetched."""

    def __init__(self, source: str, reason: str = "") -> None:
        self.source = source
        self.reason = reason
        msg = f"Source unavailable: {source}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class MalformedLine(WardenError):
    """A line does not match the pattern expected at its position."""

    def __init__(
        self,
        line: str,
        reason: str = "",
        line_number: Optional[int] = None,
    ) -> None:
        self.line = line
        self.reason = reason
        self.line_number = line_number
        where = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"Malformed {where}{reason or 'unrecognised'}: {line!r}")


class DuplicateRegistryKey(WardenError):
    """A BSSID already present in the registry was declared again."""

    def __init__(self, bssid: str) -> None:
        self.bssid = bssid
        super().__init__(f"Duplicate registry key: {bssid}")
