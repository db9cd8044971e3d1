"""
Authorized Registry Loader
===========================

Builds the ``bssid -> ssid`` lookup table of authorized access points
from a line-oriented source.

Registry line format::

    # comment lines start with '#', blank lines are ignored
    aa:bb:cc:dd:ee:ff;HomeNet
    AA-BB-CC-DD-EE-01;Guest Network
    aabb.ccdd.ee02;

The first ``;`` separates the hardware address from the SSID; the SSID
is the rest of the line, trimmed, and may be empty or contain further
``;`` characters.  Loading favours availability over strictness: lines
that do not match are skipped, duplicate BSSIDs keep their first value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from shared.logger import WardenLogger
from shared.network import WardenHTTP

from warden.collectors.sources import open_registry_source
from warden.core.errors import DuplicateRegistryKey, MalformedLine
from warden.core.hwaddr import HW_ADDR_PATTERN
from warden.core.models import AuthorizedEntry, AuthorizedRegistry

logger = WardenLogger("warden.parsers.registry")

_COMMENT_PATTERN = re.compile(r"^\s*#")
_ENTRY_PATTERN = re.compile(
    rf"^\s*(?P<bssid>{HW_ADDR_PATTERN})\s*;(?P<ssid>.*)$",
    re.IGNORECASE,
)


def parse_registry_line(
    line: str, line_number: Optional[int] = None
) -> Optional[AuthorizedEntry]:
    """Parse one registry line.

    Returns:
        The entry, or ``None`` for blank and comment lines.

    Raises:
        MalformedLine: If the line is neither ignorable nor an entry.
    """
    if not line.strip() or _COMMENT_PATTERN.match(line):
        return None

    match = _ENTRY_PATTERN.match(line)
    if match is None:
        raise MalformedLine(line, "expected 'hardware-address;ssid'", line_number)

    return AuthorizedEntry(
        bssid=match.group("bssid"),
        ssid=match.group("ssid").strip(),
    )


@dataclass
class RegistryStats:
    """Counters for the most recent load."""

    lines_read: int = 0
    entries: int = 0
    ignored: int = 0
    malformed: int = 0
    duplicates: int = 0


class RegistryLoader:
    """Loads authorized access points from a file, URL or line iterable.

    Usage::

        loader = RegistryLoader()
        table, lines_read = loader.load("authorized.txt")
        "aa:bb:cc:dd:ee:ff" in table
    """

    def __init__(
        self,
        http: Optional[WardenHTTP] = None,
        encoding: str = "utf-8",
    ) -> None:
        self._http = http
        self._encoding = encoding
        self.stats = RegistryStats()

    def load(self, source: str) -> tuple[AuthorizedRegistry, int]:
        """Load the registry from a local path or http(s) URL.

        Raises:
            SourceUnavailable: If the source cannot be opened or fetched.
        """
        with logger.operation("registry_load"):
            with open_registry_source(
                source, http=self._http, encoding=self._encoding
            ) as lines:
                table, lines_read = self.load_lines(lines)
            logger.info(
                "Loaded %d authorized AP(s) from %s (%d line(s))",
                len(table), source, lines_read,
            )
            if not table:
                logger.warning(
                    "Registry %s has no usable entries; every AP will be "
                    "reported as unauthorized",
                    source,
                )
        return table, lines_read

    def load_lines(self, lines: Iterable[str]) -> tuple[AuthorizedRegistry, int]:
        """Build a registry from an iterable of lines (no I/O)."""
        table = AuthorizedRegistry()
        stats = RegistryStats()

        for number, line in enumerate(lines, start=1):
            stats.lines_read += 1
            try:
                entry = parse_registry_line(line, number)
            except MalformedLine as exc:
                stats.malformed += 1
                logger.debug("Skipping registry %s", exc)
                continue

            if entry is None:
                stats.ignored += 1
                continue

            try:
                table.add(entry)
            except DuplicateRegistryKey as exc:
                stats.duplicates += 1
                logger.debug("Keeping first value: %s", exc)
                continue
            stats.entries += 1

        self.stats = stats
        logger.debug(
            "Registry parse: %d line(s), %d entr(ies), %d malformed, "
            "%d duplicate(s)",
            stats.lines_read, stats.entries, stats.malformed, stats.duplicates,
        )
        return table, stats.lines_read
