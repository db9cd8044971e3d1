"""
Scan Dump Parser
=================

Line-driven state machine that segments the text output of
``iw <dev> scan`` into one :class:`~warden.core.models.ScanRecord` per
access point.

A dump looks like::

    BSS aa:bb:cc:dd:ee:ff(on wlan0) -- associated
            TSF: 1146385213 usec (0d, 00:19:06)
            freq: 2437
            last seen: 10 ms ago
            SSID: HomeNet
            BSS Load:
                     * station count: 2
    BSS 11:22:33:44:55:66(on wlan0)
            SSID: EvilTwin

Blocks have no terminator: a block ends at the next ``BSS`` header or at
end of input.  The parser has two states:

    OUTSIDE    before the first header; lines are counted and dropped
    IN_RECORD  accumulating the current block

and is strictly single-pass, holding only the block being accumulated.
"""

from __future__ import annotations

import enum
import re
from typing import Iterable, Iterator, Optional

from shared.logger import WardenLogger

from warden.core.errors import MalformedLine
from warden.core.hwaddr import is_hw_address
from warden.core.models import ScanRecord

logger = WardenLogger("warden.parsers.scan_dump")

# Header must start in column 0; indented "BSS Load:" lines are body text.
_HEADER_PATTERN = re.compile(r"^BSS\s+(?P<bssid>[^\s(]+)", re.IGNORECASE)
_SSID_PATTERN = re.compile(r"^\s*SSID:[ \t]?(?P<value>.*)$", re.IGNORECASE)
_LAST_SEEN_PATTERN = re.compile(r"^\s*last seen:\s*(?P<value>.*)$", re.IGNORECASE)


class ParserState(str, enum.Enum):
    """States of the scan dump parser."""

    OUTSIDE = "outside"
    IN_RECORD = "in_record"


def match_header(line: str) -> Optional[str]:
    """Return the BSSID if *line* opens a new record, else ``None``.

    Raises:
        MalformedLine: If the line has the header shape but its address
            is not a valid hardware address.
    """
    match = _HEADER_PATTERN.match(line)
    if match is None:
        return None
    bssid = match.group("bssid")
    if not is_hw_address(bssid):
        raise MalformedLine(line, f"invalid BSS address {bssid!r}")
    return bssid


class _RecordBuilder:
    """The block currently being accumulated."""

    __slots__ = ("bssid", "ssid", "last_seen", "lines")

    def __init__(self, bssid: str) -> None:
        self.bssid = bssid
        self.ssid = ""
        self.last_seen = ""
        self.lines: list[str] = []

    def build(self) -> ScanRecord:
        return ScanRecord(
            bssid=self.bssid,
            ssid=self.ssid,
            last_seen=self.last_seen,
            details="\n".join(self.lines),
        )


class ScanDumpParser:
    """Streaming two-state parser for ``iw`` scan dumps.

    Usage::

        parser = ScanDumpParser()
        for record in parser.parse(lines):
            ...
        parser.skipped_lines

    or, driven one line at a time::

        for line in lines:
            record = parser.feed(line)
            if record is not None:
                ...
        last = parser.finish()

    Within a block, a repeated ``SSID:`` or ``last seen:`` line overrides
    the earlier one.
    """

    def __init__(self) -> None:
        self.state = ParserState.OUTSIDE
        self.lines_processed = 0
        self.skipped_lines = 0
        self.records_emitted = 0
        self.malformed_headers = 0
        self._current: Optional[_RecordBuilder] = None

    # ------------------------------------------------------------------ #
    #  Driving the machine
    # ------------------------------------------------------------------ #

    def feed(self, line: str) -> Optional[ScanRecord]:
        """Consume one line; return the record it closed, if any."""
        line = line.rstrip("\r\n")
        self.lines_processed += 1

        bssid = self._header_guard(line)
        if bssid is not None:
            finished = self._close_record()
            self._open_record(bssid, line)
            return finished

        if self.state is ParserState.OUTSIDE:
            self.skipped_lines += 1
            return None

        self._absorb(line)
        return None

    def finish(self) -> Optional[ScanRecord]:
        """Signal end of input; return the still-open record, if any."""
        return self._close_record()

    def parse(self, lines: Iterable[str]) -> Iterator[ScanRecord]:
        """Yield every record in *lines*, the trailing one included."""
        for line in lines:
            record = self.feed(line)
            if record is not None:
                yield record
        last = self.finish()
        if last is not None:
            yield last

    # ------------------------------------------------------------------ #
    #  Transition guards and actions
    # ------------------------------------------------------------------ #

    def _header_guard(self, line: str) -> Optional[str]:
        try:
            return match_header(line)
        except MalformedLine as exc:
            self.malformed_headers += 1
            logger.debug("Not a record header (line %d): %s", self.lines_processed, exc)
            return None

    def _open_record(self, bssid: str, header: str) -> None:
        self._current = _RecordBuilder(bssid)
        self._current.lines.append(header)
        self.state = ParserState.IN_RECORD

    def _absorb(self, line: str) -> None:
        current = self._current
        assert current is not None
        current.lines.append(line)

        ssid = _SSID_PATTERN.match(line)
        if ssid is not None:
            current.ssid = ssid.group("value")
            return

        last_seen = _LAST_SEEN_PATTERN.match(line)
        if last_seen is not None:
            current.last_seen = last_seen.group("value")

    def _close_record(self) -> Optional[ScanRecord]:
        if self.state is not ParserState.IN_RECORD or self._current is None:
            return None
        record = self._current.build()
        self._current = None
        self.state = ParserState.OUTSIDE
        self.records_emitted += 1
        return record
