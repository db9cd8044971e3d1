"""
Warden Core Data Models
========================

Pydantic-based domain models for the Warden rogue access point detector:
authorized registry entries, access point records parsed from a scan
dump, classification verdicts, run counters and the run report.

The authorized registry itself is a plain read-only mapping rather than
a model: it is a lookup structure, not a record.

References:
    - Pydantic v2 Documentation. https://docs.pydantic.dev/latest/
    - Evans, E. (2003). Domain-Driven Design. Addison-Wesley.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from warden.core.errors import DuplicateRegistryKey
from warden.core.hwaddr import is_hw_address, normalize_bssid


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Verdict(str, enum.Enum):
    """Outcome of classifying one observed access point."""

    AUTHORIZED = "Authorized"
    UNAUTHORIZED = "Unauthorized"


# ---------------------------------------------------------------------------
# Authorized registry
# ---------------------------------------------------------------------------


class AuthorizedEntry(BaseModel):
    """One permitted access point.

    Attributes:
        bssid: Hardware address, normalised to lower-case colon notation.
        ssid: Network name declared for this BSSID (informational only).
    """

    model_config = ConfigDict(frozen=True)

    bssid: str
    ssid: str = ""

    @field_validator("bssid")
    @classmethod
    def _normalize(cls, v: str) -> str:
        if not is_hw_address(v):
            raise ValueError(f"not a hardware address: {v!r}")
        return normalize_bssid(v)


class AuthorizedRegistry(Mapping[str, str]):
    """Read-only ``bssid -> ssid`` lookup table.

    Keys are normalised on insertion and on lookup, so
    ``"AA:BB:CC:DD:EE:FF" in registry`` and
    ``"aa-bb-cc-dd-ee-ff" in registry`` agree.  The first value stored
    for a key is kept; re-adding a key raises
    :class:`~warden.core.errors.DuplicateRegistryKey`.
    """

    def __init__(self, entries: Optional[list[AuthorizedEntry]] = None) -> None:
        self._table: dict[str, str] = {}
        for entry in entries or []:
            if entry.bssid not in self._table:
                self._table[entry.bssid] = entry.ssid

    def add(self, entry: AuthorizedEntry) -> None:
        """Insert *entry*; raises DuplicateRegistryKey if already present."""
        if entry.bssid in self._table:
            raise DuplicateRegistryKey(entry.bssid)
        self._table[entry.bssid] = entry.ssid

    def merge(self, other: Mapping[str, str]) -> int:
        """Add every key of *other* not already present; first value wins.

        Returns:
            Number of keys added.
        """
        added = 0
        for bssid, ssid in other.items():
            key = normalize_bssid(bssid)
            if key not in self._table:
                self._table[key] = ssid
                added += 1
        return added

    def entries(self) -> list[AuthorizedEntry]:
        """Registry content as entries, in load order."""
        return [AuthorizedEntry(bssid=b, ssid=s) for b, s in self._table.items()]

    def __getitem__(self, bssid: str) -> str:
        return self._table[normalize_bssid(bssid)]

    def __contains__(self, bssid: object) -> bool:
        if not isinstance(bssid, str):
            return False
        return normalize_bssid(bssid) in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"AuthorizedRegistry({len(self._table)} entries)"


# ---------------------------------------------------------------------------
# Scan records
# ---------------------------------------------------------------------------


class ScanRecord(BaseModel):
    """One access point block parsed from a scan dump.

    Attributes:
        bssid: Hardware address as written in the ``BSS`` header line.
        ssid: Broadcast network name; empty for hidden networks.
        last_seen: Opaque ``last seen:`` text, e.g. ``"10 ms ago"``.
        details: Verbatim block text (header plus every body line).
    """

    model_config = ConfigDict(populate_by_name=True)

    bssid: str
    ssid: str = ""
    last_seen: str = Field(default="", alias="lastSeen")
    details: str = ""

    @property
    def normalized_bssid(self) -> str:
        return normalize_bssid(self.bssid)


class UnauthorizedAP(BaseModel):
    """An access point whose BSSID is absent from the registry."""

    model_config = ConfigDict(populate_by_name=True)

    bssid: str
    ssid: str = ""
    last_seen: str = Field(default="", alias="lastSeen")

    @classmethod
    def from_record(cls, record: ScanRecord) -> UnauthorizedAP:
        return cls(bssid=record.bssid, ssid=record.ssid, last_seen=record.last_seen)


class ClassificationResult(BaseModel):
    """Verdict for one scan record.

    Attributes:
        record: The classified record.
        verdict: Authorized or Unauthorized.
        registered_ssid: SSID declared in the registry for an authorized
            BSSID; ``None`` for unauthorized records.
    """

    record: ScanRecord
    verdict: Verdict
    registered_ssid: Optional[str] = None

    @property
    def is_authorized(self) -> bool:
        return self.verdict == Verdict.AUTHORIZED


# ---------------------------------------------------------------------------
# Run state
# ---------------------------------------------------------------------------


class RunCounters(BaseModel):
    """Per-invocation counters; never persisted."""

    lines_processed: int = 0
    skipped_lines: int = 0
    registry_lines: int = 0
    registry_entries: int = 0
    known_count: int = 0
    new_count: int = 0

    @property
    def processed_count(self) -> int:
        """Number of classified access points."""
        return self.known_count + self.new_count


class RunAccumulator(BaseModel):
    """Mutable state threaded through one run: counters plus the ordered
    sequence of unauthorized access points.  Authorized records are only
    counted."""

    counters: RunCounters = Field(default_factory=RunCounters)
    unauthorized: list[UnauthorizedAP] = Field(default_factory=list)


class RunReport(BaseModel):
    """Everything a run hands over to the report sink.

    Attributes:
        counters: Final run counters.
        unauthorized: Unauthorized access points in scan order.
        started_at: UTC start of the run.
        finished_at: UTC end of the run.
        elapsed_seconds: Wall-clock duration.
        elapsed_human: Duration formatted as ``"1 h 2 min 3 sec"``.
        registry_source: Registry location, if any.
        scan_source: Scan dump location.
        scan_available: ``False`` when the scan dump could not be read.
    """

    counters: RunCounters = Field(default_factory=RunCounters)
    unauthorized: list[UnauthorizedAP] = Field(default_factory=list)
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    finished_at: Optional[datetime] = None
    elapsed_seconds: float = 0.0
    elapsed_human: str = "0 sec"
    registry_source: Optional[str] = None
    scan_source: str = ""
    scan_available: bool = True

    @property
    def known_count(self) -> int:
        return self.counters.known_count

    @property
    def new_count(self) -> int:
        return self.counters.new_count

    @property
    def processed_count(self) -> int:
        return self.counters.processed_count
