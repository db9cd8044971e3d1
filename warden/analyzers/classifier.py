"""
Warden Access Point Classifier
================================

Decides, for every parsed scan record, whether the access point is
authorized (its BSSID is in the registry) or unauthorized (rogue).

Matching is by BSSID only, compared in normalised lower-case form.  The
observed SSID is never compared with the registered one, so a known
BSSID broadcasting an unexpected SSID is still authorized.  SSID
spoofing on a registered radio therefore goes unreported.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable, Optional

from shared.logger import WardenLogger

from warden.core.models import (
    AuthorizedRegistry,
    ClassificationResult,
    RunAccumulator,
    ScanRecord,
    UnauthorizedAP,
    Verdict,
)

logger = WardenLogger("warden.analyzers.classifier")


def _as_registry(table: Mapping[str, str]) -> AuthorizedRegistry:
    if isinstance(table, AuthorizedRegistry):
        return table
    registry = AuthorizedRegistry()
    registry.merge(table)
    return registry


def classify(record: ScanRecord, table: Mapping[str, str]) -> ClassificationResult:
    """Classify *record* against *table* without side effects.

    *table* may be an :class:`AuthorizedRegistry` or any plain mapping;
    plain mappings have their keys normalised first.
    """
    table = _as_registry(table)
    key = record.normalized_bssid
    if key in table:
        return ClassificationResult(
            record=record,
            verdict=Verdict.AUTHORIZED,
            registered_ssid=table[key],
        )
    return ClassificationResult(record=record, verdict=Verdict.UNAUTHORIZED)


class Classifier:
    """Classifies records and accumulates the results of a run.

    Usage::

        acc = RunAccumulator()
        classifier = Classifier(table, acc)
        for record in parser.parse(lines):
            classifier.classify(record)
        acc.counters.new_count, acc.unauthorized
    """

    def __init__(
        self,
        table: Mapping[str, str],
        accumulator: Optional[RunAccumulator] = None,
    ) -> None:
        self._table = _as_registry(table)
        self.accumulator = accumulator if accumulator is not None else RunAccumulator()

    def classify(self, record: ScanRecord) -> ClassificationResult:
        """Classify *record* and record the outcome in the accumulator."""
        result = classify(record, self._table)
        counters = self.accumulator.counters

        if result.is_authorized:
            counters.known_count += 1
            logger.debug("%s -> %r is authorized", record.bssid, record.ssid)
            if result.registered_ssid and record.ssid != result.registered_ssid:
                logger.debug(
                    "%s broadcasts %r but is registered as %r",
                    record.bssid, record.ssid, result.registered_ssid,
                )
        else:
            counters.new_count += 1
            self.accumulator.unauthorized.append(UnauthorizedAP.from_record(record))
            logger.warning("%s -> %r is unauthorized", record.bssid, record.ssid)

        return result

    def classify_all(self, records: Iterable[ScanRecord]) -> RunAccumulator:
        """Classify every record of *records*; return the accumulator."""
        for record in records:
            self.classify(record)
        return self.accumulator
