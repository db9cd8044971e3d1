"""
Warden Core
============

Core engine, data models and error taxonomy for the Warden rogue
access point detector.
"""

from warden.core.errors import (
    DuplicateRegistryKey,
    MalformedLine,
    SourceUnavailable,
    WardenError,
)
from warden.core.models import (
    AuthorizedEntry,
    AuthorizedRegistry,
    ClassificationResult,
    RunAccumulator,
    RunCounters,
    RunReport,
    ScanRecord,
    UnauthorizedAP,
    Verdict,
)

__all__ = [
    "AuthorizedEntry",
    "AuthorizedRegistry",
    "ClassificationResult",
    "DuplicateRegistryKey",
    "MalformedLine",
    "RunAccumulator",
    "RunCounters",
    "RunReport",
    "ScanRecord",
    "SourceUnavailable",
    "UnauthorizedAP",
    "Verdict",
    "WardenError",
]
