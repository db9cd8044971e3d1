"""
Warden Collectors
==================

Input sources for the Warden detector.

Modules:
    sources -- Registry (file / URL) and scan dump (file / stdin) line sources
"""

from warden.collectors.sources import open_registry_source, open_scan_dump

__all__ = [
    "open_registry_source",
    "open_scan_dump",
]
