"""
Warden Parsers
===============

Input parsing for the Warden detector: the authorized registry format
and the ``iw`` scan dump format.
"""

from warden.parsers.registry import RegistryLoader, parse_registry_line
from warden.parsers.scan_dump import ParserState, ScanDumpParser

__all__ = [
    "ParserState",
    "RegistryLoader",
    "ScanDumpParser",
    "parse_registry_line",
]
