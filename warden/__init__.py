"""
APWarden Warden -- Rogue Access Point Detector
===============================================

Compares a captured wireless scan dump (``iw <dev> scan`` output) against
a registry of authorized access points and reports every access point
whose BSSID is not registered.

Modules:
    - warden.core.engine: Run orchestrator
    - warden.core.models: Pydantic data models
    - warden.core.errors: Error taxonomy
    - warden.parsers: Registry and scan-dump parsers
    - warden.analyzers: Authorized / unauthorized classification
    - warden.collectors: Registry and scan-dump line sources
    - warden.output: Console and report output
    - warden.cli: Click-based command-line interface
"""

__version__ = "1.0.0"
__tool_name__ = "warden"
