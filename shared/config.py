"""
APWarden Configuration Management
==================================

Centralized configuration for the APWarden toolkit using Python
dataclasses and TOML-based persistence.

Configuration is kept apart from code: every value has a dataclass
default, a TOML file may override any subset of them, and the CLI
overrides the file.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"


# ========================== Tool-Specific Config ===========================


@dataclass(frozen=False, slots=True)
class WardenConfig:
    """Configuration for Warden -- Rogue Access Point Detector.

    Locations of the authorized-AP registry, the scan dump and the report
    destination, plus the HTTP parameters used when any of them is a URL.
    Empty strings mean "not configured".
    """

    registry_source: str = ""
    scan_file: str = ""
    report_destination: str = ""
    registry_encoding: str = "utf-8"
    scan_encoding: str = "utf-8"
    http_timeout: float = 30.0
    http_retries: int = 3
    strict: bool = False


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity and log file."""

    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class AppConfig:
    """Master configuration aggregating tool and global settings.

    Usage:
        >>> config = AppConfig.load()                  # from default path
        >>> config = AppConfig.load("custom.toml")     # from custom path
        >>> print(config.warden.http_timeout)
        30.0
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    warden: WardenConfig = field(default_factory=WardenConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> AppConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root.  Missing keys fall back to dataclass defaults.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`AppConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            warden=cls._build_section(WardenConfig, raw.get("warden", {})),
        )

    # ------------------------------------------------------------------ #
    #  Serialisation helpers
    # ------------------------------------------------------------------ #

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are silently ignored so that
        forward-compatible config files do not break older code.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


# ========================= Module-level convenience ========================

def get_config(path: str | Path | None = None) -> AppConfig:
    """Module-level convenience wrapper around :meth:`AppConfig.load`.

    Caches the result so that repeated imports share one instance.
    """
    if not hasattr(get_config, "_cached") or path is not None:
        get_config._cached = AppConfig.load(path)  # type: ignore[attr-defined]
    return get_config._cached  # type: ignore[attr-defined]
