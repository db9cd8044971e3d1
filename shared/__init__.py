"""
APWarden Shared Module
======================

Common utilities and configuration management shared by the APWarden
tool packages: configuration, structured logging, console presentation
and the HTTP client.
"""

from shared.config import AppConfig, get_config

__all__ = ["AppConfig", "get_config"]
