"""Core utilities for folio."""

from folio.core.config import (
    ConfigError,
    ContentSettings,
    find_site_root,
    get_site_root,
    load_settings,
)
from folio.core.log import setup_logging

__all__ = [
    # Config
    "ConfigError",
    "ContentSettings",
    "find_site_root",
    "get_site_root",
    "load_settings",
    # Logging
    "setup_logging",
]
