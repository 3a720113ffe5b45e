"""
Configuration and path management.

Provides site root detection for the CLI and the per-site content settings
read from the site's ``_config.yml``.

Resolution order for site root:
  1. FOLIO_SITE_ROOT environment variable (highest priority)
  2. Walk up from cwd looking for a _config.yml file
  3. Global config file (~/.config/folio/config.yaml) site_root key
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

SITE_CONFIG_NAME = "_config.yml"

DEFAULT_EXTENSIONS = (".md", ".markdown", ".html")
DEFAULT_EXCLUDE = ("vendor", "node_modules")


class ConfigError(Exception):
    """Raised for an unreadable or invalid site configuration."""


@dataclass(frozen=True)
class ContentSettings:
    """How a site's content is laid out and validated."""

    posts_dir: str = "_posts"
    drafts_dir: str = "_drafts"
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE
    strict: bool = True
    extra_fields: frozenset[str] = frozenset()
    # None means any non-empty layout is accepted
    layouts: frozenset[str] | None = None


def get_global_config_path() -> Path:
    """Return the path to the global folio config file.

    Respects XDG_CONFIG_HOME if set, otherwise defaults to
    ~/.config/folio/config.yaml.

    Returns:
        Path to global config file (may not exist).
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"
    return base / "folio" / "config.yaml"


def load_global_config() -> dict:
    """Load the global folio configuration.

    Returns:
        Configuration dict, or empty dict if file is missing or invalid.
    """
    config_path = get_global_config_path()
    if not config_path.is_file():
        return {}
    try:
        text = config_path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
        if isinstance(data, dict):
            return data
        return {}
    except (OSError, yaml.YAMLError):
        return {}


def _walk_up_for_site(start_path: Path) -> Path | None:
    """Walk up directory tree looking for a site config file."""
    current = start_path.resolve()
    while True:
        if (current / SITE_CONFIG_NAME).is_file():
            return current
        if current == current.parent:
            return None
        current = current.parent


def find_site_root(start_path: Path | None = None) -> Path:
    """Find the site root using 3-tier resolution.

    Args:
        start_path: Starting path for the upward walk (defaults to cwd)

    Returns:
        Path to site root

    Raises:
        FileNotFoundError: If no site root is found by any method
    """
    # Tier 1: FOLIO_SITE_ROOT environment variable
    env_root = os.environ.get("FOLIO_SITE_ROOT")
    if env_root:
        env_path = Path(env_root).expanduser().resolve()
        if env_path.is_dir():
            return env_path
        raise FileNotFoundError(f"FOLIO_SITE_ROOT={env_root} is not a directory.")

    # Tier 2: Walk up from start_path looking for _config.yml
    if start_path is None:
        start_path = Path.cwd()
    result = _walk_up_for_site(Path(start_path))
    if result is not None:
        return result

    # Tier 3: Global config file
    site_root_str = load_global_config().get("site_root")
    if site_root_str:
        global_path = Path(site_root_str).expanduser().resolve()
        if global_path.is_dir():
            return global_path
        raise FileNotFoundError(
            f"Global config site_root={site_root_str} is not a directory."
        )

    raise FileNotFoundError(
        f"Could not find {SITE_CONFIG_NAME} starting from {start_path}. "
        f"Pass --root, set FOLIO_SITE_ROOT, or configure site_root in "
        f"{get_global_config_path()}."
    )


@lru_cache(maxsize=1)
def get_site_root() -> Path:
    """Get the cached site root path."""
    return find_site_root()


def _string_list(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigError(f"'{key}' must be a string or a list of strings")


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def load_settings(site_root: Path) -> ContentSettings:
    """Read content settings from the site's ``_config.yml``.

    Only the top-level ``exclude`` list and the ``folio`` section are used;
    every other key belongs to the site generator.

    Args:
        site_root: Site root directory

    Returns:
        ContentSettings (defaults when the file is missing)

    Raises:
        ConfigError: If the file is unreadable, not YAML, or has bad values
    """
    config_path = Path(site_root) / SITE_CONFIG_NAME
    if not config_path.is_file():
        return ContentSettings()

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    if data is None:
        return ContentSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    section = data.get("folio") or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'folio' section in {config_path} must be a mapping")

    defaults = ContentSettings()
    exclude = tuple(_string_list(data.get("exclude"), "exclude")) or defaults.exclude

    strict = section.get("strict", defaults.strict)
    if not isinstance(strict, bool):
        raise ConfigError("'folio.strict' must be true or false")

    extensions = tuple(
        _normalize_extension(e)
        for e in _string_list(section.get("extensions"), "folio.extensions")
    ) or defaults.extensions

    layouts_raw = section.get("layouts")
    layouts = (
        frozenset(_string_list(layouts_raw, "folio.layouts"))
        if layouts_raw is not None
        else None
    )

    posts_dir = section.get("posts_dir", defaults.posts_dir)
    drafts_dir = section.get("drafts_dir", defaults.drafts_dir)
    for key, value in (("posts_dir", posts_dir), ("drafts_dir", drafts_dir)):
        if not isinstance(value, str) or not value or "/" in value:
            raise ConfigError(f"'folio.{key}' must be a single directory name")

    return ContentSettings(
        posts_dir=posts_dir,
        drafts_dir=drafts_dir,
        extensions=extensions,
        exclude=exclude,
        strict=strict,
        extra_fields=frozenset(
            _string_list(section.get("extra_fields"), "folio.extra_fields")
        ),
        layouts=layouts,
    )
