"""
Front matter parsing.

Splits a content file into its YAML front matter and body, and parses the
date formats blog front matter uses in practice.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml
from frontmatter.default_handlers import YAMLHandler

from folio.content.errors import ValidationError

_handler = YAMLHandler()

# Filename convention for posts: YYYY-MM-DD-slug
POST_FILENAME = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)$")

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%d %H:%M:%S %z",
)


def has_front_matter(text: str) -> bool:
    """Check whether text opens with a front matter delimiter."""
    return bool(_handler.detect(text))


def split_document(
    text: str, identifier: str, source: Path
) -> tuple[dict[str, Any] | None, str]:
    """Split raw file content into front matter and body.

    Args:
        text: Raw file content
        identifier: Identifier the document would get (for error messages)
        source: File path (for error messages)

    Returns:
        Tuple of (front matter dict, body). The dict is None when the file
        has no front matter block at all.

    Raises:
        ValidationError: If the block is unclosed, not valid YAML, or not a mapping
    """
    if not has_front_matter(text):
        return None, text

    try:
        fm_text, body = _handler.split(text)
    except ValueError:
        raise ValidationError(identifier, source, "front matter is never closed")

    try:
        loaded = _handler.load(fm_text)
    except yaml.YAMLError as e:
        raise ValidationError(identifier, source, f"invalid YAML in front matter: {e}")

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValidationError(
            identifier, source, "front matter must be a mapping of keys to values"
        )

    return loaded, body.lstrip("\r\n")


def parse_date(value: Any) -> date:
    """Parse a front matter date value into a calendar date.

    Accepts YAML date/datetime values and strings like ``2016-04-13``,
    ``2016-04-13 10:30:00 +0000`` or ISO 8601. The date is kept as written,
    without converting between timezones.

    Raises:
        ValueError: If the value is not a recognisable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"not a date: {value!r}")

    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValueError(f"not a date: {value!r}") from None


def split_post_filename(stem: str) -> tuple[date | None, str]:
    """Split a ``YYYY-MM-DD-slug`` stem into its date and slug.

    Returns:
        (date, slug), or (None, stem) when the stem has no date prefix

    Raises:
        ValueError: If the prefix looks like a date but is not a real one
    """
    match = POST_FILENAME.match(stem)
    if not match:
        return None, stem
    year, month, day, slug = match.groups()
    return date(int(year), int(month), int(day)), slug
