"""
Validated front matter record.

Maps the open-ended front matter dictionary onto a fixed record so that
missing, malformed and unexpected fields are caught at load time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from folio.content.errors import ValidationError
from folio.content.frontmatter import parse_date
from folio.core.config import ContentSettings

logger = logging.getLogger(__name__)

# Keys mapped onto DocumentMeta attributes
CORE_FIELDS = frozenset(
    {"layout", "title", "date", "categories", "category", "tags", "slug", "published"}
)

# Keys kept verbatim in DocumentMeta.extra
PASSTHROUGH_FIELDS = frozenset(
    {"permalink", "excerpt", "description", "author", "comments"}
)


@dataclass(frozen=True)
class DocumentMeta:
    """Front matter of one document after validation."""

    layout: str
    title: str
    publication_date: date | None = None
    categories: frozenset[str] = frozenset()
    tags: frozenset[str] = frozenset()
    slug: str | None = None
    published: bool = True
    extra: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )


def _labels(value: Any, key: str, identifier: str, source: Path) -> set[str]:
    """Coerce a categories/tags value into a set of labels.

    A string is split on whitespace; list items are taken as text.
    """
    if value is None:
        return set()
    if isinstance(value, str):
        return set(value.split())
    if isinstance(value, list):
        labels = set()
        for item in value:
            if isinstance(item, (dict, list)) or item is None:
                raise ValidationError(
                    identifier, source, f"'{key}' entries must be plain values"
                )
            text = str(item).strip()
            if text:
                labels.add(text)
        return labels
    raise ValidationError(identifier, source, f"'{key}' must be a string or a list")


def _required_text(value: Any, key: str, identifier: str, source: Path) -> str:
    if value is None:
        raise ValidationError(identifier, source, f"missing required field '{key}'")
    if isinstance(value, (dict, list, bool)):
        raise ValidationError(identifier, source, f"'{key}' must be text")
    text = str(value).strip()
    if not text:
        raise ValidationError(identifier, source, f"'{key}' must not be empty")
    return text


def parse_meta(
    front_matter: Mapping[str, Any],
    *,
    identifier: str,
    source: Path,
    settings: ContentSettings,
) -> DocumentMeta:
    """Validate raw front matter and build a DocumentMeta.

    Args:
        front_matter: Parsed YAML mapping
        identifier: Provisional identifier (for error messages)
        source: File path (for error messages)
        settings: Site content settings

    Raises:
        ValidationError: On any missing, malformed or unknown field
    """
    allowed = CORE_FIELDS | PASSTHROUGH_FIELDS | settings.extra_fields
    unknown = sorted(str(k) for k in front_matter if k not in allowed)
    if unknown:
        if settings.strict:
            raise ValidationError(
                identifier, source, f"unknown front matter field(s): {', '.join(unknown)}"
            )
        logger.debug("Dropping unknown fields %s from %s", unknown, source)

    layout = _required_text(front_matter.get("layout"), "layout", identifier, source)
    if settings.layouts is not None and layout not in settings.layouts:
        raise ValidationError(identifier, source, f"unknown layout '{layout}'")

    title = _required_text(front_matter.get("title"), "title", identifier, source)

    doc_date = None
    raw_date = front_matter.get("date")
    if raw_date is not None:
        try:
            doc_date = parse_date(raw_date)
        except ValueError:
            raise ValidationError(identifier, source, f"malformed date {raw_date!r}")

    categories = _labels(front_matter.get("categories"), "categories", identifier, source)
    category = front_matter.get("category")
    if category is not None:
        categories.add(_required_text(category, "category", identifier, source))

    tags = _labels(front_matter.get("tags"), "tags", identifier, source)

    slug = front_matter.get("slug")
    if slug is not None:
        slug = _required_text(slug, "slug", identifier, source)
        if "/" in slug:
            raise ValidationError(identifier, source, "'slug' must not contain '/'")

    published = front_matter.get("published", True)
    if not isinstance(published, bool):
        raise ValidationError(identifier, source, "'published' must be true or false")

    extra = {
        k: v
        for k, v in front_matter.items()
        if k not in CORE_FIELDS
        and (k in PASSTHROUGH_FIELDS or k in settings.extra_fields)
    }

    return DocumentMeta(
        layout=layout,
        title=title,
        publication_date=doc_date,
        categories=frozenset(categories),
        tags=frozenset(tags),
        slug=slug,
        published=published,
        extra=MappingProxyType(extra),
    )
