"""A single loaded post or page."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

POST_LAYOUT = "post"


@dataclass(frozen=True)
class Document:
    """One post or page with validated metadata and raw body."""

    identifier: str
    layout: str
    title: str
    source: Path  # relative to the site root
    body: str = ""
    publication_date: date | None = None
    categories: frozenset[str] = frozenset()
    tags: frozenset[str] = frozenset()
    draft: bool = False
    extra: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    @property
    def is_post(self) -> bool:
        return self.layout == POST_LAYOUT

    @property
    def labels(self) -> frozenset[str]:
        """Categories and tags together."""
        return self.categories | self.tags

    def to_dict(self, include_body: bool = False) -> dict[str, Any]:
        """Plain-data view for JSON output."""
        data: dict[str, Any] = dict(self.extra)
        data.update({
            "identifier": self.identifier,
            "layout": self.layout,
            "title": self.title,
            "date": self.publication_date.isoformat() if self.publication_date else None,
            "categories": sorted(self.categories),
            "tags": sorted(self.tags),
            "draft": self.draft,
            "source": self.source.as_posix(),
        })
        data.pop("body", None)
        if include_body:
            data["body"] = self.body
        return data
