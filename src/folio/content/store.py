"""
Content store.

An immutable, validated collection of every document in a site. Build one
with ``load()`` and pass it explicitly to whatever consumes it; a reload
returns a new store and never touches the old one.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from folio.content.document import Document
from folio.content.errors import DuplicateIdentifierError, ValidationError
from folio.content.scanner import ContentScanner
from folio.core.config import ContentSettings

logger = logging.getLogger(__name__)


def _post_order(doc: Document) -> tuple[int, str]:
    # Newest first, identifier ascending within a day
    return (-doc.publication_date.toordinal(), doc.identifier)


@dataclass(frozen=True)
class ContentStore:
    """All documents of one site, read-only after construction."""

    root: Path
    documents: tuple[Document, ...]
    settings: ContentSettings = field(default_factory=ContentSettings)
    include_drafts: bool = False
    include_unpublished: bool = False
    _index: Mapping[str, Document] = field(
        init=False, repr=False, compare=False, hash=False
    )
    _posts: tuple[Document, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, Document] = {}
        for doc in self.documents:
            if doc.is_post and doc.publication_date is None:
                raise ValidationError(
                    doc.identifier, doc.source, "post has no publication date"
                )
            if doc.identifier in index:
                raise DuplicateIdentifierError(
                    doc.identifier, index[doc.identifier].source, doc.source
                )
            index[doc.identifier] = doc
        ordered = tuple(sorted(self.documents, key=lambda d: d.identifier))
        posts = tuple(sorted((d for d in ordered if d.is_post), key=_post_order))
        object.__setattr__(self, "documents", ordered)
        object.__setattr__(self, "_index", MappingProxyType(index))
        object.__setattr__(self, "_posts", posts)

    @classmethod
    def load(
        cls,
        root_path: Path | str,
        settings: ContentSettings | None = None,
        include_drafts: bool = False,
        include_unpublished: bool = False,
    ) -> ContentStore:
        """Scan a site root and build a validated store.

        Args:
            root_path: Site root directory
            settings: Content settings (read from _config.yml if not provided)
            include_drafts: Also load the drafts directory
            include_unpublished: Keep documents marked ``published: false``

        Raises:
            FileNotFoundError: If the root does not exist
            NotADirectoryError: If the root is not a directory
            ValidationError: If any document is missing or has a malformed field
            DuplicateIdentifierError: If two documents share an identifier
        """
        root = Path(root_path)
        if not root.exists():
            raise FileNotFoundError(f"Content root not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Content root is not a directory: {root}")

        scanner = ContentScanner(root, settings)
        documents = scanner.scan(
            include_drafts=include_drafts, include_unpublished=include_unpublished
        )
        store = cls(
            root=root,
            documents=tuple(documents),
            settings=scanner.settings,
            include_drafts=include_drafts,
            include_unpublished=include_unpublished,
        )
        logger.info(
            "Loaded %d documents (%d posts) from %s",
            len(store), len(store.all_posts()), root,
        )
        return store

    def reload(self) -> ContentStore:
        """Load the same root again with the same options."""
        return type(self).load(
            self.root,
            settings=self.settings,
            include_drafts=self.include_drafts,
            include_unpublished=self.include_unpublished,
        )

    # -- queries -----------------------------------------------------------

    def all_posts(self) -> tuple[Document, ...]:
        """Posts, newest first; ties broken by identifier."""
        return self._posts

    def all_pages(self) -> tuple[Document, ...]:
        """Every document that is not a post."""
        return tuple(d for d in self.documents if not d.is_post)

    def find_by_identifier(self, identifier: str) -> Document | None:
        """Exact-match lookup. Returns None when nothing matches."""
        return self._index.get(identifier)

    def with_label(self, label: str) -> tuple[Document, ...]:
        """Posts carrying a label as a tag or category."""
        return tuple(d for d in self._posts if label in d.labels)

    def with_tag(self, tag: str) -> tuple[Document, ...]:
        return tuple(d for d in self._posts if tag in d.tags)

    def in_category(self, category: str) -> tuple[Document, ...]:
        return tuple(d for d in self._posts if category in d.categories)

    def tag_counts(self) -> Counter[str]:
        return Counter(tag for d in self.documents for tag in d.tags)

    def category_counts(self) -> Counter[str]:
        return Counter(cat for d in self.documents for cat in d.categories)

    def posts_by_year(self) -> dict[int, tuple[Document, ...]]:
        """Posts grouped by year, newest year first."""
        years: dict[int, list[Document]] = {}
        for doc in self._posts:
            years.setdefault(doc.publication_date.year, []).append(doc)
        return {year: tuple(docs) for year, docs in years.items()}

    def stats(self) -> dict[str, Any]:
        """Summary counts for reporting."""
        posts = self._posts
        return {
            "documents": len(self.documents),
            "posts": len(posts),
            "pages": len(self.documents) - len(posts),
            "drafts": sum(1 for d in self.documents if d.draft),
            "tags": len(self.tag_counts()),
            "categories": len(self.category_counts()),
            "first_post": posts[-1].publication_date.isoformat() if posts else None,
            "last_post": posts[0].publication_date.isoformat() if posts else None,
        }

    def __len__(self) -> int:
        return len(self.documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._index


def load(
    root_path: Path | str,
    settings: ContentSettings | None = None,
    include_drafts: bool = False,
    include_unpublished: bool = False,
) -> ContentStore:
    """Load a site's content into a new ContentStore."""
    return ContentStore.load(
        root_path,
        settings=settings,
        include_drafts=include_drafts,
        include_unpublished=include_unpublished,
    )


def from_documents(
    documents: Iterable[Document], root: Path | str = "."
) -> ContentStore:
    """Build a store from already-constructed documents."""
    return ContentStore(root=Path(root), documents=tuple(documents))
