"""
Site content scanner.

Walks a site root, classifies files into posts, drafts and pages, and turns
each one into a validated Document.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path

from folio.content.document import Document
from folio.content.errors import ValidationError
from folio.content.frontmatter import split_document, split_post_filename
from folio.content.metadata import parse_meta
from folio.core.config import ContentSettings, load_settings

logger = logging.getLogger(__name__)

PAGE = "page"
POST = "post"
DRAFT = "draft"


@dataclass(frozen=True)
class SourceFile:
    """A candidate content file found under the site root."""

    path: Path
    relative: Path
    area: str  # page, post or draft
    dir_categories: tuple[str, ...] = ()

    @property
    def in_posts_area(self) -> bool:
        return self.area in (POST, DRAFT)


class ContentScanner:
    """Finds and parses the content files of one site."""

    def __init__(self, site_root: Path, settings: ContentSettings | None = None):
        """Initialize scanner.

        Args:
            site_root: Site root directory
            settings: Content settings (read from the site's _config.yml if not provided)
        """
        self.site_root = Path(site_root)
        self.settings = settings if settings is not None else load_settings(self.site_root)

    def iter_sources(self, include_drafts: bool = False) -> Iterator[SourceFile]:
        """Yield candidate content files in sorted path order."""
        for path in sorted(self.site_root.rglob("*")):
            if path.is_symlink() or not path.is_file():
                continue
            relative = path.relative_to(self.site_root)
            source = self._classify(path, relative, include_drafts)
            if source is not None:
                yield source

    def _classify(
        self, path: Path, relative: Path, include_drafts: bool
    ) -> SourceFile | None:
        settings = self.settings
        if path.suffix.lower() not in settings.extensions:
            return None
        if self._is_excluded(relative):
            logger.debug("Excluded %s", relative)
            return None

        *dirs, name = relative.parts
        if name.startswith((".", "_")):
            return None

        area = PAGE
        area_index = None
        for i, part in enumerate(dirs):
            if part.startswith("."):
                return None
            if area == PAGE and part == settings.posts_dir:
                area, area_index = POST, i
            elif area == PAGE and part == settings.drafts_dir:
                if not include_drafts:
                    return None
                area, area_index = DRAFT, i
            elif part.startswith("_"):
                return None

        dir_categories = tuple(dirs[:area_index]) if area_index is not None else ()
        return SourceFile(path, relative, area, dir_categories)

    def _is_excluded(self, relative: Path) -> bool:
        rel = relative.as_posix()
        for pattern in self.settings.exclude:
            prefix = pattern.strip("/")
            if rel == prefix or rel.startswith(prefix + "/"):
                return True
            if fnmatch(rel, pattern) or fnmatch(relative.name, pattern):
                return True
        return False

    @staticmethod
    def page_identifier(relative: Path) -> str:
        """Identifier of a page: its path without suffix, index files collapsed."""
        stem_path = relative.with_suffix("")
        if stem_path.name == "index" and stem_path.parent != Path("."):
            stem_path = stem_path.parent
        return stem_path.as_posix()

    def parse(
        self, source: SourceFile, include_unpublished: bool = False
    ) -> Document | None:
        """Parse one source file into a Document.

        Returns:
            The Document, or None for pages without front matter (static
            files) and for unpublished documents

        Raises:
            ValidationError: If the file is malformed or misses a required field
        """
        rel = source.relative
        file_date = None
        if source.in_posts_area:
            try:
                file_date, identifier = split_post_filename(rel.stem)
            except ValueError:
                raise ValidationError(rel.stem, rel, "malformed date in filename")
        else:
            identifier = self.page_identifier(rel)

        try:
            text = source.path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError:
            raise ValidationError(identifier, rel, "file is not valid UTF-8 text")
        except OSError as e:
            raise ValidationError(identifier, rel, f"cannot read file: {e}")

        front_matter, body = split_document(text, identifier, rel)
        if front_matter is None:
            if source.in_posts_area:
                raise ValidationError(identifier, rel, "missing front matter")
            logger.debug("No front matter, treating as static file: %s", rel)
            return None

        meta = parse_meta(
            front_matter, identifier=identifier, source=rel, settings=self.settings
        )
        if not meta.published and not include_unpublished:
            logger.debug("Skipping unpublished %s", rel)
            return None

        if source.in_posts_area and meta.slug:
            identifier = meta.slug

        publication_date = meta.publication_date or file_date
        document = Document(
            identifier=identifier,
            layout=meta.layout,
            title=meta.title,
            source=rel,
            body=body,
            publication_date=publication_date,
            categories=meta.categories | frozenset(source.dir_categories),
            tags=meta.tags,
            draft=source.area == DRAFT,
            extra=meta.extra,
        )
        if document.is_post and document.publication_date is None:
            raise ValidationError(identifier, rel, "post has no publication date")
        return document

    def scan(
        self, include_drafts: bool = False, include_unpublished: bool = False
    ) -> list[Document]:
        """Parse every content file under the site root.

        Fails on the first invalid file; no partial result is returned.
        """
        documents = []
        for source in self.iter_sources(include_drafts=include_drafts):
            logger.debug("Parsing %s", source.relative)
            document = self.parse(source, include_unpublished=include_unpublished)
            if document is not None:
                documents.append(document)
        return documents
