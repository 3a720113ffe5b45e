"""Errors raised while loading site content."""

from __future__ import annotations

from pathlib import Path


class ContentError(Exception):
    """Base class for content load failures."""


class ValidationError(ContentError):
    """A document is missing a required field or has a malformed one."""

    def __init__(self, identifier: str, source: Path, reason: str):
        self.identifier = identifier
        self.source = Path(source)
        self.reason = reason
        super().__init__(f"{source} ({identifier}): {reason}")


class DuplicateIdentifierError(ContentError):
    """Two documents resolve to the same identifier."""

    def __init__(self, identifier: str, first: Path, second: Path):
        self.identifier = identifier
        self.first = Path(first)
        self.second = Path(second)
        super().__init__(
            f"Duplicate identifier '{identifier}': {first} and {second}"
        )
