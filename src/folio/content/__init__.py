"""
Content loading for a static blog.

Provides tools for:
- Scanning a site for posts, drafts and pages
- Validating front matter into fixed records
- Building an immutable, queryable content store
"""

from folio.content.document import Document
from folio.content.errors import ContentError, DuplicateIdentifierError, ValidationError
from folio.content.metadata import DocumentMeta
from folio.content.scanner import ContentScanner, SourceFile
from folio.content.store import ContentStore, from_documents, load

__all__ = [
    "ContentStore",
    "load",
    "from_documents",
    "Document",
    "DocumentMeta",
    "ContentScanner",
    "SourceFile",
    "ContentError",
    "ValidationError",
    "DuplicateIdentifierError",
]
