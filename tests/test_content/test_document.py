"""Tests for Document."""

from datetime import date
from pathlib import Path
from types import MappingProxyType

from folio.content import Document
from folio.content.scanner import ContentScanner
from folio.core.config import ContentSettings


def _doc(**kwargs):
    return Document(
        identifier="pgo",
        layout="post",
        title="PGO",
        source=Path("_posts/2016-04-13-pgo.md"),
        body="Post body.",
        publication_date=date(2016, 4, 13),
        tags=frozenset({"pgo", "compilers"}),
        **kwargs,
    )


class TestToDict:
    def test_basic_fields(self):
        data = _doc().to_dict()
        assert data["identifier"] == "pgo"
        assert data["date"] == "2016-04-13"
        assert data["tags"] == ["compilers", "pgo"]
        assert data["source"] == "_posts/2016-04-13-pgo.md"
        assert "body" not in data

    def test_include_body(self):
        assert _doc().to_dict(include_body=True)["body"] == "Post body."

    def test_extra_fields_included(self):
        data = _doc(extra=MappingProxyType({"author": "Jane"})).to_dict()
        assert data["author"] == "Jane"

    def test_extra_cannot_shadow_document_fields(self):
        extra = MappingProxyType({
            "source": "elsewhere.md",
            "draft": True,
            "identifier": "other",
            "date": "1999-01-01",
            "body": "not the body",
        })
        data = _doc(extra=extra).to_dict()
        assert data["source"] == "_posts/2016-04-13-pgo.md"
        assert data["draft"] is False
        assert data["identifier"] == "pgo"
        assert data["date"] == "2016-04-13"
        assert "body" not in data

        assert _doc(extra=extra).to_dict(include_body=True)["body"] == "Post body."

    def test_configured_extra_field_named_like_attribute(self, site, write_post):
        write_post("2016-04-13-pgo.md", title="PGO", source="imported", draft=True)
        settings = ContentSettings(extra_fields=frozenset({"source", "draft"}))
        (doc,) = ContentScanner(site, settings).scan()
        data = doc.to_dict()
        assert data["source"] == "_posts/2016-04-13-pgo.md"
        assert data["draft"] is False
