"""Tests for front matter validation into DocumentMeta."""

from datetime import date
from pathlib import Path

import pytest

from folio.content.errors import ValidationError
from folio.content.metadata import parse_meta
from folio.core.config import ContentSettings

SRC = Path("_posts/2016-04-13-x.md")


def _parse(fm, **settings_kwargs):
    return parse_meta(
        fm, identifier="x", source=SRC, settings=ContentSettings(**settings_kwargs)
    )


class TestRequiredFields:
    """layout and title are required and non-empty."""

    def test_minimal(self):
        meta = _parse({"layout": "post", "title": "Hello"})
        assert meta.layout == "post"
        assert meta.title == "Hello"
        assert meta.publication_date is None
        assert meta.categories == frozenset()
        assert meta.tags == frozenset()
        assert meta.published is True

    def test_missing_title(self):
        with pytest.raises(ValidationError, match="title"):
            _parse({"layout": "post"})

    def test_blank_title(self):
        with pytest.raises(ValidationError, match="title"):
            _parse({"layout": "post", "title": "   "})

    def test_missing_layout(self):
        with pytest.raises(ValidationError, match="layout"):
            _parse({"title": "Hello"})

    def test_numeric_title_is_coerced(self):
        assert _parse({"layout": "page", "title": 2016}).title == "2016"

    def test_list_title_rejected(self):
        with pytest.raises(ValidationError):
            _parse({"layout": "page", "title": ["a", "b"]})

    def test_error_carries_identifier_and_source(self):
        with pytest.raises(ValidationError) as exc_info:
            _parse({"layout": "post"})
        assert exc_info.value.identifier == "x"
        assert exc_info.value.source == SRC
        assert str(SRC) in str(exc_info.value)


class TestLayouts:
    def test_allowed_layouts_enforced(self):
        with pytest.raises(ValidationError, match="unknown layout 'wide'"):
            _parse({"layout": "wide", "title": "T"}, layouts=frozenset({"post", "page"}))

    def test_any_layout_without_allowed_list(self):
        assert _parse({"layout": "wide", "title": "T"}).layout == "wide"


class TestDates:
    def test_string_date(self):
        assert _parse({"layout": "post", "title": "T", "date": "2016-07-15"}).publication_date == date(2016, 7, 15)

    def test_yaml_date(self):
        assert _parse({"layout": "post", "title": "T", "date": date(2016, 7, 15)}).publication_date == date(2016, 7, 15)

    def test_malformed_date(self):
        with pytest.raises(ValidationError, match="malformed date"):
            _parse({"layout": "post", "title": "T", "date": "mid-July"})


class TestLabels:
    def test_space_separated_categories(self):
        meta = _parse({"layout": "post", "title": "T", "categories": "compilers llvm"})
        assert meta.categories == frozenset({"compilers", "llvm"})

    def test_list_tags(self):
        meta = _parse({"layout": "post", "title": "T", "tags": ["fuzzing", "lto", 2016]})
        assert meta.tags == frozenset({"fuzzing", "lto", "2016"})

    def test_singular_category_added(self):
        meta = _parse({"layout": "post", "title": "T", "categories": ["a"], "category": "b"})
        assert meta.categories == frozenset({"a", "b"})

    def test_mapping_tags_rejected(self):
        with pytest.raises(ValidationError, match="tags"):
            _parse({"layout": "post", "title": "T", "tags": {"a": 1}})

    def test_nested_list_tags_rejected(self):
        with pytest.raises(ValidationError, match="tags"):
            _parse({"layout": "post", "title": "T", "tags": [["a"]]})


class TestUnknownFields:
    def test_strict_rejects_unknown(self):
        with pytest.raises(ValidationError, match="mathjax, toc"):
            _parse({"layout": "post", "title": "T", "toc": True, "mathjax": True})

    def test_non_strict_drops_unknown(self):
        meta = _parse({"layout": "post", "title": "T", "toc": True}, strict=False)
        assert "toc" not in meta.extra

    def test_configured_extra_field_kept(self):
        meta = _parse(
            {"layout": "post", "title": "T", "mathjax": True},
            extra_fields=frozenset({"mathjax"}),
        )
        assert meta.extra["mathjax"] is True

    def test_passthrough_fields_kept(self):
        meta = _parse({"layout": "post", "title": "T", "permalink": "/pgo/", "comments": False})
        assert dict(meta.extra) == {"permalink": "/pgo/", "comments": False}

    def test_extra_is_read_only(self):
        meta = _parse({"layout": "post", "title": "T", "permalink": "/pgo/"})
        with pytest.raises(TypeError):
            meta.extra["permalink"] = "/other/"


class TestOtherFields:
    def test_slug(self):
        assert _parse({"layout": "post", "title": "T", "slug": "pgo"}).slug == "pgo"

    def test_slug_with_slash_rejected(self):
        with pytest.raises(ValidationError, match="slug"):
            _parse({"layout": "post", "title": "T", "slug": "a/b"})

    def test_published_false(self):
        assert _parse({"layout": "post", "title": "T", "published": False}).published is False

    def test_published_must_be_bool(self):
        with pytest.raises(ValidationError, match="published"):
            _parse({"layout": "post", "title": "T", "published": "no"})
