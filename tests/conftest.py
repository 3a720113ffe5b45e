"""Shared test fixtures for folio package."""

from pathlib import Path

import pytest
import yaml


@pytest.fixture
def site(tmp_path):
    """Create an empty site root with a _config.yml."""
    (tmp_path / "_config.yml").write_text("title: Test Blog\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def write_doc(site):
    """Factory fixture for writing content files with front matter."""
    def _write(
        rel_path: str,
        front_matter: dict | None = None,
        body: str = "Body text.",
    ) -> Path:
        path = site / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if front_matter is None:
            content = f"{body}\n"
        else:
            fm_str = yaml.dump(front_matter, default_flow_style=False, sort_keys=False)
            content = f"---\n{fm_str}---\n\n{body}\n"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_post(write_doc):
    """Factory fixture for writing a post under _posts/."""
    def _write(
        filename: str = "2016-04-13-first-post.md",
        title: str = "First Post",
        body: str = "Post body.",
        **extra_fm,
    ) -> Path:
        fm = {"layout": "post", "title": title}
        fm.update(extra_fm)
        return write_doc(f"_posts/{filename}", fm, body)

    return _write


@pytest.fixture
def write_page(write_doc):
    """Factory fixture for writing a page."""
    def _write(
        rel_path: str = "about.md",
        title: str = "About",
        body: str = "Page body.",
        **extra_fm,
    ) -> Path:
        fm = {"layout": "page", "title": title}
        fm.update(extra_fm)
        return write_doc(rel_path, fm, body)

    return _write


@pytest.fixture
def blog(write_post, write_page, site):
    """A small valid blog: two posts, two pages and a static file."""
    write_post("2016-04-13-pgo.md", title="PGO", tags=["compilers", "pgo"])
    write_post(
        "2016-07-15-sanitizers.md",
        title="Sanitizers",
        categories="tools testing",
        tags=["asan"],
    )
    write_page("about.md", title="About")
    write_page("index.html", title="Home", layout="default")
    (site / "LICENSE").write_text("MIT\n", encoding="utf-8")
    (site / "README.md").write_text("# Readme\n\nNo front matter here.\n", encoding="utf-8")
    return site


@pytest.fixture
def mock_site_root(blog, monkeypatch):
    """Point site root resolution at the sample blog."""
    from folio.core import config

    config.get_site_root.cache_clear()
    monkeypatch.setattr(config, "get_site_root", lambda: blog)
    return blog
