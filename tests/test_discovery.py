"""Unit tests for page and language discovery.

Exercises slug canonicalisation (``welcome`` becomes ``index``), URL
derivation, title extraction with the slug-derived fallback, ordering by
``template.md`` include order, and the site-level rules for empty languages.

Usage
-----
Run ``pytest tests/test_discovery.py -v``. Trees are written with the
``docs_tree`` fixture from ``conftest.py``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from docsgen.discovery import (
    discover_pages,
    discover_site,
    output_path_for,
    title_from_slug,
    url_for,
)
from docsgen.errors import ConfigError, DocsIOError

DocsTree = typ.Callable[[typ.Mapping[str, str]], Path]


def test_welcome_becomes_index(docs_tree: DocsTree) -> None:
    """``welcome.md`` is the language landing page."""
    root = docs_tree({"en/welcome.md": "# Welcome\n"})
    [page] = discover_pages(root / "en", "en")
    assert page.rel_slug == "index"
    assert page.url == "/en/"
    assert page.source_rel == "welcome.md"


def test_nested_page_slug_and_url(docs_tree: DocsTree) -> None:
    """Nested files keep their directory in slug and URL."""
    root = docs_tree({"en/guides/setup.md": "Setup body\n"})
    [page] = discover_pages(root / "en", "en")
    assert page.rel_slug == "guides/setup"
    assert page.url == "/en/guides/setup"
    assert page.source_rel == "guides/setup.md"
    assert page.title == "Setup", "expected slug-derived title without a heading"


def test_title_prefers_heading(docs_tree: DocsTree) -> None:
    """A ``# `` heading overrides the slug-derived title."""
    root = docs_tree({"en/getting-started.md": "Intro\n# My Title\n"})
    [page] = discover_pages(root / "en", "en")
    assert page.title == "My Title"


def test_title_can_come_from_an_include(docs_tree: DocsTree) -> None:
    """Titles are read after include expansion against the language dir."""
    root = docs_tree(
        {
            "en/page.md": "@include: parts/head.md\nBody\n",
            "en/parts/head.md": "# Included Title\n",
        }
    )
    pages = {page.rel_slug: page for page in discover_pages(root / "en", "en")}
    assert pages["page"].title == "Included Title"


def test_template_and_other_files_are_not_pages(docs_tree: DocsTree) -> None:
    """Structural markdown files and non-markdown files are excluded."""
    root = docs_tree(
        {
            "en/template.md": "@include: a.md\n",
            "en/nav.md": "[Guide]\n- a\n",
            "en/site.md": "title: Docs\n",
            "en/a.md": "# A\n",
            "en/notes.txt": "not markdown\n",
        }
    )
    pages = discover_pages(root / "en", "en")
    assert [page.source_rel for page in pages] == ["a.md"]


def test_pages_follow_template_order(docs_tree: DocsTree) -> None:
    """Index first, then template includes in order, then the rest by slug."""
    root = docs_tree(
        {
            "en/template.md": "@include: intro.md\n@include: advanced.md\n",
            "en/zzz.md": "# Z\n",
            "en/advanced.md": "# Advanced\n",
            "en/intro.md": "# Intro\n",
            "en/aaa.md": "# A\n",
            "en/welcome.md": "# Home\n",
        }
    )
    slugs = [page.rel_slug for page in discover_pages(root / "en", "en")]
    assert slugs == ["index", "intro", "advanced", "aaa", "zzz"]


def test_ordering_without_template_is_alphabetical(docs_tree: DocsTree) -> None:
    """Without template.md the pages sort by slug after the index page."""
    root = docs_tree(
        {
            "en/b.md": "b\n",
            "en/guides/a.md": "a\n",
            "en/welcome.md": "w\n",
            "en/a.md": "a\n",
        }
    )
    slugs = [page.rel_slug for page in discover_pages(root / "en", "en")]
    assert slugs == ["index", "a", "b", "guides/a"]


def test_symlinked_markdown_is_ignored(docs_tree: DocsTree) -> None:
    """Symbolic links are not followed during the walk."""
    root = docs_tree({"en/real.md": "# Real\n", "outside/linked.md": "# Linked\n"})
    try:
        (root / "en" / "linked.md").symlink_to(root / "outside" / "linked.md")
    except OSError:  # pragma: no cover - platforms without symlink support
        pytest.skip("symlinks unavailable")
    slugs = [page.rel_slug for page in discover_pages(root / "en", "en")]
    assert slugs == ["real"]


def test_unlistable_directory_raises(tmp_path: Path) -> None:
    """A missing language directory cannot be listed."""
    with pytest.raises(DocsIOError):
        discover_pages(tmp_path / "missing", "en")


def test_site_sorts_languages_and_drops_empty_ones(docs_tree: DocsTree) -> None:
    """Languages are sorted by code and empty directories are skipped."""
    root = docs_tree(
        {
            "fr/welcome.md": "# Bienvenue\n",
            "en/welcome.md": "# Welcome\n",
            "de/readme.txt": "no pages\n",
            "site.md": "title: Docs\n",
        }
    )
    site = discover_site(root)
    assert [lang.code for lang in site.languages] == ["en", "fr"]
    assert site.default_language == "en"


def test_site_without_pages_is_a_config_error(docs_tree: DocsTree) -> None:
    """A docs root with no markdown pages cannot be built."""
    root = docs_tree({"en/template.md": "@include: a.md\n"})
    with pytest.raises(ConfigError, match="no languages"):
        discover_site(root)


def test_urls_are_unique_across_site(docs_tree: DocsTree) -> None:
    """Every page URL appears once across all languages."""
    root = docs_tree(
        {
            "en/welcome.md": "w\n",
            "en/guide.md": "g\n",
            "fr/welcome.md": "w\n",
            "fr/guide.md": "g\n",
        }
    )
    urls = [page.url for lang in discover_site(root).languages for page in lang.pages]
    assert len(urls) == len(set(urls)) == 4


@pytest.mark.parametrize(
    ("slug", "expected"),
    [
        ("getting-started", "Getting Started"),
        ("guides/api_reference", "Api Reference"),
        ("a--b", "A B"),
        ("-_-", "Untitled"),
        ("\u00e9t\u00e9-stra\u00dfe", "\u00e9t\u00e9 Stra\u00dfe"),
        ("\u00df-x", "\u00df X"),
    ],
)
def test_title_from_slug(slug: str, expected: str) -> None:
    """Slug titles capitalise the ASCII initial of each separated word."""
    assert title_from_slug(slug) == expected


def test_url_and_output_paths() -> None:
    """Index pages map to the language root, others to a nested folder."""
    out = Path("public")
    assert url_for("en", "index") == "/en/"
    assert url_for("en", "guides/setup") == "/en/guides/setup"
    assert output_path_for(out, "en", "index") == out / "en" / "index.html"
    assert output_path_for(out, "en", "guides/setup") == (
        out / "en" / "guides" / "setup" / "index.html"
    )


def test_nested_structural_names_are_pages(docs_tree: DocsTree) -> None:
    """Only the language-root nav.md and site.md are structural."""
    root = docs_tree({"en/guides/nav.md": "# Navigating\n"})
    [page] = discover_pages(root / "en", "en")
    assert page.rel_slug == "guides/nav"


def test_colliding_slugs_are_rejected(docs_tree: DocsTree) -> None:
    """welcome.md and index.md would both publish at the language root."""
    root = docs_tree({"en/welcome.md": "# Welcome\n", "en/index.md": "# Index\n"})
    with pytest.raises(ConfigError, match="both map to /en/") as excinfo:
        discover_site(root)
    message = str(excinfo.value)
    assert "index.md" in message
    assert "welcome.md" in message
