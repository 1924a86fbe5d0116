"""Unit tests for plain-text extraction and the search index writer.

Usage
-----
Run ``pytest tests/test_search.py -v``.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docsgen.errors import SerializationError
from docsgen.models import Page, SearchEntry
from docsgen.search import (
    build_search_entry,
    excerpt,
    markdown_to_text,
    write_search_index,
)


def test_text_drops_code_directives_and_markers() -> None:
    """Fenced code, include lines and markdown markers never reach the index."""
    markdown = (
        "# Heading\n"
        "```python\n"
        "secret = 1\n"
        "```\n"
        "@include: part.md\n"
        "- item with `code`\n"
        "**bold** text\n"
        "\n"
        "## Sub\n"
    )
    assert markdown_to_text(markdown) == "Heading item with code bold** text Sub "


def test_excerpt_counts_characters_not_bytes() -> None:
    """Excerpts cut at 160 code points, even for multi-byte text."""
    text = "é" * 200
    assert excerpt(text) == "é" * 160
    assert excerpt("short") == "short"


def test_search_entry_fields() -> None:
    """Entries carry language, page identity, excerpt and full text."""
    page = Page(title="Intro", url="/en/intro", rel_slug="intro", source_rel="intro.md")
    entry = build_search_entry("en", page, "# Intro\nWelcome aboard\n")
    assert entry == SearchEntry(
        lang="en",
        title="Intro",
        url="/en/intro",
        excerpt="Intro Welcome aboard ",
        content="Intro Welcome aboard ",
    )


def test_index_keeps_field_order(tmp_path: Path) -> None:
    """search.json is a JSON array with keys in the documented order."""
    entries = [SearchEntry("en", "Home", "/en/", "Hi ", "Hi ")]
    path = write_search_index(tmp_path, entries)
    assert path == tmp_path / "search.json"
    raw = path.read_text(encoding="utf-8")
    assert list(json.loads(raw)[0]) == ["lang", "title", "url", "excerpt", "content"]
    assert raw.startswith('[{"lang":"en"')


def test_unencodable_entry_raises(tmp_path: Path) -> None:
    """Encoder failures are reported as SerializationError."""
    bad = SearchEntry("en", "Home", "/en/", "x", object())  # type: ignore[arg-type]
    with pytest.raises(SerializationError):
        write_search_index(tmp_path, [bad])
