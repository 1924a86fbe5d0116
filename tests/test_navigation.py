"""Unit tests for ``nav.md`` parsing.

Checks that entries resolve by source path or slug, that unknown entries and
empty groups disappear, and that the group linking to the current page is
flagged active.

Usage
-----
Run ``pytest tests/test_navigation.py -v``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from docsgen.models import NavGroup, NavItem, Page
from docsgen.navigation import build_nav

PAGES = (
    Page(title="Home", url="/en/", rel_slug="index", source_rel="welcome.md"),
    Page(title="Setup", url="/en/setup", rel_slug="setup", source_rel="setup.md"),
    Page(
        title="Deploy",
        url="/en/guides/deploy",
        rel_slug="guides/deploy",
        source_rel="guides/deploy.md",
    ),
)


@pytest.fixture
def lang_dir(tmp_path: Path) -> Path:
    path = tmp_path / "en"
    path.mkdir()
    return path


def _write_nav(lang_dir: Path, content: str) -> None:
    (lang_dir / "nav.md").write_text(content, encoding="utf-8")


def test_missing_nav_yields_no_groups(lang_dir: Path) -> None:
    """Without nav.md the sidebar has no groups."""
    assert build_nav(lang_dir, PAGES, "/en/") == []


def test_entries_resolve_by_path_and_slug(lang_dir: Path) -> None:
    """Entries may name the file with or without ``.md``, or by slug."""
    _write_nav(lang_dir, "- setup\n* guides/deploy.md\n- welcome\n- index\n")
    [group] = build_nav(lang_dir, PAGES, "/en/setup")
    assert group.title == "General", "expected the implicit first group title"
    assert group.items == [
        NavItem(title="Setup", url="/en/setup"),
        NavItem(title="Deploy", url="/en/guides/deploy"),
        NavItem(title="Home", url="/en/"),
        NavItem(title="Home", url="/en/"),
    ]
    assert group.active


def test_unknown_entries_and_empty_groups_are_dropped(lang_dir: Path) -> None:
    """Unresolved links vanish and groups left empty are omitted."""
    _write_nav(
        lang_dir,
        "[Empty]\n- missing\n\n[Guides]\n- guides/deploy\nplain text\n[]\n",
    )
    groups = build_nav(lang_dir, PAGES, "/en/")
    assert groups == [
        NavGroup(
            title="Guides",
            items=[NavItem(title="Deploy", url="/en/guides/deploy")],
            active=False,
        )
    ]


def test_only_group_with_current_page_is_active(lang_dir: Path) -> None:
    """The active flag follows the current URL."""
    _write_nav(lang_dir, "[Start]\n- welcome\n[Guides]\n- setup\n- guides/deploy\n")
    groups = build_nav(lang_dir, PAGES, "/en/guides/deploy")
    assert [(group.title, group.active) for group in groups] == [
        ("Start", False),
        ("Guides", True),
    ]


def test_bare_marker_lines_are_ignored(lang_dir: Path) -> None:
    """``-`` with nothing after it adds no entry."""
    _write_nav(lang_dir, "-\n*   \n- setup\n")
    [group] = build_nav(lang_dir, PAGES, "/en/")
    assert [item.url for item in group.items] == ["/en/setup"]
