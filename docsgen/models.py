"""Dataclasses shared by discovery, navigation, and the build pipeline."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from ._constants import DEFAULT_SITE_TITLE


@dc.dataclass(frozen=True, slots=True)
class Page:
    """One discovered markdown document mapped to one site URL.

    Attributes
    ----------
    title : str
        First ``# `` heading of the document, or a title derived from the slug.
    url : str
        Absolute site path, e.g. ``/en/`` or ``/en/guides/setup``.
    rel_slug : str
        Slug relative to the language root; ``"index"`` marks the home page.
    source_rel : str
        POSIX path of the markdown file relative to the language root.
    """

    title: str
    url: str
    rel_slug: str
    source_rel: str


@dc.dataclass(frozen=True, slots=True)
class Language:
    """A language directory and its pages in navigation order."""

    code: str
    pages: tuple[Page, ...]


@dc.dataclass(frozen=True, slots=True)
class Site:
    """All languages discovered for a single build."""

    languages: tuple[Language, ...]
    default_language: str


@dc.dataclass(slots=True)
class NavItem:
    """Link rendered inside a navigation group."""

    title: str
    url: str


@dc.dataclass(slots=True)
class NavGroup:
    """Named group of navigation links; ``active`` when it holds the current page."""

    title: str
    items: list[NavItem] = dc.field(default_factory=list)
    active: bool = False


@dc.dataclass(slots=True)
class SiteConfig:
    """Optional site settings read from ``site.md`` files."""

    title: str | None = None
    logo: str | None = None
    footer: str | None = None
    subtitle: str | None = None


@dc.dataclass(slots=True)
class SearchEntry:
    """Entry of the flat ``search.json`` index.

    Field order is the serialized key order.
    """

    lang: str
    title: str
    url: str
    excerpt: str
    content: str


@dc.dataclass(slots=True)
class BuildSettings:
    """Locations and defaults used by a single build.

    Attributes
    ----------
    docs_dir : Path
        Root holding one directory per language.
    out_dir : Path
        Output root; wiped before the build when it carries the ownership marker.
    assets_dir : Path
        Directory mirrored into ``<out_dir>/assets`` when present.
    templates_dir : Path or None
        Jinja template directory; ``None`` selects the packaged templates.
    site_title : str
        Title used when no ``site.md`` sets one.
    """

    docs_dir: Path = Path("docs")
    out_dir: Path = Path("public")
    assets_dir: Path = Path("assets")
    templates_dir: Path | None = None
    site_title: str = DEFAULT_SITE_TITLE


__all__ = [
    "BuildSettings",
    "Language",
    "NavGroup",
    "NavItem",
    "Page",
    "SearchEntry",
    "Site",
    "SiteConfig",
]
