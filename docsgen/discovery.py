"""Discover documentation pages and languages under the docs root.

Each immediate sub-directory of the docs root is a language. Every markdown
file below it becomes a :class:`~docsgen.models.Page` except the structural
files at the language root: ``template.md`` declares page order through its
``@include:`` lines, ``nav.md`` the sidebar and ``site.md`` site settings.

Example
-------
>>> from pathlib import Path
>>> from docsgen.discovery import discover_site
>>> site = discover_site(Path("docs"))  # doctest: +SKIP
>>> [lang.code for lang in site.languages]  # doctest: +SKIP
['en', 'fr']
"""

from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path

from ._constants import (
    INDEX_SLUG,
    NAV_FILENAME,
    SITE_CONFIG_FILENAME,
    TEMPLATE_FILENAME,
    WELCOME_SLUG,
)
from .errors import ConfigError, DocsIOError
from .includes import expand_includes, load_include_order
from .markdown_parser import extract_title
from .models import Language, Page, Site

logger = logging.getLogger(__name__)

SLUG_WORD_SEPARATORS = re.compile(r"[-_]")
STRUCTURAL_FILES = frozenset({TEMPLATE_FILENAME, NAV_FILENAME, SITE_CONFIG_FILENAME})


def discover_site(docs_dir: Path) -> Site:
    """Discover every language directory under ``docs_dir``.

    Parameters
    ----------
    docs_dir : Path
        Documentation root containing one directory per language.

    Returns
    -------
    Site
        Languages sorted by code; the first one is the default language.

    Raises
    ------
    ConfigError
        If no language directory yields at least one page, or two files of
        one language map to the same page slug.
    DocsIOError
        If the docs root or a language directory cannot be listed.
    """
    try:
        entries = sorted(docs_dir.iterdir())
    except OSError as exc:
        msg = f"failed to list {docs_dir}: {exc}"
        raise DocsIOError(msg, docs_dir) from exc

    languages: list[Language] = []
    for entry in entries:
        if not entry.is_dir():
            continue
        pages = discover_pages(entry, entry.name)
        if pages:
            languages.append(Language(code=entry.name, pages=tuple(pages)))
        else:
            logger.debug("skipping language %s without pages", entry.name)

    if not languages:
        msg = f"no languages found under {docs_dir}"
        raise ConfigError(msg, docs_dir)

    languages.sort(key=lambda lang: lang.code)
    return Site(languages=tuple(languages), default_language=languages[0].code)


def discover_pages(lang_dir: Path, lang_code: str) -> list[Page]:
    """Return the pages of one language in navigation order.

    Pages come first by slug ``index``, then in the order ``template.md``
    includes them, then alphabetically by slug.

    Raises
    ------
    ConfigError
        If two files map to the same slug, e.g. ``welcome.md`` and
        ``index.md``.
    DocsIOError
        If the directory tree or one of its markdown files cannot be read.
    IncludeError
        If a page's includes cannot be expanded while extracting its title.
    """
    include_order = load_include_order(lang_dir)
    pages: list[Page] = []
    sources: dict[str, str] = {}
    for path in _walk_markdown(lang_dir):
        source_rel = path.relative_to(lang_dir).as_posix()
        if source_rel in STRUCTURAL_FILES:
            continue
        rel_slug = source_rel.removesuffix(".md")
        if rel_slug == WELCOME_SLUG:
            rel_slug = INDEX_SLUG
        if rel_slug in sources:
            msg = (
                f"{lang_dir / sources[rel_slug]} and {path} both map to"
                f" {url_for(lang_code, rel_slug)}"
            )
            raise ConfigError(msg, path)
        sources[rel_slug] = source_rel
        try:
            markdown = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"failed to read {path}: {exc}"
            raise DocsIOError(msg, path) from exc
        expanded = expand_includes(markdown, lang_dir)
        pages.append(
            Page(
                title=extract_title(expanded) or title_from_slug(rel_slug),
                url=url_for(lang_code, rel_slug),
                rel_slug=rel_slug,
                source_rel=source_rel,
            )
        )

    pages.sort(
        key=lambda page: (
            _order_index(include_order, page.source_rel, page.rel_slug),
            page.rel_slug,
        )
    )
    return pages


def _walk_markdown(lang_dir: Path) -> list[Path]:
    """Return every regular ``.md`` file below ``lang_dir``, not following symlinks."""

    def _raise(exc: OSError) -> None:
        failed = Path(exc.filename) if exc.filename else lang_dir
        msg = f"failed to list {failed}: {exc}"
        raise DocsIOError(msg, failed) from exc

    found: list[Path] = []
    for root, dirs, files in os.walk(lang_dir, onerror=_raise, followlinks=False):
        dirs.sort()
        for name in sorted(files):
            path = Path(root) / name
            if path.suffix == ".md" and not path.is_symlink() and path.is_file():
                found.append(path)
    return found


def _order_index(include_order: list[str], source_rel: str, rel_slug: str) -> int:
    if rel_slug == INDEX_SLUG:
        return 0
    if source_rel == TEMPLATE_FILENAME:
        return 1
    try:
        return include_order.index(source_rel) + 2
    except ValueError:
        return sys.maxsize


def title_from_slug(slug: str) -> str:
    """Derive a display title from the last segment of ``slug``.

    Only ASCII initials are upper-cased; other characters are kept as is.

    >>> title_from_slug("guides/getting-started")
    'Getting Started'
    >>> title_from_slug("--")
    'Untitled'
    """
    last = slug.rsplit("/", 1)[-1]
    words = [
        (part[0].upper() if part[0].isascii() else part[0]) + part[1:]
        for part in SLUG_WORD_SEPARATORS.split(last)
        if part
    ]
    return " ".join(words) if words else "Untitled"


def url_for(lang: str, rel_slug: str) -> str:
    """Return the site URL for a page slug within ``lang``."""
    if rel_slug == INDEX_SLUG:
        return f"/{lang}/"
    return f"/{lang}/{rel_slug}"


def output_path_for(out_dir: Path, lang: str, rel_slug: str) -> Path:
    """Return the ``index.html`` path a page is written to under ``out_dir``."""
    if rel_slug == INDEX_SLUG:
        return out_dir / lang / "index.html"
    return out_dir / lang / rel_slug / "index.html"


__all__ = [
    "discover_pages",
    "discover_site",
    "output_path_for",
    "title_from_slug",
    "url_for",
]
