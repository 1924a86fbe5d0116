"""Build sidebar navigation groups from a language's ``nav.md``.

``nav.md`` is a flat list: ``[Group title]`` lines open a group and ``-`` or
``*`` lines name pages by path relative to the language root, with or
without ``.md``::

    [Getting started]
    - welcome
    - guides/setup.md

Links naming unknown pages are dropped, and so are groups left empty.
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import DEFAULT_NAV_GROUP, NAV_FILENAME
from ._text import split_lines
from .models import NavGroup, NavItem

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .models import Page

logger = logging.getLogger(__name__)


def build_nav(
    lang_dir: Path, pages: cabc.Sequence[Page], current_url: str
) -> list[NavGroup]:
    """Parse ``nav.md`` under ``lang_dir`` into navigation groups.

    Parameters
    ----------
    lang_dir : Path
        Language directory holding ``nav.md``.
    pages : Sequence[Page]
        Pages discovered for the language; nav entries resolve against them.
    current_url : str
        URL of the page being rendered; the group linking to it is active.

    Returns
    -------
    list[NavGroup]
        Non-empty groups in file order; empty when ``nav.md`` is missing or
        unreadable.
    """
    nav_path = lang_dir / NAV_FILENAME
    try:
        content = nav_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("ignoring unreadable %s: %s", nav_path, exc)
        return []

    lookup: dict[str, Page] = {}
    for page in pages:
        lookup[page.source_rel] = page
        lookup[page.rel_slug] = page

    groups: list[NavGroup] = []
    current = NavGroup(title=DEFAULT_NAV_GROUP)
    for line in split_lines(content):
        trimmed = line.strip()
        if not trimmed:
            continue
        if trimmed.startswith("[") and trimmed.endswith("]") and len(trimmed) > 2:
            if current.items:
                groups.append(current)
            current = NavGroup(title=trimmed[1:-1].strip())
            continue
        if trimmed[0] not in "-*":
            continue
        name = trimmed[1:].strip()
        if not name:
            continue
        if not name.endswith(".md"):
            name = f"{name}.md"
        page = lookup.get(name) or lookup.get(name.removesuffix(".md"))
        if page is None:
            logger.debug("nav entry %r in %s matches no page", name, nav_path)
            continue
        current.items.append(NavItem(title=page.title, url=page.url))
        if page.url == current_url:
            current.active = True

    if current.items:
        groups.append(current)
    return groups


__all__ = ["build_nav"]
