"""Load layered ``site.md`` settings for a language.

``site.md`` holds ``key: value`` lines. The docs root may carry a global
file and every language directory its own; the language file overrides only
the keys it sets.

Examples
--------
>>> from pathlib import Path
>>> from docsgen.site_config import load_site_config
>>> config = load_site_config(Path("docs"), "en")  # doctest: +SKIP
>>> config.title  # doctest: +SKIP
'Srotas Space'
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import SITE_CONFIG_FILENAME
from ._text import split_lines
from .models import SiteConfig

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

SITE_KEYS = frozenset({"title", "logo", "footer", "subtitle"})


def load_site_config(docs_dir: Path, lang: str) -> SiteConfig:
    """Return the site settings for ``lang``, global file first.

    Missing or unreadable files contribute nothing.
    """
    config = SiteConfig()
    layers = (docs_dir / SITE_CONFIG_FILENAME, docs_dir / lang / SITE_CONFIG_FILENAME)
    for path in layers:
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            continue
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("ignoring unreadable %s: %s", path, exc)
            continue
        for key, value in _parse_pairs(content):
            setattr(config, key, value)
    return config


def _parse_pairs(content: str) -> typ.Iterator[tuple[str, str]]:
    """Yield recognised ``(key, value)`` pairs from ``site.md`` content."""
    for line in split_lines(content):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        key, sep, value = trimmed.partition(":")
        if not sep:
            continue
        key = key.strip()
        if key in SITE_KEYS:
            yield key, _unquote(value.strip())


def _unquote(value: str) -> str:
    """Strip one pair of surrounding double quotes.

    >>> _unquote('"Docs"')
    'Docs'
    >>> _unquote('"')
    '"'
    """
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


__all__ = ["load_site_config"]
