"""Plain-text extraction and the ``search.json`` writer.

The index is a flat JSON array with one object per rendered page, keyed
``lang``, ``title``, ``url``, ``excerpt`` and ``content`` in that order, which
the client-side search script loads once.
"""

from __future__ import annotations

import typing as typ

import msgspec
import msgspec.json

from ._constants import EXCERPT_LENGTH, SEARCH_INDEX_FILENAME
from ._text import split_lines
from .errors import DocsIOError, SerializationError
from .includes import parse_directive
from .models import SearchEntry

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .models import Page

CODE_FENCE = "```"


def markdown_to_text(markdown: str) -> str:
    """Flatten markdown into searchable text.

    Code fences and include directives are dropped, heading and list markers
    and backticks are stripped, and the remaining lines are joined with a
    trailing space each.

    >>> markdown_to_text("# Title\\n```\\ncode\\n```\\n- use `x`\\n")
    'Title use x '
    """
    out: list[str] = []
    in_code = False
    for line in split_lines(markdown):
        trimmed = line.strip()
        if trimmed.startswith(CODE_FENCE):
            in_code = not in_code
            continue
        if in_code or parse_directive(trimmed) is not None:
            continue
        cleaned = trimmed.lstrip("#").lstrip("*").lstrip("-").strip()
        cleaned = cleaned.replace("`", "")
        if cleaned:
            out.append(f"{cleaned} ")
    return "".join(out)


def excerpt(text: str) -> str:
    """Return the first 160 characters of ``text``."""
    return text[:EXCERPT_LENGTH]


def build_search_entry(lang: str, page: Page, expanded: str) -> SearchEntry:
    """Return the index entry for ``page`` from its expanded markdown."""
    content = markdown_to_text(expanded)
    return SearchEntry(
        lang=lang,
        title=page.title,
        url=page.url,
        excerpt=excerpt(content),
        content=content,
    )


def write_search_index(out_dir: Path, entries: cabc.Sequence[SearchEntry]) -> Path:
    """Serialize ``entries`` into ``<out_dir>/search.json``.

    Raises
    ------
    SerializationError
        If the entries cannot be encoded.
    DocsIOError
        If the index file cannot be written.
    """
    path = out_dir / SEARCH_INDEX_FILENAME
    try:
        payload = msgspec.json.encode(list(entries))
    except (msgspec.EncodeError, TypeError) as exc:
        msg = f"failed to encode search index: {exc}"
        raise SerializationError(msg, path) from exc
    try:
        path.write_bytes(payload)
    except OSError as exc:
        msg = f"failed to write {path}: {exc}"
        raise DocsIOError(msg, path) from exc
    return path


__all__ = [
    "build_search_entry",
    "excerpt",
    "markdown_to_text",
    "write_search_index",
]
