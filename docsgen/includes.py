r"""Resolve ``@include:`` directives in documentation markdown.

A directive occupies a whole line (``@include: shared/intro.md``) and is
replaced by the contents of the named file, itself expanded. Paths resolve
against the base directory handed to the top-level call at every depth, so a
nested include names its target relative to the same root as its parent.

Example
-------
>>> from pathlib import Path
>>> from docsgen.includes import expand_includes
>>> expand_includes("# Title\nBody", Path("."))
'# Title\nBody\n'
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import INCLUDE_DIRECTIVE, MAX_INCLUDE_DEPTH, TEMPLATE_FILENAME
from ._text import split_lines
from .errors import IncludeError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def parse_directive(line: str) -> str | None:
    """Return the path named by an include directive line, if ``line`` is one.

    Returns ``""`` for a directive with no path so callers can drop it, and
    ``None`` for ordinary lines.
    """
    trimmed = line.strip()
    if not trimmed.startswith(INCLUDE_DIRECTIVE):
        return None
    return trimmed[len(INCLUDE_DIRECTIVE) :].strip()


def expand_includes(markdown: str, base_dir: Path) -> str:
    """Expand include directives in ``markdown`` recursively.

    Parameters
    ----------
    markdown : str
        Source markdown, possibly containing ``@include:`` lines.
    base_dir : Path
        Directory include paths are resolved against.

    Returns
    -------
    str
        Expanded markdown; every emitted line ends with a newline.

    Raises
    ------
    IncludeError
        If an include target cannot be read or includes nest more than
        five levels deep.
    """
    return _expand(markdown, base_dir, 0)


def _expand(markdown: str, base_dir: Path, depth: int) -> str:
    if depth > MAX_INCLUDE_DEPTH:
        msg = f"include depth exceeded under {base_dir}"
        raise IncludeError(msg, base_dir)
    out: list[str] = []
    for line in split_lines(markdown):
        rel = parse_directive(line)
        if rel is None:
            out.append(f"{line}\n")
            continue
        if not rel:
            continue
        target = base_dir / rel
        try:
            included = target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"failed to read include {target}: {exc}"
            raise IncludeError(msg, target) from exc
        logger.debug("expanding include %s (depth %d)", target, depth + 1)
        out.append(_expand(included, base_dir, depth + 1))
        out.append("\n")
    return "".join(out)


def load_include_order(lang_dir: Path) -> list[str]:
    """Return the include paths declared in ``template.md``, in file order.

    A missing or unreadable template yields an empty order, leaving pages in
    alphabetical order.
    """
    template = lang_dir / TEMPLATE_FILENAME
    try:
        content = template.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("ignoring unreadable %s: %s", template, exc)
        return []
    order: list[str] = []
    for line in split_lines(content):
        rel = parse_directive(line)
        if rel:
            order.append(rel.replace("\\", "/"))
    return order


__all__ = ["expand_includes", "load_include_order", "parse_directive"]
