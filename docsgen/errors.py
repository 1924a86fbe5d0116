"""Exception hierarchy raised by the docsgen build pipeline.

Every error carries an optional ``path`` naming the file or directory that
triggered it so the CLI and the watch loop can report something actionable.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class DocsgenError(Exception):
    """Base class for all build failures."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigError(DocsgenError):
    """Raised when the docs root is missing or yields no pages."""


class DocsIOError(DocsgenError):
    """Raised when a file or directory cannot be read or written."""


class IncludeError(DocsgenError):
    """Raised when an ``@include:`` target is missing or nests too deeply."""


class TemplateError(DocsgenError):
    """Raised when the page template cannot be loaded or rendered."""


class SerializationError(DocsgenError):
    """Raised when the search index cannot be encoded."""


__all__ = [
    "ConfigError",
    "DocsIOError",
    "DocsgenError",
    "IncludeError",
    "SerializationError",
    "TemplateError",
]
