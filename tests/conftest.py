"""Shared fixtures for building small documentation trees on disk."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


def write_tree(root: Path, files: cabc.Mapping[str, str]) -> Path:
    """Write ``files`` (relative path -> dedented content) under ``root``."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(content).lstrip("\n"), encoding="utf-8")
    return root


@pytest.fixture
def docs_tree(tmp_path: Path) -> cabc.Callable[[cabc.Mapping[str, str]], Path]:
    """Return a factory writing a docs tree under ``tmp_path / "docs"``."""

    def _factory(files: cabc.Mapping[str, str]) -> Path:
        return write_tree(tmp_path / "docs", files)

    return _factory
