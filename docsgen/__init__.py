"""Static documentation sites from language-organised markdown trees.

The package discovers pages under ``<docs>/<lang>/``, expands ``@include:``
directives, renders each page through a Jinja template and writes a static
tree plus a ``search.json`` index. The ``docsgen`` console script wraps the
build and a local preview server.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``build_site``: Run one full build from ``BuildSettings``.

Examples
--------
>>> from docsgen import main
>>> main()  # doctest: +SKIP
>>> from docsgen import BuildSettings, build_site
>>> build_site(BuildSettings())  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .generator import build_site
from .models import BuildSettings

__all__ = ["BuildSettings", "app", "build_site", "main"]
