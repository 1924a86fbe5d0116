"""Cyclopts CLI entrypoint for building and previewing docsgen sites.

The ``docsgen`` console script renders a language-organised markdown tree into
static HTML (``docsgen build``) or builds it once and serves the result
locally, optionally rebuilding on change (``docsgen serve --watch``). Every
flag can also be supplied through a ``DOCSGEN_``-prefixed environment
variable, e.g. ``DOCSGEN_DOCS_DIR``.

Examples
--------
Build the default ``docs`` tree into ``public``:

>>> from docsgen.cli import main
>>> main()  # doctest: +SKIP

Serve a custom tree with live rebuilds:

>>> from docsgen.cli import app
>>> app(["serve", "--docs-dir", "handbook", "--watch"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_SITE_TITLE, SEARCH_INDEX_FILENAME
from .discovery import output_path_for
from .errors import DocsgenError
from .generator import build_site
from .models import BuildSettings
from .server import make_server
from .watcher import SiteWatcher

if typ.TYPE_CHECKING:
    from .models import Site

app = App(name="docsgen", config=cyclopts.config.Env("DOCSGEN_", command=False))  # type: ignore[unknown-argument]

DocsDir = typ.Annotated[
    Path, Parameter(help="Documentation root, one folder per language")
]
OutDir = typ.Annotated[Path, Parameter(help="Output folder for the generated site")]
AssetsDir = typ.Annotated[Path, Parameter(help="Folder copied into <out-dir>/assets")]
TemplatesDir = typ.Annotated[
    Path | None, Parameter(help="Folder holding page.html (packaged if omitted)")
]
SiteTitle = typ.Annotated[str, Parameter(help="Title used when site.md sets none")]
Verbose = typ.Annotated[bool, Parameter(help="Log each written page")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _run_build(settings: BuildSettings) -> Site:
    """Build the site, turning pipeline errors into a non-zero exit."""
    try:
        return build_site(settings)
    except DocsgenError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


@app.command(help="Build the static site once.")
def build(
    *,
    docs_dir: DocsDir = Path("docs"),
    out_dir: OutDir = Path("public"),
    assets_dir: AssetsDir = Path("assets"),
    templates_dir: TemplatesDir = None,
    site_title: SiteTitle = DEFAULT_SITE_TITLE,
    verbose: Verbose = False,
) -> None:
    """Render every language and page under ``docs_dir`` into ``out_dir``.

    Parameters
    ----------
    docs_dir : Path, optional
        Documentation root containing one directory per language.
    out_dir : Path, optional
        Output directory; wiped first when a previous build left its marker.
    assets_dir : Path, optional
        Static assets mirrored into ``<out_dir>/assets``.
    templates_dir : Path or None, optional
        Jinja template folder; the packaged template is used when ``None``.
    site_title : str, optional
        Fallback site title.
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes the site and prints the generated paths.
    """
    _configure_logging(verbose)
    settings = BuildSettings(
        docs_dir=docs_dir,
        out_dir=out_dir,
        assets_dir=assets_dir,
        templates_dir=templates_dir,
        site_title=site_title,
    )
    site = _run_build(settings)
    for language in site.languages:
        for page in language.pages:
            path = output_path_for(out_dir, language.code, page.rel_slug)
            print(f"wrote {_format_path(path)}")
    print(f"wrote {_format_path(out_dir / SEARCH_INDEX_FILENAME)}")


@app.command(help="Build the site, then serve it locally.")
def serve(
    *,
    docs_dir: DocsDir = Path("docs"),
    out_dir: OutDir = Path("public"),
    assets_dir: AssetsDir = Path("assets"),
    templates_dir: TemplatesDir = None,
    site_title: SiteTitle = DEFAULT_SITE_TITLE,
    host: typ.Annotated[str, Parameter(help="Interface to bind")] = "127.0.0.1",
    port: typ.Annotated[int, Parameter(help="Port to bind")] = 8088,
    watch: typ.Annotated[
        bool, Parameter(help="Rebuild when docs or templates change")
    ] = False,
    verbose: Verbose = False,
) -> None:
    """Build once, optionally start the watcher, then serve ``out_dir``.

    Runs until interrupted. Rebuild failures in watch mode are logged and do
    not stop the server.
    """
    _configure_logging(verbose)
    settings = BuildSettings(
        docs_dir=docs_dir,
        out_dir=out_dir,
        assets_dir=assets_dir,
        templates_dir=templates_dir,
        site_title=site_title,
    )
    site = _run_build(settings)
    watcher = SiteWatcher(settings) if watch else None
    if watcher is not None:
        watcher.start()

    server = make_server(out_dir, site.default_language, host, port)
    print(f"Serving on http://{host}:{port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nStopping...")
    finally:
        server.server_close()
        if watcher is not None:
            watcher.stop()


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docsgen`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
