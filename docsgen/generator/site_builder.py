"""High-level orchestration for a full documentation site build.

This module drives one complete build: it discovers every language and page
under the docs root, expands includes, splits each page into its description
and architecture sections, renders them with :class:`HtmlContentRenderer`,
and writes the Jinja-rendered ``page.html`` for each page. It finishes by
mirroring the assets directory, writing the code highlighting stylesheet,
writing ``search.json`` and dropping the ``.docsgen`` ownership marker.

The marker is what makes rebuilding safe: an output directory carrying it is
deleted wholesale before the next build, while a directory without it is
written into but never wiped. Anything placed by hand into a managed output
directory is lost on the next build.

Example
-------
>>> from pathlib import Path
>>> from docsgen.models import BuildSettings
>>> from docsgen.generator import build_site
>>> site = build_site(BuildSettings(docs_dir=Path("docs")))  # doctest: +SKIP
>>> site.default_language  # doctest: +SKIP
'en'
"""

from __future__ import annotations

import logging
import shutil
import typing as typ
from pathlib import Path

import jinja2
from jinja2 import Environment, FileSystemLoader, select_autoescape

from docsgen._constants import (
    CODEHILITE_STYLESHEET,
    MARKER_CONTENT,
    MARKER_FILENAME,
    PAGE_TEMPLATE_NAME,
)
from docsgen.discovery import discover_site, output_path_for
from docsgen.errors import ConfigError, DocsIOError, TemplateError
from docsgen.generator.renderer import HtmlContentRenderer
from docsgen.includes import expand_includes
from docsgen.markdown_parser import split_sections
from docsgen.navigation import build_nav
from docsgen.search import build_search_entry, write_search_index
from docsgen.site_config import load_site_config

if typ.TYPE_CHECKING:
    from docsgen.models import (
        BuildSettings,
        Language,
        Page,
        SearchEntry,
        Site,
        SiteConfig,
    )

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


class SiteBuilder:
    """Render every page of every language into a static output tree."""

    def __init__(self, settings: BuildSettings) -> None:
        """Initialize the builder with the locations used for one build.

        Parameters
        ----------
        settings : BuildSettings
            Docs, output, assets and template locations plus the fallback
            site title.
        """
        self.settings = settings
        self.templates_dir = settings.templates_dir or DEFAULT_TEMPLATES_DIR
        self.renderer = HtmlContentRenderer()

    def run(self) -> Site:
        """Build the whole site and return the discovered site structure.

        Returns
        -------
        Site
            Languages and pages that were rendered.

        Raises
        ------
        ConfigError
            If the docs root is missing or holds no pages.
        DocsIOError
            If an input cannot be read or an output cannot be written.
        IncludeError
            If a page's includes cannot be expanded.
        TemplateError
            If the page template fails to load or render.
        SerializationError
            If the search index cannot be encoded.
        """
        docs_dir = self.settings.docs_dir
        out_dir = self.settings.out_dir
        if not docs_dir.exists():
            msg = f"docs dir not found: {docs_dir}"
            raise ConfigError(msg, docs_dir)

        template = self._load_template()
        prepare_output_dir(out_dir)
        site = discover_site(docs_dir)

        search_entries: list[SearchEntry] = []
        for language in site.languages:
            config = load_site_config(docs_dir, language.code)
            for page in language.pages:
                entry = self._build_page(site, language, page, config, template)
                if entry is not None:
                    search_entries.append(entry)

        copy_assets(self.settings.assets_dir, out_dir / "assets")
        write_stylesheet(out_dir / CODEHILITE_STYLESHEET, self.renderer.stylesheet)
        write_search_index(out_dir, search_entries)
        _write_text(out_dir / MARKER_FILENAME, MARKER_CONTENT)
        logger.info(
            "built %d pages in %d languages into %s",
            len(search_entries),
            len(site.languages),
            out_dir,
        )
        return site

    def _load_template(self) -> jinja2.Template:
        """Load ``page.html`` from the configured template directory."""
        env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        try:
            return env.get_template(PAGE_TEMPLATE_NAME)
        except jinja2.TemplateError as exc:
            msg = f"failed to load templates from {self.templates_dir}: {exc}"
            raise TemplateError(msg, self.templates_dir) from exc

    def _build_page(
        self,
        site: Site,
        language: Language,
        page: Page,
        config: SiteConfig,
        template: jinja2.Template,
    ) -> SearchEntry | None:
        """Render one page to disk and return its search entry.

        Returns ``None`` when the page's markdown vanished after discovery.
        """
        lang_dir = self.settings.docs_dir / language.code
        md_path = lang_dir / page.source_rel
        if not md_path.exists():
            logger.debug("skipping %s: source removed since discovery", md_path)
            return None
        try:
            markdown = md_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"failed to read {md_path}: {exc}"
            raise DocsIOError(msg, md_path) from exc

        expanded = expand_includes(markdown, md_path.parent)
        sections = split_sections(expanded)
        description_md = sections.full if sections.is_fallback else sections.description

        context: dict[str, typ.Any] = {
            "site_title": (
                config.title if config.title is not None else self.settings.site_title
            ),
            "page_title": page.title,
            "lang": language.code,
            "content_html": self.renderer.markdown(expanded, anchors=True),
            "description_html": self.renderer.markdown(description_md, anchors=True),
            "architecture_html": self.renderer.markdown(sections.architecture),
            "architecture_json_html": self.renderer.markdown(
                sections.architecture_json
            ),
            "architecture_text_html": self.renderer.markdown(
                sections.architecture_text
            ),
            "nav_groups": build_nav(lang_dir, language.pages, page.url),
            "nav_pages": language.pages,
            "current_url": page.url,
            "langs": site.languages,
            "dev_reload": False,
        }
        for key in ("logo", "footer", "subtitle"):
            value = getattr(config, key)
            if value is not None:
                context[f"site_{key}"] = value

        try:
            html = template.render(**context)
        except Exception as exc:  # noqa: BLE001 - Jinja passes Python errors through
            msg = f"failed to render {page.url}: {exc}"
            raise TemplateError(msg, md_path) from exc

        output_path = output_path_for(
            self.settings.out_dir, language.code, page.rel_slug
        )
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"failed to create {output_path.parent}: {exc}"
            raise DocsIOError(msg, output_path.parent) from exc
        _write_text(output_path, html)
        logger.debug("wrote %s", output_path)
        return build_search_entry(language.code, page, expanded)


def build_site(settings: BuildSettings) -> Site:
    """Run a full build with ``settings``; see :meth:`SiteBuilder.run`."""
    return SiteBuilder(settings).run()


def prepare_output_dir(out_dir: Path) -> None:
    """Create ``out_dir``, first deleting it when it carries the ownership marker."""
    marker = out_dir / MARKER_FILENAME
    try:
        if out_dir.exists() and marker.exists():
            logger.debug("cleaning managed output dir %s", out_dir)
            shutil.rmtree(out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"failed to prepare {out_dir}: {exc}"
        raise DocsIOError(msg, out_dir) from exc


def copy_assets(src_dir: Path, dest_dir: Path) -> None:
    """Mirror ``src_dir`` into ``dest_dir``; a missing source is a no-op."""
    if not src_dir.exists():
        return
    try:
        shutil.copytree(src_dir, dest_dir, dirs_exist_ok=True)
    except OSError as exc:
        msg = f"failed to copy assets from {src_dir}: {exc}"
        raise DocsIOError(msg, src_dir) from exc


def write_stylesheet(path: Path, css: str) -> None:
    """Write the highlighting CSS, replacing any copy from the assets dir."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"failed to create {path.parent}: {exc}"
        raise DocsIOError(msg, path.parent) from exc
    _write_text(path, css)


def _write_text(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        msg = f"failed to write {path}: {exc}"
        raise DocsIOError(msg, path) from exc


__all__ = [
    "DEFAULT_TEMPLATES_DIR",
    "SiteBuilder",
    "build_site",
    "copy_assets",
    "prepare_output_dir",
    "write_stylesheet",
]
