"""Static preview server for a built site.

Files are served from the output directory with ``index.html`` as the
directory index. ``/`` redirects to the default language and ``/<lang>`` to
``/<lang>/``.
"""

from __future__ import annotations

import functools
import logging
import typing as typ
from http import HTTPStatus
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class PreviewRequestHandler(SimpleHTTPRequestHandler):
    """Serve the output tree, redirecting language roots to their index."""

    default_language = ""

    def __init__(
        self, *args: typ.Any, default_language: str, directory: str, **kwargs: typ.Any
    ) -> None:
        self.default_language = default_language
        super().__init__(*args, directory=directory, **kwargs)

    def do_GET(self) -> None:  # noqa: N802 - http.server API
        """Redirect ``/`` and bare language paths, otherwise serve a file."""
        location = self._redirect_target(urlsplit(self.path).path)
        if location is None:
            super().do_GET()
            return
        self.send_response(HTTPStatus.FOUND)
        self.send_header("Location", location)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def _redirect_target(self, path: str) -> str | None:
        if path == "/":
            return f"/{self.default_language}/"
        segment = path[1:]
        if segment and "/" not in segment and "." not in segment:
            return f"/{segment}/"
        return None

    def log_message(self, format: str, *args: typ.Any) -> None:  # noqa: A002
        logger.debug("%s - %s", self.address_string(), format % args)


def make_server(
    out_dir: Path, default_language: str, host: str = "127.0.0.1", port: int = 8088
) -> ThreadingHTTPServer:
    """Return an HTTP server previewing ``out_dir``; ``serve_forever`` runs it."""
    handler = functools.partial(
        PreviewRequestHandler,
        default_language=default_language,
        directory=str(out_dir.resolve()),
    )
    return ThreadingHTTPServer((host, port), handler)


__all__ = ["PreviewRequestHandler", "make_server"]
