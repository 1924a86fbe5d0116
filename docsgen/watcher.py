"""Rebuild the site when documentation or template files change.

watchdog's observer thread only enqueues change events. A single consumer
thread drains the queue and, once no event has arrived for the debounce
window, runs one full synchronous build. Builds therefore never overlap and
a burst of saves costs a single rebuild.

Example
-------
>>> from docsgen.models import BuildSettings
>>> from docsgen.watcher import SiteWatcher
>>> watcher = SiteWatcher(BuildSettings())  # doctest: +SKIP
>>> watcher.start()  # doctest: +SKIP
>>> watcher.stop()  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import queue
import threading
import typing as typ

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .errors import DocsgenError
from .generator.site_builder import DEFAULT_TEMPLATES_DIR, build_site

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from watchdog.observers.api import BaseObserver

    from .models import BuildSettings, Site

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.2
MAX_PENDING_EVENTS = 1024


class _QueueingHandler(FileSystemEventHandler):
    """Forward relevant watchdog events to the watcher's queue."""

    def __init__(self, watcher: SiteWatcher) -> None:
        super().__init__()
        self.watcher = watcher

    def on_any_event(self, event: FileSystemEvent) -> None:
        # Directory mtime changes accompany every file change inside them.
        if event.is_directory and event.event_type == "modified":
            return
        self.watcher.notify(event)


class SiteWatcher:
    """Watch the docs and template directories and rebuild on change."""

    def __init__(
        self,
        settings: BuildSettings,
        *,
        debounce: float = DEBOUNCE_SECONDS,
        build: cabc.Callable[[BuildSettings], Site] = build_site,
        observer: BaseObserver | None = None,
    ) -> None:
        """Initialize the watcher without starting any thread.

        Parameters
        ----------
        settings : BuildSettings
            Settings passed to every rebuild.
        debounce : float, optional
            Quiet period in seconds that must follow the last event before a
            rebuild starts.
        build : Callable[[BuildSettings], Site], optional
            Build function; defaults to :func:`docsgen.generator.build_site`.
        observer : BaseObserver, optional
            watchdog observer to schedule on; a platform default is created
            when omitted.
        """
        self.settings = settings
        self.debounce = debounce
        self._build = build
        self._observer = observer if observer is not None else Observer()
        self._events: queue.Queue[FileSystemEvent | None] = queue.Queue(
            maxsize=MAX_PENDING_EVENTS
        )
        self._stopping = threading.Event()
        self._thread: threading.Thread | None = None
        self.rebuild_count = 0

    @property
    def watched_dirs(self) -> list[Path]:
        """Return the existing directories whose changes trigger a rebuild."""
        templates_dir = self.settings.templates_dir or DEFAULT_TEMPLATES_DIR
        candidates = (self.settings.docs_dir, templates_dir)
        return [path for path in candidates if path.is_dir()]

    def start(self) -> None:
        """Schedule the observer and start the rebuild thread."""
        handler = _QueueingHandler(self)
        for path in self.watched_dirs:
            self._observer.schedule(handler, str(path), recursive=True)
            logger.info("watching %s", path)
        self._observer.start()
        self._thread = threading.Thread(
            target=self._run, name="docsgen-watcher", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Stop observing and wait for an in-flight rebuild to finish."""
        self._stopping.set()
        self._observer.stop()
        self._observer.join(timeout)
        if self._thread is not None:
            self._thread.join(timeout)

    def notify(self, event: FileSystemEvent | None = None) -> None:
        """Record a change; the next quiet period triggers a rebuild."""
        try:
            self._events.put_nowait(event)
        except queue.Full:
            # A rebuild is already pending; the dropped event adds nothing.
            logger.debug("event queue full, dropping %r", event)

    def _run(self) -> None:
        pending = False
        while not self._stopping.is_set():
            try:
                event = self._events.get(timeout=self.debounce)
            except queue.Empty:
                if pending:
                    pending = False
                    self._rebuild()
                continue
            if event is not None:
                logger.debug("change detected: %s", event.src_path)
            pending = True

    def _rebuild(self) -> None:
        logger.info("rebuilding %s", self.settings.out_dir)
        self.rebuild_count += 1
        try:
            self._build(self.settings)
        except DocsgenError:
            logger.exception("rebuild failed")
        except Exception:  # noqa: BLE001 - the loop outlives any single build
            logger.exception("rebuild failed unexpectedly")


__all__ = ["DEBOUNCE_SECONDS", "SiteWatcher"]
