"""Source tree watcher: debounced, coalesced rebuilds."""

import logging
import os
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from sanity.paths import ProjectPaths

if TYPE_CHECKING:
    from sanity.logging import SanityLogger

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 1.0

RebuildCallback = Callable[[list[Path]], Any]


class Debouncer:
    """Batches rapid change events into a single callback.

    Collects events for ``delay`` seconds after the last one, then calls
    ``callback`` with the sources whose outputs must be pruned.
    """

    def __init__(self, delay: float, callback: Callable[[list[Path]], None]):
        self.delay = delay
        self.callback = callback
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()
        self._pending: list[Path] = []

    def trigger(self, prune: Path | None = None) -> None:
        """Register a change event. Resets the debounce timer."""
        with self._lock:
            if prune is not None:
                self._pending.append(prune)

            if self._timer is not None:
                self._timer.cancel()

            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _fire(self) -> None:
        with self._lock:
            pending = list(self._pending)
            self._pending.clear()
            self._timer = None

        self.callback(pending)

    def cancel(self) -> None:
        """Cancel any pending debounce timer."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending.clear()


class RebuildScheduler:
    """Runs rebuilds one at a time.

    A request arriving while a rebuild runs is not started concurrently;
    all such requests collapse into exactly one follow-up rebuild.
    """

    def __init__(self, rebuild: RebuildCallback):
        self._rebuild = rebuild
        self._lock = threading.Lock()
        self._running = False
        self._pending = False
        self._prune: list[Path] = []
        self.runs = 0

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    def request(self, prune: Iterable[Path] = ()) -> None:
        """Rebuild now, or once more after the current rebuild."""
        with self._lock:
            self._prune.extend(prune)
            if self._running:
                self._pending = True
                return
            self._running = True

        finished = False
        try:
            while not finished:
                with self._lock:
                    batch = list(self._prune)
                    self._prune.clear()
                    self._pending = False

                self.runs += 1
                try:
                    self._rebuild(batch)
                except Exception:
                    # The build logs its own failure; keep watching.
                    logger.debug("Rebuild failed", exc_info=True)

                with self._lock:
                    if not self._pending:
                        self._running = False
                        finished = True
        finally:
            if not finished:
                with self._lock:
                    self._running = False


def prune_outputs(paths: ProjectPaths, sources: Iterable[Path]) -> list[Path]:
    """Delete the mirrored outputs of changed or removed sources.

    Returns:
        Outputs that were removed
    """
    removed = []
    for source in dict.fromkeys(sources):
        try:
            dest = paths.dest_for(source)
        except ValueError:
            continue
        if dest.is_file() or dest.is_symlink():
            dest.unlink(missing_ok=True)
            removed.append(dest)
    return removed


class SourceEventHandler(FileSystemEventHandler):
    """Feeds source tree events into the debouncer.

    Modified, deleted and moved files mark their mirrored output for
    removal before the rebuild; new files only trigger it.
    """

    def __init__(self, debouncer: Debouncer, sanity_logger: "SanityLogger | None" = None):
        super().__init__()
        self.debouncer = debouncer
        self.sanity_logger = sanity_logger

    def on_created(self, event: FileSystemEvent) -> None:
        self._handle(event, prune=False)

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._handle(event, prune=True)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._handle(event, prune=not event.is_directory)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._handle(event, prune=not event.is_directory)

    def _handle(self, event: FileSystemEvent, prune: bool) -> None:
        path = Path(os.fsdecode(event.src_path))
        if self.sanity_logger:
            self.sanity_logger.debug(
                "watch", f"{event.event_type}: {path}", {"event": event.event_type}
            )
        self.debouncer.trigger(path if prune else None)


class SourceWatcher:
    """Recursive watchdog observer on the source root.

    Example:
        >>> watcher = SourceWatcher(paths, app.rebuild)
        >>> watcher.start()
        >>> ...
        >>> watcher.stop()
    """

    def __init__(
        self,
        paths: ProjectPaths,
        rebuild: RebuildCallback,
        debounce: float = DEBOUNCE_SECONDS,
        sanity_logger: "SanityLogger | None" = None,
    ):
        """Initialize watcher.

        Args:
            paths: Project paths; the source root is watched
            rebuild: Called with the sources to prune, at most once at a time
            debounce: Quiet period before a rebuild, in seconds
            sanity_logger: Optional sanity logger
        """
        self.paths = paths
        self.scheduler = RebuildScheduler(rebuild)
        self.debouncer = Debouncer(debounce, self.scheduler.request)
        self.handler = SourceEventHandler(self.debouncer, sanity_logger)
        self.sanity_logger = sanity_logger
        self._observer: Any = None

    @property
    def running(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        if self._observer is not None:
            return
        observer = Observer()
        observer.schedule(self.handler, str(self.paths.source), recursive=True)
        observer.start()
        self._observer = observer
        if self.sanity_logger:
            self.sanity_logger.info("watch", f"Watching {self.paths.source} for changes")

    def stop(self, timeout: float = 5.0) -> None:
        self.debouncer.cancel()
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=timeout)
        self._observer = None

    def __enter__(self) -> "SourceWatcher":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
