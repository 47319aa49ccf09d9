"""Directory watcher that regenerates feeds after a quiet period."""

from __future__ import annotations

import logging
import os
import queue
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from clipfeed.errors import FatalStartupError, WatchRegistrationError
from clipfeed.metadata.scanner import is_document
from clipfeed.watch.debounce import DebounceCoordinator

logger = logging.getLogger(__name__)


class ChangeOp(str, Enum):
    WRITE = "write"
    CREATE = "create"
    REMOVE = "remove"
    RENAME = "rename"


_OPS_BY_EVENT_TYPE = {
    EVENT_TYPE_MODIFIED: ChangeOp.WRITE,
    EVENT_TYPE_CREATED: ChangeOp.CREATE,
    EVENT_TYPE_DELETED: ChangeOp.REMOVE,
    EVENT_TYPE_MOVED: ChangeOp.RENAME,
}


@dataclass(frozen=True)
class ChangeEvent:
    """A file-system change, detached from the watchdog event classes."""

    op: ChangeOp
    path: str
    dest_path: str | None = None
    is_directory: bool = False

    @classmethod
    def from_watchdog(cls, event: FileSystemEvent) -> ChangeEvent | None:
        """Convert a watchdog event; open/close notifications map to None."""
        op = _OPS_BY_EVENT_TYPE.get(event.event_type)
        if op is None:
            return None
        dest = getattr(event, "dest_path", "") or None
        return cls(
            op=op,
            path=os.fsdecode(event.src_path),
            dest_path=os.fsdecode(dest) if dest else None,
            is_directory=event.is_directory,
        )


def is_qualifying(event: ChangeEvent, extension: str = ".md") -> bool:
    """True if the event should trigger a regeneration.

    A rename counts when either side of it carries the document extension,
    so editors that save through a temp file still trigger. Every ChangeOp
    counts; from_watchdog already drops the other watchdog event kinds.
    """
    if is_document(event.path, extension):
        return True
    return event.dest_path is not None and is_document(event.dest_path, extension)


class _QueueingHandler(FileSystemEventHandler):
    """Forwards watchdog events into the watcher's event channel."""

    def __init__(self, events: queue.Queue) -> None:
        super().__init__()
        self._events = events

    def on_any_event(self, event: FileSystemEvent) -> None:
        change = ChangeEvent.from_watchdog(event)
        if change is not None:
            self._events.put(change)


_STOP = object()


class ChangeWatcher:
    """Watches a clippings tree and calls ``on_change`` after changes settle.

    Each directory is registered individually (non-recursive), so the watch
    set is explicit: directories created later are added as they appear,
    and deleted or renamed directories are pruned.

    start() registers the initial tree from the calling thread before the
    loop thread exists. From then on only the loop thread changes the watch
    set or the debounce deadline; the lock lets ``watched_dirs`` hand other
    threads a consistent snapshot. The loop consumes events from a queue
    and also runs ``on_change``, so a regeneration never overlaps another;
    events that arrive during one wait in the queue and arm the next.
    """

    def __init__(
        self,
        root: str | Path,
        on_change: Callable[[], object],
        *,
        debounce_seconds: float = 10.0,
        extension: str = ".md",
        observer_factory: Callable[[], Observer] = Observer,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._root = Path(root).resolve()
        self._extension = extension
        self._observer_factory = observer_factory
        self._events: queue.Queue = queue.Queue()
        self._handler = _QueueingHandler(self._events)
        self._debounce = DebounceCoordinator(debounce_seconds, on_change, clock=clock)
        self._watches: dict[str, object] = {}
        self._watches_lock = threading.Lock()
        self._observer: Observer | None = None
        self._thread: threading.Thread | None = None

    @property
    def root(self) -> Path:
        return self._root

    @property
    def debounce(self) -> DebounceCoordinator:
        return self._debounce

    @property
    def watched_dirs(self) -> set[str]:
        """Snapshot of the directories currently registered with the observer."""
        with self._watches_lock:
            return set(self._watches)

    def start(self) -> None:
        """Register every directory under root and begin watching.

        Raises FatalStartupError if the observer cannot start or the root
        itself cannot be watched. Subdirectories that fail are logged and
        left unmonitored.
        """
        if self._observer is not None:
            return
        observer = self._observer_factory()
        try:
            observer.start()
        except (OSError, RuntimeError) as e:
            raise FatalStartupError(f"failed to create watcher: {e}") from e
        self._observer = observer

        try:
            self._schedule(str(self._root))
        except WatchRegistrationError as e:
            self._shutdown_observer()
            raise FatalStartupError(f"failed to add watches: {e}") from e
        self._watch_tree(self._root, include_root=False)

        self._thread = threading.Thread(
            target=self._loop, name="clipfeed-watch", daemon=True
        )
        self._thread.start()
        logger.info("File watcher started for directory: %s", self._root)

    def stop(self) -> None:
        """Close the event source and wait for the loop to exit."""
        if self._observer is None:
            return
        self._shutdown_observer()
        self._events.put(_STOP)
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None
        with self._watches_lock:
            self._watches.clear()
        logger.info("Stopped watching %s", self._root)

    # -- loop ---------------------------------------------------------------

    def _loop(self) -> None:
        while True:
            try:
                item = self._events.get(timeout=self._debounce.time_until_due())
            except queue.Empty:
                self._debounce.fire_if_due()
                continue
            if item is _STOP:
                return
            self._handle_event(item)
            self._debounce.fire_if_due()

    def _handle_event(self, event: ChangeEvent) -> None:
        if is_qualifying(event, self._extension):
            logger.info("Detected change in document: %s", event.dest_path or event.path)
            self._debounce.arm()

        if not event.is_directory:
            return
        added_documents = False
        if event.op is ChangeOp.CREATE:
            added_documents = self._watch_tree(Path(event.path), include_root=True)
        elif event.op is ChangeOp.REMOVE:
            self._unwatch_tree(event.path)
        elif event.op is ChangeOp.RENAME:
            self._unwatch_tree(event.path)
            if event.dest_path and Path(event.dest_path).is_relative_to(self._root):
                added_documents = self._watch_tree(
                    Path(event.dest_path), include_root=True
                )
        # Documents inside a directory that appeared in one step produce no
        # events of their own
        if added_documents:
            logger.info("Detected documents in new directory: %s", event.dest_path or event.path)
            self._debounce.arm()

    # -- watch set ----------------------------------------------------------

    def _watch_tree(self, top: Path, *, include_root: bool) -> bool:
        """Best-effort registration of top's directory tree.

        Returns True if any document was seen while walking it.
        """

        def _on_walk_error(exc: OSError) -> None:
            logger.warning("Warning: failed to walk directory %s: %s", exc.filename, exc)

        found_documents = False
        for dirpath, dirnames, filenames in os.walk(top, onerror=_on_walk_error):
            dirnames.sort()
            found_documents = found_documents or any(
                is_document(name, self._extension) for name in filenames
            )
            if dirpath == str(top) and not include_root:
                continue
            try:
                self._schedule(dirpath)
            except WatchRegistrationError as e:
                logger.warning("Warning: %s", e)
                # Its subtree would be unreachable by events anyway
                dirnames.clear()
        return found_documents

    def _schedule(self, path: str) -> None:
        with self._watches_lock:
            if path in self._watches:
                return
        if self._observer is None:
            raise WatchRegistrationError(path, RuntimeError("watcher is not running"))
        try:
            watch = self._observer.schedule(self._handler, path, recursive=False)
        except OSError as e:
            raise WatchRegistrationError(path, e) from e
        with self._watches_lock:
            self._watches[path] = watch
        logger.debug("Watching directory: %s", path)

    def _unwatch_tree(self, top: str) -> None:
        prefix = top.rstrip(os.sep) + os.sep
        with self._watches_lock:
            doomed = {
                p: w for p, w in self._watches.items()
                if p == top or p.startswith(prefix)
            }
            for p in doomed:
                del self._watches[p]
        for path, watch in doomed.items():
            try:
                if self._observer is not None:
                    self._observer.unschedule(watch)
            except (KeyError, OSError) as e:
                logger.debug("Watch for %s already gone: %s", path, e)
            logger.debug("Removed watch for directory: %s", path)

    def _shutdown_observer(self) -> None:
        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        observer.join(timeout=5)
