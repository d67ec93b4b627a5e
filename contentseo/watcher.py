"""
Content change watcher.

Regenerates sitemap.xml and robots.txt after the content tree has been quiet
for a debounce period. Filesystem events arrive on watchdog's observer thread
and timers fire on their own threads, so all state changes go through a lock.
"""

from enum import Enum
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional
import logging
import os
import signal
import threading

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .config import (
    BASE_URL, BOARDS_CONFIG_PATH, CONTENT_DIR, DEBOUNCE_SECONDS, OUTPUT_DIR, WATCH_EXTENSIONS,
)
from .generators.pipeline import generate_seo_files

logger = logging.getLogger(__name__)

HANDLED_EVENTS = {"created", "modified", "deleted", "moved"}


class WatcherState(Enum):
    IDLE = "idle"
    PENDING_UPDATE = "pending_update"
    UPDATING = "updating"


class ContentWatcher:
    """
    Debounced regeneration state machine.

    IDLE -> PENDING_UPDATE on a relevant change; every further change restarts
    the timer. Timer expiry moves to UPDATING, runs `regenerate`, and returns
    to IDLE (or PENDING_UPDATE when a change re-armed the timer meanwhile).
    A second update requested while one is running is dropped with a notice.
    """

    def __init__(
        self,
        regenerate: Callable[[], object],
        debounce_seconds: float = DEBOUNCE_SECONDS,
        extensions: Iterable[str] = WATCH_EXTENSIONS,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self._regenerate = regenerate
        self.debounce_seconds = debounce_seconds
        self.extensions = tuple(ext.lower() for ext in extensions)
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self.state = WatcherState.IDLE

    def is_relevant(self, path: str) -> bool:
        return Path(path).suffix.lower() in self.extensions

    def notify_change(self, path: str, event_type: str = "modified") -> bool:
        """Handle a change inside a watched tree. Returns True if it was scheduled."""
        if not self.is_relevant(path):
            return False
        logger.info(f"File change detected: {path} ({event_type})")
        self._schedule()
        return True

    def notify_target_change(self, path: str, event_type: str = "modified") -> None:
        """Handle a change to an explicitly watched file (no extension filter)."""
        logger.info(f"File change detected: {path} ({event_type})")
        self._schedule()

    def _schedule(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = self._timer_factory(self.debounce_seconds, self._expire, args=(self._generation,))
            timer.daemon = True
            self._timer = timer
            if self.state is WatcherState.IDLE:
                self.state = WatcherState.PENDING_UPDATE
            timer.start()

    def _expire(self, generation: int) -> None:
        with self._lock:
            # A timer cancelled too late must not fire on behalf of its successor
            if generation != self._generation:
                return
            self._timer = None
        self.update()

    def update(self) -> bool:
        """Run one regeneration unless one is already running."""
        with self._lock:
            if self.state is WatcherState.UPDATING:
                logger.info("Update already in progress, skipping")
                return False
            self.state = WatcherState.UPDATING

        logger.info("Regenerating SEO files...")
        try:
            self._regenerate()
            logger.info(f"SEO files updated ({datetime.now().strftime('%H:%M:%S')})")
        except Exception as e:
            logger.error(f"SEO file update failed: {e}")
        finally:
            with self._lock:
                if self._timer is not None:
                    self.state = WatcherState.PENDING_UPDATE
                else:
                    self.state = WatcherState.IDLE
        return True

    def cancel(self) -> None:
        """Cancel any pending debounce timer."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1
            if self.state is WatcherState.PENDING_UPDATE:
                self.state = WatcherState.IDLE


class ContentChangeHandler(FileSystemEventHandler):
    """Forwards watchdog events to a ContentWatcher."""

    def __init__(self, watcher: ContentWatcher, target: Optional[Path] = None):
        super().__init__()
        self.watcher = watcher
        self.target = Path(target).resolve() if target is not None else None

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in HANDLED_EVENTS:
            return

        paths = [event.src_path]
        if getattr(event, "dest_path", None):
            paths.append(event.dest_path)

        for raw_path in paths:
            path = os.fsdecode(raw_path)
            if self.target is not None:
                if Path(path).resolve() == self.target:
                    self.watcher.notify_target_change(path, event.event_type)
                    return
            elif not event.is_directory and self.watcher.notify_change(path, event.event_type):
                return


def watch_paths(watcher: ContentWatcher, paths: Iterable[Path], observer) -> List[Path]:
    """
    Schedule watchdog handlers for each path.

    Directories are watched recursively; a single file is watched through its
    parent directory. Missing paths are skipped with a warning.

    Returns:
        The paths that are actually being watched
    """
    watched = []
    for path in paths:
        path = Path(path)
        if not path.exists():
            logger.warning(f"Watch path does not exist: {path}")
            continue

        if path.is_dir():
            observer.schedule(ContentChangeHandler(watcher), str(path), recursive=True)
            logger.info(f"Watching: {path} (recursive)")
        else:
            observer.schedule(ContentChangeHandler(watcher, target=path), str(path.parent), recursive=False)
            logger.info(f"Watching: {path}")
        watched.append(path)

    return watched


def run_watcher(
    content_dir=CONTENT_DIR,
    output_dir=OUTPUT_DIR,
    paths: Optional[Iterable[Path]] = None,
    base_url: str = BASE_URL,
    debounce_seconds: float = DEBOUNCE_SECONDS,
    observer_factory: Callable[[], object] = Observer,
    timer_factory: Callable[..., threading.Timer] = threading.Timer,
) -> int:
    """
    Generate once, then regenerate on content changes until SIGINT/SIGTERM.

    Signal handlers installed here are restored to their previous values
    once the loop exits.

    Returns:
        Process exit code
    """
    stop_event = threading.Event()
    watcher = ContentWatcher(
        lambda: generate_seo_files(content_dir, output_dir, base_url),
        debounce_seconds=debounce_seconds,
        timer_factory=timer_factory,
    )

    logger.info("Initial SEO file generation...")
    watcher.update()

    observer = observer_factory()
    if paths is None:
        paths = [Path(content_dir), BOARDS_CONFIG_PATH]
    watch_paths(watcher, paths, observer)

    def _shutdown(signum, frame):
        watcher.cancel()
        stop_event.set()

    previous_handlers = {
        signum: signal.signal(signum, _shutdown) for signum in (signal.SIGINT, signal.SIGTERM)
    }

    try:
        observer.start()
        logger.info("Watching for changes. Press Ctrl+C to stop.")
        while not stop_event.wait(1.0):
            pass
    finally:
        watcher.cancel()
        observer.stop()
        observer.join()
        for signum, handler in previous_handlers.items():
            if handler is not None:
                signal.signal(signum, handler)

    logger.info("Watcher stopped")
    return 0
