"""Filesystem watcher that reports creations in the target directory.

The watcher only logs; it never touches the manifest or the content store.
Running it alongside check/track/untrack is unsupported.

Observer selection:
- Native observer by default (inotify, FSEvents)
- PollingObserver when the inotify watch limit is exhausted
"""

import threading
from pathlib import Path
from typing import Any, Optional

from loguru import logger
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.polling import PollingObserver

from .paths import relative_to

POLLING_TIMEOUT_SECONDS = 2


class _CreationLogger(FileSystemEventHandler):
    """Log every created path relative to the watched root."""

    def __init__(self, root: Path):
        super().__init__()
        self._root = root

    def on_created(self, event: FileSystemEvent) -> None:
        created = Path(str(event.src_path))
        logger.info(f"File created: {relative_to(self._root, created)}")


class TargetWatcher:
    """Recursive watcher over a dotfiles target directory.

    Lifecycle:
        1. Create TargetWatcher with the target directory
        2. Call start() to begin watching
        3. Call stop() to shut the observer down
    """

    def __init__(self, target: Path):
        self._target = Path(target)
        self._observer: Optional[Any] = None

    def _create_observer(self) -> Any:
        """Create a native observer, or a polling one if inotify is exhausted."""
        try:
            observer = Observer()
            observer.schedule(_CreationLogger(self._target), str(self._target), recursive=True)
            observer.start()
            return observer
        except OSError as e:
            if 'inotify' in str(e).lower() or getattr(e, 'errno', None) == 28:
                logger.warning(
                    f"inotify limit reached, falling back to PollingObserver: {e}"
                )
                observer = PollingObserver(timeout=POLLING_TIMEOUT_SECONDS)
                observer.schedule(_CreationLogger(self._target), str(self._target), recursive=True)
                observer.start()
                return observer
            raise

    def start(self) -> None:
        """Start watching the target directory.

        Raises:
            NotADirectoryError: If the target does not exist
        """
        if self._observer is not None:
            logger.warning("Watcher already started")
            return
        if not self._target.is_dir():
            raise NotADirectoryError(f"{self._target} is not a directory")

        logger.info(f"Watching file changes in target {self._target}")
        self._observer = self._create_observer()

    def stop(self) -> None:
        """Stop the observer. Safe to call multiple times."""
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=2.0)
        self._observer = None
        logger.info("Watcher stopped")

    @property
    def running(self) -> bool:
        return self._observer is not None


def watch(target: Path, stop_event: Optional[threading.Event] = None) -> None:
    """Watch ``target`` until interrupted or ``stop_event`` is set."""
    watcher = TargetWatcher(target)
    watcher.start()
    stop_event = stop_event or threading.Event()
    try:
        while not stop_event.wait(timeout=1.0):
            pass
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        watcher.stop()
