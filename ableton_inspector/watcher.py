"""
File watcher for re-inspecting an Ableton Live Set whenever it is saved.

Live writes the set through a temporary file and renames it into place, so
created and moved events count as changes too.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Dict, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class ProjectFileHandler(FileSystemEventHandler):
    """
    File system event handler for one project file.

    Triggers the callback when the file changes, ignoring repeats that
    arrive within the debounce window.
    """

    def __init__(self, file_path: Path, callback: Callable[[Path], None], debounce_seconds: float = 1.0):
        """
        Initialize the file handler.

        Args:
            file_path: Project file to watch
            callback: Function to call when the file changes
            debounce_seconds: Ignore duplicate events within this window
        """
        self.file_path = file_path.resolve()
        self.callback = callback
        self.debounce_seconds = debounce_seconds
        self.last_modified: Dict[Path, float] = {}

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._handle(event.src_path)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._handle(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._handle(event.dest_path)

    def _handle(self, src_path) -> None:
        file_path = Path(src_path).resolve()
        if file_path != self.file_path:
            return

        # Debounce: ignore if we just processed this file
        now = time.time()
        if now - self.last_modified.get(file_path, 0) < self.debounce_seconds:
            return
        self.last_modified[file_path] = now

        try:
            self.callback(file_path)
        except Exception as e:
            logger.error(f"Error processing file change: {e}")


class FileWatcher:
    """
    Watches a project file for changes.

    Usage:
        def on_change(file_path):
            print(f"Project changed: {file_path}")

        with FileWatcher(Path("song.als"), on_change):
            ...
    """

    def __init__(self, file_path: Path, callback: Callable[[Path], None], debounce_seconds: float = 1.0):
        """
        Initialize the file watcher.

        Args:
            file_path: Project file to watch
            callback: Function to call when the file changes (receives Path object)
            debounce_seconds: Minimum interval between two callbacks
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Path does not exist: {file_path}")

        self.file_path = file_path
        self.handler = ProjectFileHandler(file_path, callback, debounce_seconds)
        self.observer: Optional[Observer] = None

    def start(self) -> None:
        """Start watching for file changes."""
        if self.observer and self.observer.is_alive():
            raise RuntimeError("Watcher is already running")

        # Watch the parent directory so renames onto the file are seen
        self.observer = Observer()
        self.observer.schedule(self.handler, str(self.file_path.resolve().parent), recursive=False)
        self.observer.start()
        logger.info(f"Watching for changes: {self.file_path}")

    def stop(self) -> None:
        """Stop watching for file changes."""
        if self.observer and self.observer.is_alive():
            self.observer.stop()
            self.observer.join()
            logger.info("File watcher stopped")

    def is_running(self) -> bool:
        return self.observer is not None and self.observer.is_alive()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
