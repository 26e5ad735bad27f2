"""File system watcher for the editor's snapshot file."""

import logging
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class SnapshotEventHandler(FileSystemEventHandler):
    """Calls back when the snapshot file is written or replaced."""

    def __init__(self, snapshot_path: Path, on_change: Callable[[], None]):
        super().__init__()
        self.snapshot_path = snapshot_path
        self.on_change = on_change

    def _is_snapshot(self, path: str | bytes) -> bool:
        """Check if the path is the watched snapshot file."""
        if isinstance(path, bytes):
            path = path.decode()
        return Path(path) == self.snapshot_path

    def _changed(self, path: str | bytes) -> None:
        logger.debug("Snapshot change detected: %s", path)
        self.on_change()

    def on_created(self, event: FileSystemEvent) -> None:
        """Handle file creation."""
        if not event.is_directory and self._is_snapshot(event.src_path):
            self._changed(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        """Handle file modification."""
        if not event.is_directory and self._is_snapshot(event.src_path):
            self._changed(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        """Handle atomic replacement (write to temp file, then rename)."""
        if not event.is_directory:
            dest = getattr(event, "dest_path", "")
            if dest and self._is_snapshot(dest):
                self._changed(dest)


class SnapshotWatcher:
    """Watches the snapshot file's directory for changes."""

    def __init__(self, snapshot_path: Path, on_change: Callable[[], None]):
        self.snapshot_path = snapshot_path.expanduser().absolute()
        self.on_change = on_change
        self._observer: Observer | None = None
        self._handler: SnapshotEventHandler | None = None

    def start(self) -> None:
        """Start watching."""
        if self._observer is not None:
            return  # Already running

        directory = self.snapshot_path.parent
        directory.mkdir(parents=True, exist_ok=True)

        self._handler = SnapshotEventHandler(self.snapshot_path, self.on_change)

        self._observer = Observer()
        self._observer.schedule(self._handler, str(directory), recursive=False)
        self._observer.daemon = True
        self._observer.start()
        logger.info("Snapshot watcher started: %s", self.snapshot_path)

    def stop(self) -> None:
        """Stop watching."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=1.0)
            self._observer = None
            self._handler = None

    def __enter__(self) -> "SnapshotWatcher":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()
