"""
Save detection for the command-line front end.

Watches the source file with watchdog and turns content changes on disk into
save events on the source surface. Filesystem events arrive on the observer
thread and are queued; save hooks always run on the thread that calls
process_pending() or run(), so compile cycles never overlap.
"""

import hashlib
import queue
import time
from pathlib import Path
from typing import Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from texpane.contexts.layout.workspace import Surface
from texpane.contexts.preview.logger import _log_debug, _log_info


def file_digest(path: Path) -> Optional[str]:
    """MD5 of a file's bytes, or None if it cannot be read."""
    try:
        return hashlib.md5(path.read_bytes()).hexdigest()
    except OSError:
        return None


class SourceChangeHandler(FileSystemEventHandler):
    """Queues a notification whenever the watched file's content changes."""

    def __init__(self, path: Path, events: "queue.Queue[Path]"):
        super().__init__()
        self.path = Path(path).resolve()
        self.events = events
        self.digest = file_digest(self.path)

    def _matches(self, candidate) -> bool:
        if isinstance(candidate, bytes):
            candidate = candidate.decode()
        return Path(candidate).resolve() == self.path

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._matches(event.src_path):
            self._check()

    def on_created(self, event: FileSystemEvent) -> None:
        self.on_modified(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        # Some editors save by writing a temporary file and renaming it
        if not event.is_directory and self._matches(event.dest_path):
            self._check()

    def _check(self) -> None:
        digest = file_digest(self.path)
        if digest is None or digest == self.digest:
            return
        self.digest = digest
        _log_debug(f"Content of {self.path.name} changed ({digest})")
        self.events.put(self.path)


class SaveWatcher:
    """
    Delivers on-disk saves of a source file to its surface's save hooks.

    Usage:
        watcher = SaveWatcher(session.source)
        watcher.start()
        watcher.run()  # blocks until interrupted
    """

    def __init__(self, surface: Surface, poll_interval: float = 0.2):
        if surface.path is None:
            raise ValueError(f"Surface {surface.name} is not visiting a file")
        self.surface = surface
        self.poll_interval = poll_interval
        self.events: "queue.Queue[Path]" = queue.Queue()
        self.handler = SourceChangeHandler(surface.path, self.events)
        self.observer = Observer()

    def start(self) -> None:
        self.observer.schedule(self.handler, str(self.surface.path.parent), recursive=False)
        self.observer.start()
        _log_info(f"Watching {self.surface.path} for saves")

    def stop(self) -> None:
        self.observer.stop()
        self.observer.join()

    def deliver(self) -> None:
        """Reload the surface from disk and run its save hooks."""
        self.surface.revert()
        self.surface.run_save_hooks()

    def process_pending(self) -> int:
        """
        Handle queued saves on the calling thread.

        Bursts of events are coalesced into a single save.

        Returns:
            Number of saves delivered (0 or 1)
        """
        drained = 0
        while True:
            try:
                self.events.get_nowait()
            except queue.Empty:
                break
            drained += 1

        if not drained:
            return 0
        self.deliver()
        return 1

    def run(self, max_saves: Optional[int] = None) -> None:
        """Process saves until interrupted (or until max_saves were delivered)."""
        delivered = 0
        try:
            while max_saves is None or delivered < max_saves:
                delivered += self.process_pending()
                time.sleep(self.poll_interval)
        finally:
            self.stop()
