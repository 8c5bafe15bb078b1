"""File change notification via watchdog.

The observer thread pushes a signal into a capacity-1 channel each time the
watched file is modified. A signal raised while the previous one is still
pending is dropped, so bursts of writes coalesce into a single run.
"""

from __future__ import annotations

import os
import queue
from pathlib import Path

from loguru import logger
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .errors import WatchSetupError

log = logger.bind(stage="notifier")


def new_channel() -> queue.Queue:
    """Capacity-1 signal channel shared by notifier and consumer loop."""
    return queue.Queue(maxsize=1)


def send_signal(channel: queue.Queue) -> bool:
    """Put a signal on the channel without blocking.

    Returns False when a signal is already pending; the new one is dropped.
    """
    try:
        channel.put_nowait(None)
    except queue.Full:
        return False
    return True


class _ModifiedHandler(FileSystemEventHandler):
    """Forwards modification events for one file, ignores everything else."""

    def __init__(self, target: Path, channel: queue.Queue) -> None:
        super().__init__()
        self.target = target
        self.channel = channel

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        if Path(os.fsdecode(event.src_path)).resolve() != self.target:
            return
        if send_signal(self.channel):
            log.debug(f"Change signal queued for {self.target}")
        else:
            log.debug("Change signal already pending, dropped")


class ChangeNotifier:
    """Watches a single file and signals a channel on modification.

    watchdog watches directories, so the observer is scheduled
    non-recursively on the file's parent and the handler filters by path.
    """

    def __init__(
        self, path: Path | str, channel: queue.Queue | None = None
    ) -> None:
        self.path = Path(path)
        self.channel = channel if channel is not None else new_channel()
        self._observer: Observer | None = None

    @property
    def running(self) -> bool:
        return self._observer is not None

    def _validate(self) -> Path:
        if not self.path.exists():
            raise WatchSetupError(str(self.path), "No such file or directory")
        if not self.path.is_file():
            raise WatchSetupError(str(self.path), "Not a regular file")
        if not os.access(self.path, os.R_OK):
            raise WatchSetupError(str(self.path), "Permission denied")
        return self.path.resolve()

    def start(self) -> None:
        """Start the observer thread.

        Raises WatchSetupError if the path cannot be watched.
        """
        if self._observer is not None:
            return
        target = self._validate()

        observer = Observer()
        handler = _ModifiedHandler(target, self.channel)
        try:
            observer.schedule(handler, str(target.parent), recursive=False)
            observer.start()
        except OSError as e:
            raise WatchSetupError(str(self.path), str(e)) from e

        self._observer = observer
        log.debug(f"Observer started on {target.parent} for {target.name}")

    def stop(self) -> None:
        """Stop the observer thread and wait for it to exit."""
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None
        log.debug("Observer stopped")

    def __enter__(self) -> ChangeNotifier:
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
