"""Consumer loop -- turns change signals into automation runs.

One signal is handled at a time: settle delay, read the file, run the
automation. Read failures and automation failures are logged and the loop
goes back to waiting for the next change.
"""

from __future__ import annotations

import queue
import threading
import time
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from .errors import AutomationError
from .models import RunOutcome, RunStats

log = logger.bind(stage="loop")

# How often run() wakes up to check the stop event
POLL_INTERVAL = 0.5


class WatchLoop:
    """Sequential consumer of change signals for one watched file."""

    def __init__(
        self,
        path: Path | str,
        channel: queue.Queue,
        automation: Callable[[str], None],
        settle_delay: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.path = Path(path)
        self.channel = channel
        self.automation = automation
        self.settle_delay = settle_delay
        self.stats = RunStats()
        self._sleep = sleep

    def process_change(self) -> RunOutcome:
        """Handle one change signal.

        Read failures and AutomationError are logged and reported through the
        returned outcome. Any other exception from the automation callable is
        a bug, not a browser failure, and propagates to stop the loop.
        """
        log.info("File change detected!")
        # Give the writer a moment to finish before reading
        self._sleep(self.settle_delay)

        try:
            # Decode bytes directly; text mode would rewrite \r\n line endings
            contents = self.path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log.error(f"Failed to read file '{self.path}': {e}")
            outcome = RunOutcome.READ_FAILED
        else:
            size = len(contents.encode("utf-8"))
            log.info(f"Read {size} bytes from file. Running browser automation...")
            try:
                self.automation(contents)
            except AutomationError as e:
                log.error(f"Automation failed at step '{e.step}': {e}")
                outcome = RunOutcome.AUTOMATION_FAILED
            else:
                log.info("Automation completed successfully.")
                outcome = RunOutcome.COMPLETED

        self.stats.record(outcome)
        return outcome

    def run(self, stop_event: threading.Event | None = None) -> RunStats:
        """Wait for signals and process them until stop_event is set.

        Without a stop_event the loop runs until the process is interrupted.
        """
        stop = stop_event if stop_event is not None else threading.Event()
        while not stop.is_set():
            try:
                self.channel.get(timeout=POLL_INTERVAL)
            except queue.Empty:
                continue
            self.process_change()
        return self.stats
