"""Enums and small result types for watch-submit.

Enums:
    AutomationStep -- Ordered browser steps performed on every run.
    RunOutcome     -- Result of handling one change signal.
"""

from dataclasses import dataclass
from enum import StrEnum


class AutomationStep(StrEnum):
    CONNECT = "connect"
    NAVIGATE = "navigate"
    FIND_INPUT = "find_input"
    CLEAR_INPUT = "clear_input"
    TYPE_INPUT = "type_input"
    FIND_BUTTON = "find_button"
    CLICK_BUTTON = "click_button"


class RunOutcome(StrEnum):
    COMPLETED = "completed"
    READ_FAILED = "read_failed"
    AUTOMATION_FAILED = "automation_failed"


@dataclass
class RunStats:
    """Counters for change signals handled by the consumer loop."""

    attempts: int = 0
    completed: int = 0
    failed: int = 0

    def record(self, outcome: RunOutcome) -> None:
        self.attempts += 1
        if outcome == RunOutcome.COMPLETED:
            self.completed += 1
        else:
            self.failed += 1
