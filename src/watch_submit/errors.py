"""Exception hierarchy for watch-submit."""

from .models import AutomationStep


class WatchSubmitError(Exception):
    """Base exception for all watch-submit errors."""


class WatchSetupError(WatchSubmitError):
    """The file watch could not be established. Fatal at startup."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to start watching file: {path}: {reason}")
        self.path = path
        self.reason = reason


class AutomationError(WatchSubmitError):
    """A browser automation step failed."""

    def __init__(self, step: AutomationStep, message: str) -> None:
        super().__init__(message)
        self.step = step
