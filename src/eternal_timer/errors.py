"""Timer error types."""

from __future__ import annotations

from pathlib import Path


class TimerError(Exception):
    """Base class for all timer errors."""


class InvalidDurationError(TimerError, ValueError):
    """A timer was requested with a negative or non-finite duration."""

    def __init__(self, duration: object) -> None:
        self.duration = duration
        super().__init__(f"Invalid timer duration: {duration!r}")


class MalformedRecordError(TimerError, ValueError):
    """A single line could not be decoded into a timer record."""


class CorruptStoreError(TimerError):
    """The timer file contains a line that does not decode.

    Mutating operations refuse to run against a corrupt file.
    """

    def __init__(self, path: Path, line_number: int, reason: str) -> None:
        self.path = path
        self.line_number = line_number
        self.reason = reason
        super().__init__(
            f"Timer file {path} is corrupt at line {line_number}: {reason}"
        )


class TimerNotFoundError(TimerError, LookupError):
    """No live timer has the requested id."""

    def __init__(self, timer_id: str) -> None:
        self.timer_id = timer_id
        super().__init__(f"Timer with id {timer_id} not found")


class TimerStorageError(TimerError):
    """A file operation failed underneath a registry call."""

    operation = "access timers"

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Error when trying to {self.operation} in {path}: {cause}")


class CreateTimerError(TimerStorageError):
    operation = "create timer"


class RemoveTimerError(TimerStorageError):
    operation = "remove timer"


class ShowTimersError(TimerStorageError):
    operation = "show timers"
