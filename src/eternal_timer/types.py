"""Timer types.

Public types:
- Timer: A single persisted timer record
- StorageType: Name of an on-disk encoding
- TimerCallback: Handler invoked for each expired timer
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Literal

StorageType = Literal["jsonl", "plain"]


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class Timer:
    """A timer record as stored in the timer file.

    ``start`` and ``stop`` are milliseconds since the epoch. ``title`` and
    ``description`` are only persisted by encodings that have room for them.
    """

    id: str
    start: int
    stop: int
    title: str | None = None
    description: str | None = None

    @property
    def duration(self) -> int:
        return self.stop - self.start

    def is_expired(self, now: int | None = None) -> bool:
        """Check whether the deadline has passed (``stop <= now``)."""
        if now is None:
            now = now_ms()
        return self.stop <= now

    def remaining(self, now: int | None = None) -> int:
        """Milliseconds left before expiry, never negative."""
        if now is None:
            now = now_ms()
        return max(0, self.stop - now)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict, omitting unset optional fields."""
        data: dict[str, Any] = {"id": self.id, "start": self.start, "stop": self.stop}
        if self.title is not None:
            data["title"] = self.title
        if self.description is not None:
            data["description"] = self.description
        return data


# Sync or async; the watcher awaits the result when it is awaitable
TimerCallback = Callable[[Timer], Awaitable[Any] | Any]
