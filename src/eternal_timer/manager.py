"""Timer registry: create, remove and list durable timers."""

from __future__ import annotations

import logging
import math
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from eternal_timer.codec import JSONLCodec, PlainTextCodec, TimerCodec, get_codec
from eternal_timer.config.paths import get_default_timer_file
from eternal_timer.errors import (
    CreateTimerError,
    InvalidDurationError,
    RemoveTimerError,
    ShowTimersError,
    TimerNotFoundError,
)
from eternal_timer.store import TimerFile
from eternal_timer.types import Timer, TimerCallback, now_ms
from eternal_timer.watcher import TimerWatcher

if TYPE_CHECKING:
    from eternal_timer.config.models import TimerConfig

logger = logging.getLogger(__name__)


def _normalize_duration(duration_ms: float) -> int:
    """Validate a duration and truncate it toward zero."""
    try:
        finite = math.isfinite(duration_ms)
    except TypeError:
        raise InvalidDurationError(duration_ms) from None
    if not finite or duration_ms < 0:
        raise InvalidDurationError(duration_ms)
    return math.trunc(duration_ms)


class TimersManager:
    """Manages timers persisted in a single line-oriented file.

    The encoding is chosen once at construction. Expired timers are detected
    by polling; see ``check_timers``.

    Example:
        manager = TimersManager(Path(".timers.jsonl"))
        timer_id = await manager.create_timer(5000, title="tea")

        async def on_expired(timer):
            print(f"Timer {timer.id} finished")

        watcher = manager.check_timers(on_expired)
        ...
        await watcher.stop()
    """

    def __init__(
        self,
        path: Path | str | None = None,
        *,
        codec: TimerCodec | None = None,
    ) -> None:
        self._codec = codec or JSONLCodec()
        if path is None:
            path = get_default_timer_file(self._codec.name)
        self._store = TimerFile(Path(path), self._codec)

    @property
    def path(self) -> Path:
        return self._store.path

    @property
    def codec(self) -> TimerCodec:
        return self._codec

    @property
    def store(self) -> TimerFile:
        return self._store

    async def create_timer(
        self,
        duration_ms: float,
        title: str | None = None,
        description: str | None = None,
    ) -> str:
        """Create a new timer.

        Args:
            duration_ms: Timer duration in milliseconds (truncated to int).
            title: Optional title, stored only by encodings that support it.
            description: Optional description, same restriction as title.

        Returns:
            The new timer's id (UUID4 string).

        Raises:
            InvalidDurationError: If the duration is negative or not finite.
            CorruptStoreError: If the timer file contains a malformed line.
            CreateTimerError: If reading or appending to the file fails.
        """
        length = _normalize_duration(duration_ms)

        if not self._codec.supports_details and (
            title is not None or description is not None
        ):
            logger.warning(
                "timer_details_ignored",
                extra={"storage": self._codec.name, "file.path": str(self.path)},
            )
            title = description = None

        try:
            raw = await self._store.read_all()
            self._store.validate(raw)

            start = now_ms()
            timer = Timer(
                id=str(uuid.uuid4()),
                start=start,
                stop=start + length,
                title=title,
                description=description,
            )
            await self._store.append(self._codec.encode(timer))
        except OSError as e:
            raise CreateTimerError(self.path, e) from e

        logger.debug(
            "timer_created",
            extra={"timer.id": timer.id, "timer.duration_ms": length},
        )
        return timer.id

    async def remove_timer(self, timer_id: str) -> None:
        """Remove a timer by id.

        Raises:
            TimerNotFoundError: If no timer has this id.
            CorruptStoreError: If the timer file contains a malformed line.
            RemoveTimerError: If reading or rewriting the file fails.
        """
        try:
            found = await self._store.rewrite_excluding(
                lambda timer: timer.id == timer_id
            )
        except OSError as e:
            raise RemoveTimerError(self.path, e) from e

        if not found:
            raise TimerNotFoundError(timer_id)
        logger.debug("timer_removed", extra={"timer.id": timer_id})

    async def show_timers(self) -> list[Timer]:
        """Get all live timers in file order.

        Raises:
            CorruptStoreError: If the timer file contains a malformed line.
            ShowTimersError: If reading the file fails.
        """
        try:
            raw = await self._store.read_all()
        except OSError as e:
            raise ShowTimersError(self.path, e) from e
        return self._store.decode_all(raw)

    async def get_timer(self, timer_id: str) -> Timer | None:
        for timer in await self.show_timers():
            if timer.id == timer_id:
                return timer
        return None

    def check_timers(
        self,
        callback: TimerCallback,
        interval_ms: int | None = None,
    ) -> TimerWatcher:
        """Start polling for expired timers and return immediately.

        Each expired timer is removed from the file and then passed to
        ``callback``. The callback is awaited before the pass moves on to
        the next expired timer. Must be called from a running event loop.

        Args:
            callback: Sync or async callable receiving the expired Timer.
            interval_ms: Poll interval; defaults to the codec's default.

        Returns:
            The running TimerWatcher; call ``cancel()`` or ``await stop()``
            to stop polling.
        """
        watcher = TimerWatcher(self, callback, interval_ms=interval_ms)
        watcher.start()
        return watcher


def JSONLTimersManager(path: Path | str | None = None) -> TimersManager:
    """Create a TimersManager using the JSONL encoding."""
    return TimersManager(path, codec=JSONLCodec())


def PlainTextTimersManager(path: Path | str | None = None) -> TimersManager:
    """Create a TimersManager using the plain-text encoding."""
    return TimersManager(path, codec=PlainTextCodec())


def create_timers_manager(
    config: TimerConfig, root: Path | None = None
) -> TimersManager:
    """Create a TimersManager from configuration."""
    return TimersManager(
        config.resolve_path(root),
        codec=get_codec(config.storage),
    )
