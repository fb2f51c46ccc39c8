"""Timer watcher: polls the timer file and delivers expired timers.

The watcher owns the polling loop and the non-reentrancy flag. All data
access is delegated to TimersManager.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING

from eternal_timer.errors import TimerNotFoundError
from eternal_timer.types import Timer, TimerCallback, now_ms

if TYPE_CHECKING:
    from eternal_timer.manager import TimersManager

logger = logging.getLogger(__name__)


class TimerWatcher:
    """Polls for expired timers and hands each one to a callback.

    A tick fires every ``interval_ms``. If the previous pass is still
    running the tick is dropped, not queued. Each pass removes an expired
    timer from the file before awaiting the callback for it, so a timer is
    delivered at most once per file.

    Example:
        watcher = TimerWatcher(manager, on_expired, interval_ms=200)
        watcher.start()
        ...
        await watcher.stop()
    """

    def __init__(
        self,
        manager: TimersManager,
        callback: TimerCallback,
        interval_ms: int | None = None,
    ):
        if interval_ms is None:
            interval_ms = manager.codec.default_interval_ms
        if interval_ms <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval_ms}")
        self._manager = manager
        self._callback = callback
        self._interval_ms = interval_ms
        self._running = False
        self._checking = False
        self._task: asyncio.Task | None = None
        self._pass_task: asyncio.Task | None = None
        self._pass_count = 0
        self._skipped_ticks = 0
        self._delivered_count = 0

    @property
    def manager(self) -> TimersManager:
        return self._manager

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def running(self) -> bool:
        return self._running

    @property
    def checking(self) -> bool:
        """True while a pass is in flight."""
        return self._checking

    @property
    def pass_count(self) -> int:
        return self._pass_count

    @property
    def skipped_ticks(self) -> int:
        return self._skipped_ticks

    @property
    def delivered_count(self) -> int:
        return self._delivered_count

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._tick_loop())
        logger.info(
            "timer_watcher_started",
            extra={
                "file.path": str(self._manager.path),
                "poll.interval_ms": self._interval_ms,
            },
        )

    def cancel(self) -> None:
        """Stop scheduling passes. A pass already in flight runs to completion."""
        if not self._running:
            return
        self._running = False
        if self._task:
            self._task.cancel()
            self._task = None
        logger.info("timer_watcher_stopped", extra={"poll.count": self._pass_count})

    async def stop(self) -> None:
        """Cancel future passes and wait for the in-flight pass, if any."""
        task = self._task
        self.cancel()
        if task:
            try:
                await task
            except asyncio.CancelledError:
                pass
        if self._pass_task:
            await self._pass_task
            self._pass_task = None

    async def _tick_loop(self) -> None:
        interval = self._interval_ms / 1000
        while self._running:
            await asyncio.sleep(interval)
            self._tick()

    def _tick(self) -> None:
        if self._checking or (self._pass_task and not self._pass_task.done()):
            self._skipped_ticks += 1
            logger.debug("timer_check_skipped", extra={"poll.count": self._pass_count})
            return
        self._pass_task = asyncio.create_task(self.run_pass())

    async def run_pass(self) -> list[Timer]:
        """Run one expiry pass.

        Never raises: failures are logged and the pass ends early.

        Returns:
            Timers delivered to the callback during this pass.
        """
        if self._checking:
            self._skipped_ticks += 1
            return []

        self._checking = True
        try:
            self._pass_count += 1
            return await self._check_expired()
        except Exception as e:
            logger.error(
                "timer_check_error",
                extra={"file.path": str(self._manager.path), "error.message": str(e)},
            )
            return []
        finally:
            self._checking = False

    async def _check_expired(self) -> list[Timer]:
        timers = await self._manager.show_timers()
        if not timers:
            return []

        # Duplicate ids should not exist; if they do, the last line wins
        latest: dict[str, Timer] = {}
        for timer in timers:
            latest[timer.id] = timer

        now = now_ms()
        expired = [timer for timer in latest.values() if timer.is_expired(now)]
        logger.debug(
            f"Timer check: {len(latest)} timers, {len(expired)} expired",
        )

        delivered: list[Timer] = []
        for timer in expired:
            try:
                await self._manager.remove_timer(timer.id)
            except TimerNotFoundError:
                # Removed by another caller between our read and our rewrite
                logger.debug("timer_already_removed", extra={"timer.id": timer.id})
                continue

            delivered.append(timer)
            self._delivered_count += 1
            logger.info(
                "timer_expired",
                extra={"timer.id": timer.id, "timer.late_ms": now - timer.stop},
            )
            try:
                result = self._callback(timer)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    "timer_callback_error",
                    extra={"timer.id": timer.id, "error.message": str(e)},
                )

        return delivered
