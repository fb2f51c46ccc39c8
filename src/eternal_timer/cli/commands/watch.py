"""Watch command: deliver expired timers to the terminal."""

import asyncio
from typing import Annotated

import typer
from rich.markup import escape

from eternal_timer.cli.console import console, dim
from eternal_timer.cli.runtime import bootstrap_manager
from eternal_timer.manager import TimersManager
from eternal_timer.types import Timer
from eternal_timer.watcher import TimerWatcher


def _print_expired(timer: Timer) -> None:
    label = f" ({escape(timer.title)})" if timer.title else ""
    console.print(f"[green]expired[/green] {timer.id}{label}", highlight=False)


async def _watch(manager: TimersManager, interval_ms: int, timeout: float | None):
    watcher = manager.check_timers(_print_expired, interval_ms=interval_ms)
    try:
        if timeout is None:
            await asyncio.Event().wait()
        else:
            await asyncio.sleep(timeout)
    finally:
        await watcher.stop()
    return watcher.delivered_count


def register(app: typer.Typer) -> None:
    """Register the watch command."""

    @app.command()
    def watch(
        ctx: typer.Context,
        interval: Annotated[
            int | None,
            typer.Option(
                "--interval",
                "-i",
                min=1,
                help="Poll interval in milliseconds (default: per storage)",
            ),
        ] = None,
        once: Annotated[
            bool,
            typer.Option("--once", help="Run a single pass and exit"),
        ] = False,
        timeout: Annotated[
            float | None,
            typer.Option("--timeout", min=0, help="Stop after this many seconds"),
        ] = None,
    ) -> None:
        """Print timers as they expire, removing them from the file.

        Examples:
            eternal-timer watch                # Poll until Ctrl-C
            eternal-timer watch --once         # Deliver what is due now
            eternal-timer watch --timeout 10   # Poll for ten seconds
        """
        manager, config = bootstrap_manager(ctx.obj)
        interval_ms = interval or config.resolve_interval_ms()

        if once:
            watcher = TimerWatcher(manager, _print_expired, interval_ms=interval_ms)
            delivered = asyncio.run(watcher.run_pass())
            dim(f"{len(delivered)} timer(s) expired")
            return

        dim(f"Watching {manager.path} every {interval_ms}ms (Ctrl-C to stop)")
        try:
            delivered_count = asyncio.run(_watch(manager, interval_ms, timeout))
        except KeyboardInterrupt:
            return
        dim(f"{delivered_count} timer(s) expired")
