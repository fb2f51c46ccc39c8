"""Timer management commands: create, remove, list."""

import asyncio
from typing import Annotated

import typer

from eternal_timer.cli.console import (
    console,
    dim,
    error,
    success,
    timers_table,
    warning,
)
from eternal_timer.cli.runtime import bootstrap_manager
from eternal_timer.errors import TimerError


def register(app: typer.Typer) -> None:
    """Register the create, remove and list commands."""

    @app.command()
    def create(
        ctx: typer.Context,
        duration_ms: Annotated[
            int,
            typer.Argument(help="Timer duration in milliseconds"),
        ],
        title: Annotated[
            str | None,
            typer.Option("--title", "-t", help="Timer title (jsonl storage only)"),
        ] = None,
        description: Annotated[
            str | None,
            typer.Option(
                "--description", "-d", help="Timer description (jsonl storage only)"
            ),
        ] = None,
    ) -> None:
        """Create a timer and print its id.

        Examples:
            eternal-timer create 5000
            eternal-timer create 60000 --title tea
        """
        manager, _ = bootstrap_manager(ctx.obj)
        if not manager.codec.supports_details and (title or description):
            warning(f"{manager.codec.name} storage ignores title and description")
        try:
            timer_id = asyncio.run(
                manager.create_timer(duration_ms, title=title, description=description)
            )
        except TimerError as e:
            error(str(e))
            raise typer.Exit(1) from None
        console.print(timer_id, highlight=False)

    @app.command()
    def remove(
        ctx: typer.Context,
        timer_id: Annotated[str, typer.Argument(help="Timer id")],
    ) -> None:
        """Remove a timer by id."""
        manager, _ = bootstrap_manager(ctx.obj)
        try:
            asyncio.run(manager.remove_timer(timer_id))
        except TimerError as e:
            error(str(e))
            raise typer.Exit(1) from None
        success(f"Removed timer {timer_id}")

    @app.command(name="list")
    def list_timers(ctx: typer.Context) -> None:
        """List live timers."""
        manager, _ = bootstrap_manager(ctx.obj)
        try:
            timers = asyncio.run(manager.show_timers())
        except TimerError as e:
            error(str(e))
            raise typer.Exit(1) from None

        if not timers:
            warning("No timers found")
            return

        console.print(timers_table(timers, show_details=manager.codec.supports_details))
        dim(f"\n{len(timers)} timer(s) in {manager.path}")
