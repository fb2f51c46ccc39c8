"""Shared console utilities for CLI commands."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from eternal_timer.types import Timer, now_ms

# Shared console instance for all CLI commands
console = Console()


def error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]{escape(msg)}[/red]")


def warning(msg: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]{escape(msg)}[/yellow]")


def success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]{escape(msg)}[/green]")


def dim(msg: str) -> None:
    """Print a dimmed message."""
    console.print(f"[dim]{escape(msg)}[/dim]")


def format_countdown(remaining_ms: int) -> str:
    """Format milliseconds left as a short countdown string."""
    if remaining_ms <= 0:
        return "[green]now[/green]"

    total_seconds = remaining_ms // 1000
    if total_seconds < 60:
        return f"in {total_seconds}s" if total_seconds else f"in {remaining_ms}ms"

    total_minutes = total_seconds // 60
    if total_minutes < 60:
        return f"in {total_minutes}m"

    hours = total_minutes // 60
    minutes = total_minutes % 60
    if hours < 24:
        return f"in {hours}h {minutes}m" if minutes else f"in {hours}h"

    days = hours // 24
    hours = hours % 24
    return f"in {days}d {hours}h" if hours else f"in {days}d"


def _cell(text: str | None) -> str:
    return escape(text) if text else "[dim]-[/dim]"


def timers_table(timers: list[Timer], show_details: bool) -> Table:
    """Build a table of timers with their countdowns."""
    table = Table(show_header=True)
    table.add_column("ID", style="dim", no_wrap=True, min_width=36)
    if show_details:
        table.add_column("Title")
        table.add_column("Description")
    table.add_column("Duration", justify="right")
    table.add_column("Expires")

    now = now_ms()
    for timer in timers:
        row = [timer.id]
        if show_details:
            row += [_cell(timer.title), _cell(timer.description)]
        row += [f"{timer.duration}ms", format_countdown(timer.remaining(now))]
        table.add_row(*row)
    return table
