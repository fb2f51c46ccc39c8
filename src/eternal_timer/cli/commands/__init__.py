"""CLI command modules."""

from eternal_timer.cli.commands import timers, watch

__all__ = ["timers", "watch"]
