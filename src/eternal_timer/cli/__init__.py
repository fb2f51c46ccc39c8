"""Command-line interface."""

from eternal_timer.cli.app import app

__all__ = ["app"]
