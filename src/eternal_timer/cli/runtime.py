"""Shared runtime bootstrap helpers for CLI commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import typer

from eternal_timer.cli.console import error
from eternal_timer.config import ConfigError, TimerConfig, load_config
from eternal_timer.manager import TimersManager, create_timers_manager


@dataclass(slots=True)
class CLIOptions:
    """Global options collected by the root command."""

    file: Path | None = None
    storage: str | None = None
    config_path: Path | None = None
    verbose: bool = False


def resolve_config(options: CLIOptions) -> TimerConfig:
    """Load config and apply command-line overrides, exiting on errors."""
    try:
        config = load_config(options.config_path)
        overrides: dict[str, object] = {}
        if options.storage is not None:
            overrides["storage"] = options.storage
        if options.file is not None:
            overrides["path"] = options.file
        if overrides:
            config = TimerConfig.model_validate(
                {**config.model_dump(exclude_unset=True), **overrides}
            )
    except (ConfigError, FileNotFoundError) as e:
        error(str(e))
        raise typer.Exit(1) from None
    except ValueError as e:
        # pydantic ValidationError for a bad --storage value
        error(f"Invalid option: {e}")
        raise typer.Exit(1) from None

    if config.log_level and not options.verbose:
        logging.getLogger().setLevel(config.log_level)
    return config


def bootstrap_manager(options: CLIOptions) -> tuple[TimersManager, TimerConfig]:
    """Create the TimersManager for a CLI invocation."""
    config = resolve_config(options)
    try:
        return create_timers_manager(config), config
    except OSError as e:
        error(f"Cannot open timer file: {e}")
        raise typer.Exit(1) from None
