"""Main CLI application."""

from pathlib import Path
from typing import Annotated

import typer

from eternal_timer.cli.commands import timers, watch
from eternal_timer.cli.runtime import CLIOptions

app = typer.Typer(
    name="eternal-timer",
    help="eternal-timer - durable file-backed timers",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Timer file (default: from config, else under the project root)",
        ),
    ] = None,
    storage: Annotated[
        str | None,
        typer.Option(
            "--storage",
            "-s",
            help="Timer file encoding: jsonl or plain",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging",
        ),
    ] = False,
) -> None:
    """Manage durable timers."""
    from eternal_timer.logging import configure_logging

    configure_logging(
        "DEBUG" if verbose else None, use_rich=True, default_level="WARNING"
    )
    ctx.obj = CLIOptions(
        file=file, storage=storage, config_path=config, verbose=verbose
    )


timers.register(app)
watch.register(app)
