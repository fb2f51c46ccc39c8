"""Logging configuration for eternal-timer.

The library itself only creates module loggers and never installs
handlers. Until an application configures logging, WARNING and above
reach stderr through the logging module's last-resort handler.

Applications (and the CLI) can call configure_logging() once at startup.

Logging Levels:
- DEBUG: Per-pass details, dropped ticks, file rewrites
- INFO: Watcher start/stop, delivered timers
- WARNING: Hints (e.g. title/description ignored by the plain encoding)
- ERROR: Failed poll passes and failing callbacks
"""

import logging
import os

ENV_VAR = "ETERNAL_TIMER_LOG_LEVEL"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    Converts full module paths to short component names:
    - eternal_timer.watcher -> watcher
    - eternal_timer.config.loader -> config
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "eternal_timer":
            record.component = parts[1]
        else:
            record.component = parts[0]
        return super().format(record)


def resolve_level(level: str | None = None, default: str = "INFO") -> str:
    """Resolve a log level name from the argument or the environment.

    Unknown names fall back to ``default``.
    """
    if level is None:
        level = os.environ.get(ENV_VAR, default)
    level = level.upper()
    if level not in LEVELS:
        level = default
    return level


def configure_logging(
    level: str | None = None,
    use_rich: bool = False,
    default_level: str = "INFO",
) -> None:
    """Configure logging for an application using eternal-timer.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses ETERNAL_TIMER_LOG_LEVEL or ``default_level``.
        use_rich: Use Rich handler for colorful output.
        default_level: Level used when neither argument nor env var is set.
    """
    log_level = getattr(logging, resolve_level(level, default_level))

    if use_rich:
        from rich.console import Console
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    logging.basicConfig(
        level=log_level,
        handlers=[handler],
        force=True,
    )
