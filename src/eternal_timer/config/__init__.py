"""Configuration module."""

from eternal_timer.config.loader import load_config
from eternal_timer.config.models import ConfigError, TimerConfig
from eternal_timer.config.paths import (
    get_config_path,
    get_default_timer_file,
    search_root,
)

__all__ = [
    "ConfigError",
    "TimerConfig",
    "get_config_path",
    "get_default_timer_file",
    "load_config",
    "search_root",
]
