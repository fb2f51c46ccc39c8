"""Configuration loading from TOML files."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from eternal_timer.config.models import ConfigError, TimerConfig
from eternal_timer.config.paths import (
    get_config_path,
    get_manifest_path,
    search_root,
)

logger = logging.getLogger(__name__)

TOOL_TABLE = "eternal-timer"


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def _validate(raw_config: dict[str, Any], source: Path) -> TimerConfig:
    # Relative timer paths are relative to the file that declares them
    if isinstance(raw_config.get("path"), str):
        timer_path = Path(raw_config["path"]).expanduser()
        if not timer_path.is_absolute():
            timer_path = source.parent / timer_path
        raw_config = {**raw_config, "path": timer_path}

    try:
        return TimerConfig.model_validate(raw_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e


def _find_default_config(root: Path) -> tuple[dict[str, Any], Path] | None:
    """Find config in eternal-timer.toml, then [tool.eternal-timer] in pyproject."""
    standalone = get_config_path(root)
    if standalone.exists():
        return _read_toml(standalone), standalone

    manifest = get_manifest_path(root)
    if manifest.exists():
        tool = _read_toml(manifest).get("tool", {})
        if TOOL_TABLE in tool:
            return tool[TOOL_TABLE], manifest

    return None


def load_config(path: Path | None = None, root: Path | None = None) -> TimerConfig:
    """Load configuration from TOML.

    Args:
        path: Explicit path to a config file. If None, searches the project
            root for ``eternal-timer.toml`` and then the
            ``[tool.eternal-timer]`` table of ``pyproject.toml``.
        root: Project root to search. Defaults to ``search_root()``.

    Returns:
        Validated TimerConfig instance (defaults when nothing is found).

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ConfigError: If the config file or its values are invalid.
    """
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return _validate(_read_toml(config_path), config_path)

    found = _find_default_config(root or search_root())
    if found is None:
        logger.debug("No timer config found, using defaults")
        return TimerConfig()

    raw_config, source = found
    if not isinstance(raw_config, dict):
        raise ConfigError(f"[tool.{TOOL_TABLE}] in {source} must be a table")
    return _validate(raw_config, source)
