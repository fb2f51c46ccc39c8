"""Configuration models using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from eternal_timer.codec import get_codec
from eternal_timer.config.paths import get_default_timer_file
from eternal_timer.types import StorageType


class ConfigError(Exception):
    """Configuration error."""

    pass


class TimerConfig(BaseModel):
    """Root configuration model.

    Every field is optional; an empty config selects the JSONL encoding with
    its default file under the project root.
    """

    model_config = ConfigDict(extra="forbid")

    storage: StorageType = "jsonl"
    path: Path | None = None  # None = default filename under the project root
    poll_interval_ms: int | None = Field(default=None, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None

    def resolve_path(self, root: Path | None = None) -> Path:
        """Get the timer file path, falling back to the storage default."""
        if self.path is not None:
            return self.path.expanduser()
        return get_default_timer_file(self.storage, root)

    def resolve_interval_ms(self) -> int:
        """Get the poll interval, falling back to the storage default."""
        if self.poll_interval_ms is not None:
            return self.poll_interval_ms
        return get_codec(self.storage).default_interval_ms
