"""Project root discovery and default timer file locations.

Timer files live next to the project they belong to: the nearest ancestor
directory containing a ``pyproject.toml``. When no such directory exists,
the starting directory is used.
"""

from pathlib import Path

from eternal_timer.codec import get_codec
from eternal_timer.types import StorageType

MANIFEST_FILENAME = "pyproject.toml"
CONFIG_FILENAME = "eternal-timer.toml"


def search_root(start: Path | None = None) -> Path:
    """Find the project root by walking up to the nearest manifest file.

    Args:
        start: Directory to start from. Defaults to the current directory.

    Returns:
        The first ancestor (inclusive) containing ``pyproject.toml``, or
        ``start`` itself if none does.
    """
    origin = (start or Path.cwd()).resolve()
    current = origin
    while not (current / MANIFEST_FILENAME).exists():
        if current.parent == current:
            return origin
        current = current.parent
    return current


def get_default_timer_file(storage: StorageType, root: Path | None = None) -> Path:
    """Get the default timer file path for a storage type."""
    return (root or search_root()) / get_codec(storage).default_filename


def get_manifest_path(root: Path | None = None) -> Path:
    """Get the project manifest path (``pyproject.toml``)."""
    return (root or search_root()) / MANIFEST_FILENAME


def get_config_path(root: Path | None = None) -> Path:
    """Get the standalone config file path (``eternal-timer.toml``)."""
    return (root or search_root()) / CONFIG_FILENAME
