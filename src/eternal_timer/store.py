"""Timer file storage.

TimerFile owns the single on-disk timer file and provides:
- read_all: Read the raw file contents
- validate / decode_all: Check every non-blank line against the codec
- append: Add one encoded line
- rewrite_excluding: Rewrite the file without the matching records
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

import aiofiles

from eternal_timer.codec import TimerCodec
from eternal_timer.errors import CorruptStoreError, MalformedRecordError
from eternal_timer.types import Timer

logger = logging.getLogger(__name__)


class TimerFile:
    """Line-oriented timer file bound to one codec.

    Every mutation reads and validates the whole file first; a single
    undecodable line makes the file corrupt and blocks all writes.
    """

    def __init__(self, path: Path, codec: TimerCodec) -> None:
        self.path = path
        self.codec = codec
        self._ensure_file()

    def _ensure_file(self) -> None:
        """Create the file (and its parent) if missing, never truncating."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)

    async def read_all(self) -> str:
        async with aiofiles.open(self.path, encoding="utf-8") as f:
            return await f.read()

    def _iter_records(self, raw: str):
        # Only "\n" ends a record; JSON strings may hold U+2028, U+2029 or U+0085
        for line_number, line in enumerate(raw.split("\n"), start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield line, self.codec.decode(line)
            except MalformedRecordError as e:
                raise CorruptStoreError(self.path, line_number, str(e)) from e

    def validate(self, raw: str) -> None:
        """Raise CorruptStoreError on the first line that does not decode."""
        for _ in self._iter_records(raw):
            pass

    def decode_all(self, raw: str) -> list[Timer]:
        """Decode every non-blank line in file order."""
        return [timer for _, timer in self._iter_records(raw)]

    async def append(self, line: str) -> None:
        """Append a single encoded record."""
        if "\n" in line or "\r" in line:
            raise ValueError("Timer line must not contain a line break")
        async with aiofiles.open(self.path, "a", encoding="utf-8") as f:
            await f.write(line + "\n")

    async def rewrite_excluding(self, predicate: Callable[[Timer], bool]) -> bool:
        """Drop every record matching ``predicate`` and rewrite the file.

        Returns:
            True if at least one record matched. The file is left untouched
            when nothing matched.
        """
        raw = await self.read_all()
        kept: list[str] = []
        found = False
        for line, timer in self._iter_records(raw):
            if predicate(timer):
                found = True
                continue
            kept.append(line)

        if not found:
            return False

        await self._overwrite(kept)
        logger.debug(
            "timer_file_rewritten",
            extra={"file.path": str(self.path), "timer.count": len(kept)},
        )
        return True

    async def _overwrite(self, lines: list[str]) -> None:
        # Write to a sibling temp file, then rename over the original
        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=f".{self.path.name}_",
            suffix=".tmp",
        )
        try:
            async with aiofiles.open(temp_fd, "w", encoding="utf-8") as f:
                await f.write("".join(f"{line}\n" for line in lines))
            Path(temp_path).replace(self.path)
        except Exception:
            try:
                Path(temp_path).unlink()
            except OSError:
                pass
            raise
