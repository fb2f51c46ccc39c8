"""Line codecs for the timer file.

Two interchangeable encodings, each turning one Timer into one line:
- JSONLCodec: one compact JSON object per line, with title/description
- PlainTextCodec: ``<id> <start> <stop>``, no optional fields
"""

from __future__ import annotations

import json
import re
from typing import Any, Protocol

from eternal_timer.errors import MalformedRecordError
from eternal_timer.types import StorageType, Timer

ID_LENGTH = 36
_PLAIN_INT = re.compile(r"-?[0-9]+")


class TimerCodec(Protocol):
    """Protocol for timer line encodings."""

    name: StorageType
    default_filename: str
    default_interval_ms: int
    supports_details: bool

    def encode(self, timer: Timer) -> str: ...

    def decode(self, line: str) -> Timer: ...


def _check_id(value: Any) -> str:
    if not isinstance(value, str) or len(value) != ID_LENGTH:
        raise MalformedRecordError(f"id must be a {ID_LENGTH}-character string")
    return value


def _check_timestamp(name: str, value: Any) -> int:
    # bool is an int subclass; true/false are not timestamps
    if isinstance(value, bool):
        raise MalformedRecordError(f"{name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise MalformedRecordError(f"{name} must be an integer")


def _check_text(name: str, value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise MalformedRecordError(f"{name} must be a string")


class JSONLCodec:
    """One JSON object per line; the richer of the two encodings."""

    name: StorageType = "jsonl"
    default_filename = ".timers.jsonl"
    default_interval_ms = 200
    supports_details = True

    def encode(self, timer: Timer) -> str:
        return json.dumps(timer.to_dict(), ensure_ascii=False, separators=(",", ":"))

    def decode(self, line: str) -> Timer:
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise MalformedRecordError(f"invalid JSON: {e.msg}") from e
        if not isinstance(data, dict):
            raise MalformedRecordError("expected a JSON object")

        for key in ("id", "start", "stop"):
            if key not in data:
                raise MalformedRecordError(f"missing field: {key}")

        return Timer(
            id=_check_id(data["id"]),
            start=_check_timestamp("start", data["start"]),
            stop=_check_timestamp("stop", data["stop"]),
            title=_check_text("title", data.get("title")),
            description=_check_text("description", data.get("description")),
        )


class PlainTextCodec:
    """Fixed-field ``<id> <start> <stop>`` lines."""

    name: StorageType = "plain"
    default_filename = ".timers"
    default_interval_ms = 50
    supports_details = False

    def encode(self, timer: Timer) -> str:
        return f"{timer.id} {timer.start} {timer.stop}"

    def decode(self, line: str) -> Timer:
        fields = line.split()
        if len(fields) != 3:
            raise MalformedRecordError(f"expected 3 fields, got {len(fields)}")
        timer_id, start, stop = fields
        # int() alone would also take "+5", "1_000" and non-ASCII digits
        if not (_PLAIN_INT.fullmatch(start) and _PLAIN_INT.fullmatch(stop)):
            raise MalformedRecordError("start and stop must be integers")
        return Timer(id=_check_id(timer_id), start=int(start), stop=int(stop))


_CODECS: dict[str, type[JSONLCodec] | type[PlainTextCodec]] = {
    "jsonl": JSONLCodec,
    "plain": PlainTextCodec,
}


def get_codec(storage: StorageType | str) -> TimerCodec:
    """Get a codec instance by storage name ("jsonl" or "plain")."""
    try:
        return _CODECS[storage]()
    except KeyError:
        raise ValueError(
            f"Unknown storage type: {storage!r} (expected one of {sorted(_CODECS)})"
        ) from None
