"""Durable timers persisted to a flat file.

Public API:
- TimersManager: Create, remove and list timers; start polling
- JSONLTimersManager / PlainTextTimersManager: Managers bound to an encoding
- TimerWatcher: Polling loop returned by TimersManager.check_timers

Types:
- Timer: A single timer record
- TimerCallback: Sync or async callback for expired timers
"""

from eternal_timer.codec import JSONLCodec, PlainTextCodec, TimerCodec, get_codec
from eternal_timer.errors import (
    CorruptStoreError,
    CreateTimerError,
    InvalidDurationError,
    MalformedRecordError,
    RemoveTimerError,
    ShowTimersError,
    TimerError,
    TimerNotFoundError,
    TimerStorageError,
)
from eternal_timer.manager import (
    JSONLTimersManager,
    PlainTextTimersManager,
    TimersManager,
    create_timers_manager,
)
from eternal_timer.types import StorageType, Timer, TimerCallback
from eternal_timer.watcher import TimerWatcher

__all__ = [
    "CorruptStoreError",
    "CreateTimerError",
    "InvalidDurationError",
    "JSONLCodec",
    "JSONLTimersManager",
    "MalformedRecordError",
    "PlainTextCodec",
    "PlainTextTimersManager",
    "RemoveTimerError",
    "ShowTimersError",
    "StorageType",
    "Timer",
    "TimerCallback",
    "TimerCodec",
    "TimerError",
    "TimerNotFoundError",
    "TimerStorageError",
    "TimerWatcher",
    "TimersManager",
    "create_timers_manager",
    "get_codec",
]
