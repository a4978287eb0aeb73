"""Timer package."""

from .registry import (
    TimerRegistry,
    TimerState,
    TimerStatus,
    DEFAULT_SECONDS,
    HOLD_SECONDS,
    TICK_INTERVAL,
)
from .formatting import InvalidDuration, format_duration, parse_duration
from .scheduler import QtScheduler, QtHandle

__all__ = [
    "TimerRegistry",
    "TimerState",
    "TimerStatus",
    "DEFAULT_SECONDS",
    "HOLD_SECONDS",
    "TICK_INTERVAL",
    "InvalidDuration",
    "format_duration",
    "parse_duration",
    "QtScheduler",
    "QtHandle",
]
