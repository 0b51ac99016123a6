"""Timer package."""

from .commands import Command
from .engine import TimerEngine, TICK_INTERVAL_MS
from .state import (
    TimerState,
    TimerMode,
    TimerSnapshot,
    Direction,
    EditSession,
    ModeConfig,
    MODES,
    TICKS_PER_SECOND,
    EDIT_STEP,
    MIN_FOCUS,
    MAX_FOCUS,
    MIN_BREAK,
    MAX_BREAK,
)

__all__ = [
    "Command",
    "TimerEngine",
    "TICK_INTERVAL_MS",
    "TimerState",
    "TimerMode",
    "TimerSnapshot",
    "Direction",
    "EditSession",
    "ModeConfig",
    "MODES",
    "TICKS_PER_SECOND",
    "EDIT_STEP",
    "MIN_FOCUS",
    "MAX_FOCUS",
    "MIN_BREAK",
    "MAX_BREAK",
]
