"""Terminal UI package."""

from .display import TimerDisplay, format_duration
from .keys import KeyReader, decode_keys, resolve_command, split_keys

__all__ = [
    "TimerDisplay",
    "format_duration",
    "KeyReader",
    "decode_keys",
    "resolve_command",
    "split_keys",
]
