"""Keyboard input: raw stdin → key names → :class:`Command` tokens.

The terminal is switched to cbreak mode so single key presses arrive
without waiting for Enter, and stdin is watched by a ``QSocketNotifier``
so key presses are delivered on the same event loop as the ticks.
"""

from __future__ import annotations

import logging
import os
import sys
import termios
import tty

from PyQt6.QtCore import QObject, QSocketNotifier, QTimer, pyqtSignal

from ..timer.commands import Command

logger = logging.getLogger(__name__)


# ── key maps ──────────────────────────────────────────────────────────────

CONTROL_KEYMAP: dict[str, Command] = {
    "s":     Command.START,
    "enter": Command.START,
    "r":     Command.RESET,
    "m":     Command.SWITCH_MODE,
    "tab":   Command.SWITCH_MODE,
    "f":     Command.BEGIN_EDIT_FOCUS,
    "b":     Command.BEGIN_EDIT_BREAK,
    "q":     Command.QUIT,
}

EDIT_KEYMAP: dict[str, Command] = {
    "s":     Command.COMMIT_EDIT,
    "enter": Command.COMMIT_EDIT,
    "f":     Command.BEGIN_EDIT_FOCUS,
    "b":     Command.BEGIN_EDIT_BREAK,
    "]":     Command.INCREASE_EDITED_DURATION,
    "+":     Command.INCREASE_EDITED_DURATION,
    "=":     Command.INCREASE_EDITED_DURATION,
    "up":    Command.INCREASE_EDITED_DURATION,
    "right": Command.INCREASE_EDITED_DURATION,
    "[":     Command.DECREASE_EDITED_DURATION,
    "-":     Command.DECREASE_EDITED_DURATION,
    "down":  Command.DECREASE_EDITED_DURATION,
    "left":  Command.DECREASE_EDITED_DURATION,
    "esc":   Command.CANCEL_EDIT,
    "q":     Command.QUIT,
}

# Shown in the display footer, in this order.
CONTROL_HINTS: tuple[tuple[str, str], ...] = (
    ("s", "start"),
    ("r", "reset"),
    ("m", "switch mode"),
    ("f", "edit focus"),
    ("b", "edit break"),
    ("q", "quit"),
)

EDIT_HINTS: tuple[tuple[str, str], ...] = (
    ("]/↑", "+1 min"),
    ("[/↓", "-1 min"),
    ("s", "save"),
    ("esc", "cancel"),
    ("f/b", "focus/break"),
    ("q", "quit"),
)

_ARROWS = {"A": "up", "B": "down", "C": "right", "D": "left"}
_NAMED = {"\r": "enter", "\n": "enter", "\t": "tab"}

# Finals accepted right after ESC [ or ESC O; anything else there means
# Esc was pressed on its own and followed by an ordinary key.
_CSI_FINALS = "ABCDEFHZ"
_SS3_FINALS = "ABCDEFHPQRS"
_CSI_PARAMS = "0123456789;"

# How long the reader waits for the rest of a cut-off escape sequence.
ESC_TIMEOUT_MS = 50


def keymap_for(editing: bool) -> dict[str, Command]:
    return EDIT_KEYMAP if editing else CONTROL_KEYMAP


def resolve_command(key: str, editing: bool) -> Command | None:
    """Map a key name to a command, or ``None`` if the key is unbound."""
    return keymap_for(editing).get(key.lower())


def decode_keys(text: str) -> list[str]:
    """Split a chunk of raw terminal input into key names.

    Printable characters are returned as themselves; Enter, Tab, Esc and
    the arrow keys get names.  Other escape sequences are dropped.  An
    escape sequence cut off at the end of *text* is read as Esc followed
    by ordinary keys.
    """
    keys, rest = split_keys(text)
    return keys + _unfinished_keys(rest)


def split_keys(text: str) -> tuple[list[str], str]:
    """Like :func:`decode_keys`, but hand back an unfinished escape sequence.

    The second item is either empty or the tail of *text* starting at the
    ESC that opened the sequence; prepend it to the next chunk.
    """
    keys: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\x1b":
            keys.append(_NAMED.get(ch, ch))
            i += 1
            continue

        end = _sequence_end(text, i)
        if end is None:
            keys.append("esc")
            i += 1
        elif end < 0:
            return keys, text[i:]
        else:
            final = text[end - 1]
            if end == i + 3 and final in _ARROWS:
                keys.append(_ARROWS[final])
            i = end
    return keys, ""


def _sequence_end(text: str, i: int) -> int | None:
    """Index just past the escape sequence that starts at ``text[i]``.

    ``None`` means the ESC is a key press of its own; ``-1`` means *text*
    stops partway through a sequence.
    """
    if i + 1 >= len(text) or text[i + 1] not in "[O":
        return None
    j = i + 2
    if text[i + 1] == "O":
        if j >= len(text):
            return -1
        return j + 1 if text[j] in _SS3_FINALS else None

    while j < len(text) and text[j] in _CSI_PARAMS:
        j += 1
    if j >= len(text):
        return -1
    final = text[j]
    if j == i + 2:
        return j + 1 if final in _CSI_FINALS else None
    return j + 1 if "@" <= final <= "~" else None


def _unfinished_keys(rest: str) -> list[str]:
    if not rest:
        return []
    # rest[1:] holds no ESC, so it decodes as plain keys
    return ["esc"] + decode_keys(rest[1:])


# ── reader ────────────────────────────────────────────────────────────────


class KeyReader(QObject):
    """Emits ``key_pressed(name)`` for each key typed on the terminal.

    ``open()`` must be paired with ``close()``, which restores the
    original terminal attributes.
    """

    key_pressed = pyqtSignal(str)

    def __init__(self, fd: int | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._old_attrs: list | None = None
        self._notifier: QSocketNotifier | None = None
        self._pending = ""

        self._flush_timer = QTimer(self)
        self._flush_timer.setSingleShot(True)
        self._flush_timer.setInterval(ESC_TIMEOUT_MS)
        self._flush_timer.timeout.connect(self.flush)

    @property
    def is_open(self) -> bool:
        return self._notifier is not None

    def open(self) -> bool:
        """Start listening.  Returns ``False`` when stdin is not a terminal."""
        if self.is_open:
            return True
        if not os.isatty(self._fd):
            logger.warning("stdin is not a terminal; keyboard input disabled")
            return False

        self._old_attrs = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)

        self._notifier = QSocketNotifier(self._fd, QSocketNotifier.Type.Read, self)
        self._notifier.activated.connect(self._on_ready)
        return True

    def close(self) -> None:
        self._flush_timer.stop()
        self._pending = ""
        if self._notifier is not None:
            self._notifier.setEnabled(False)
            self._notifier.deleteLater()
            self._notifier = None
        if self._old_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_attrs)
            self._old_attrs = None

    def feed(self, text: str) -> None:
        """Decode *text* and emit a ``key_pressed`` signal per key.

        An escape sequence cut off at the end of *text* is held back until
        the next chunk completes it, or until :meth:`flush` runs after
        ``ESC_TIMEOUT_MS`` without one.
        """
        self._flush_timer.stop()
        keys, self._pending = split_keys(self._pending + text)
        for key in keys:
            self.key_pressed.emit(key)
        if self._pending:
            self._flush_timer.start()

    def flush(self) -> None:
        """Emit a held-back partial sequence as Esc plus ordinary keys."""
        self._flush_timer.stop()
        pending, self._pending = self._pending, ""
        for key in decode_keys(pending):
            self.key_pressed.emit(key)

    def _on_ready(self, *_args) -> None:
        try:
            data = os.read(self._fd, 64)
        except OSError as exc:
            logger.warning("reading keyboard input failed: %s", exc)
            return
        if not data:
            # EOF: stop polling a closed stdin
            if self._notifier is not None:
                self._notifier.setEnabled(False)
            return
        self.feed(data.decode("utf-8", errors="ignore"))
