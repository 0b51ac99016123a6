"""Qt driver for the countdown state machine.

The engine owns the tick source (a ``QTimer``) and is the only place
where commands and ticks reach :class:`TimerState`.  Both arrive on the
Qt event loop, so they are applied one at a time in arrival order.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .commands import Command
from .state import Direction, TimerMode, TimerState, TICKS_PER_SECOND, MODES

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000 // TICKS_PER_SECOND


class TimerEngine(QObject):
    """Applies commands and ticks to a :class:`TimerState`.

    Signals
    -------
    changed()
        Emitted after every command and every tick.
    mode_switched(new_mode: TimerMode)
        Emitted when a running countdown reaches zero and rolls over
        into the other mode.
    quit_requested()
        Emitted for :attr:`Command.QUIT`.  The state is left untouched;
        an edit in progress is simply never committed.
    """

    changed = pyqtSignal()
    mode_switched = pyqtSignal(object)
    quit_requested = pyqtSignal()

    def __init__(self, state: TimerState, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._state = state

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

        self._handlers = {
            Command.START: state.start,
            Command.RESET: state.reset,
            Command.SWITCH_MODE: state.switch_mode,
            Command.BEGIN_EDIT_FOCUS: lambda: state.begin_edit(TimerMode.FOCUS),
            Command.BEGIN_EDIT_BREAK: lambda: state.begin_edit(TimerMode.BREAK),
            Command.INCREASE_EDITED_DURATION:
                lambda: state.adjust_edit(Direction.INCREASE),
            Command.DECREASE_EDITED_DURATION:
                lambda: state.adjust_edit(Direction.DECREASE),
            Command.COMMIT_EDIT: state.commit_edit,
            Command.CANCEL_EDIT: state.cancel_edit,
        }

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def clock_running(self) -> bool:
        return self._qt_timer.isActive()

    # ── tick source ───────────────────────────────────────────────────

    def start_clock(self) -> None:
        self._qt_timer.start()

    def stop_clock(self) -> None:
        self._qt_timer.stop()

    # ── commands ──────────────────────────────────────────────────────

    def dispatch(self, command: Command) -> None:
        if command is Command.QUIT:
            logger.debug("quit requested")
            self.quit_requested.emit()
            return
        logger.debug("command %s", command.value)
        self._handlers[command]()
        self.changed.emit()

    # ── internal ──────────────────────────────────────────────────────

    def _on_tick(self) -> None:
        before = self._state.active_mode
        self._state.advance()
        after = self._state.active_mode
        if after != before:
            logger.info("%s finished; starting %s", MODES[before].label,
                        MODES[after].label.lower())
            self.mode_switched.emit(after)
        self.changed.emit()
