"""Terminal application shell for focusterm."""

from __future__ import annotations

import logging
import signal

from PyQt6.QtCore import QCoreApplication, QObject
from rich.console import Console
from rich.layout import Layout
from rich.live import Live

from .log import MessageBuffer
from .settings import ConfigStore, Durations
from .timer.engine import TimerEngine
from .timer.state import MODES, TimerMode, TimerState
from .ui.display import TimerDisplay
from .ui.keys import KeyReader, resolve_command

logger = logging.getLogger(__name__)


class FocusTermApp(QObject):
    """Wires keyboard, clock, state machine and display together.

    Everything runs on the Qt event loop: key presses and ticks are
    turned into state changes one at a time, and each change redraws the
    screen.
    """

    def __init__(
        self,
        store: ConfigStore,
        durations: Durations,
        *,
        messages: MessageBuffer | None = None,
        console: Console | None = None,
        key_reader: KeyReader | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._state = TimerState.from_durations(durations, store=store)
        self._engine = TimerEngine(self._state, parent=self)
        self._display = TimerDisplay(console)
        self._messages = messages
        self._keys = key_reader or KeyReader(parent=self)
        self._live: Live | None = None

        self._keys.key_pressed.connect(self.handle_key)
        self._engine.changed.connect(self.refresh)
        self._engine.mode_switched.connect(self._on_mode_switched)
        self._engine.quit_requested.connect(self._on_quit)

    # ── accessors ─────────────────────────────────────────────────────

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    # ── event handling ────────────────────────────────────────────────

    def handle_key(self, key: str) -> None:
        command = resolve_command(key, self._state.is_editing())
        if command is None:
            return
        self._engine.dispatch(command)

    def frame(self) -> Layout:
        messages = self._messages.messages if self._messages is not None else ()
        return self._display.render(self._state.snapshot(), messages)

    def refresh(self) -> None:
        if self._live is not None:
            self._live.update(self.frame(), refresh=True)

    def _on_mode_switched(self, mode: TimerMode) -> None:
        self._display.console.bell()
        logger.debug("now counting down %s", MODES[mode].label.lower())

    def _on_quit(self) -> None:
        app = QCoreApplication.instance()
        if app is not None:
            app.quit()

    # ── main loop ─────────────────────────────────────────────────────

    def run(self) -> int:
        """Show the timer and block until the user quits."""
        app = QCoreApplication.instance()
        if app is None:
            raise RuntimeError("FocusTermApp.run() needs a QCoreApplication")

        self._state.reset()
        self._keys.open()
        # Python signal handlers run between Qt events; the tick timer
        # guarantees there are some.
        previous_handler = signal.signal(signal.SIGINT, lambda *_: app.quit())
        try:
            with Live(
                self.frame(),
                console=self._display.console,
                screen=True,
                auto_refresh=False,
            ) as live:
                self._live = live
                self._engine.start_clock()
                code = app.exec()
        finally:
            self._engine.stop_clock()
            self._live = None
            self._keys.close()
            signal.signal(signal.SIGINT, previous_handler)

        if self._state.is_editing():
            logger.info("uncommitted edit discarded")
        logger.info("exiting")
        return code
