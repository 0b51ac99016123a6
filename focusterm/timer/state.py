"""Countdown state machine for focusterm.

States
------
IDLE       Not running.  The countdown is frozen at whatever was armed.
RUNNING    ``advance()`` decrements the countdown once per tick.
EDITING    A proposed duration is being adjusted.  Orthogonal to the two
           states above: the countdown keeps running while editing.

Transitions
-----------
IDLE → RUNNING                      (start)
RUNNING → IDLE, re-armed            (reset)
any → same, other mode, re-armed    (switch_mode)
RUNNING, countdown at 0 → RUNNING   (advance: focus ↔ break)
any → EDITING                       (begin_edit)
EDITING → previous                  (commit_edit / cancel_edit)

There is no "finished" state: the focus/break cycle repeats until the
process exits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..settings import DEFAULT_DURATIONS, ConfigSaveError, ConfigStore, Durations

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerMode(Enum):
    FOCUS = "focus"
    BREAK = "break"

    @property
    def other(self) -> TimerMode:
        return TimerMode.BREAK if self is TimerMode.FOCUS else TimerMode.FOCUS


class Direction(Enum):
    INCREASE = 1
    DECREASE = -1


# ── constants ─────────────────────────────────────────────────────────────

TICKS_PER_SECOND = 5
EDIT_STEP = 60  # seconds per adjust_edit() call

MIN_FOCUS = 60
MAX_FOCUS = 60 * 60
MIN_BREAK = 5
MAX_BREAK = 60 * 60


@dataclass(frozen=True)
class ModeConfig:
    minimum: int
    maximum: int
    label: str

    def clamp(self, seconds: int) -> int:
        return max(self.minimum, min(self.maximum, seconds))


MODES: dict[TimerMode, ModeConfig] = {
    TimerMode.FOCUS: ModeConfig(MIN_FOCUS, MAX_FOCUS, "Focus"),
    TimerMode.BREAK: ModeConfig(MIN_BREAK, MAX_BREAK, "Break"),
}


# ── records ───────────────────────────────────────────────────────────────


@dataclass
class EditSession:
    """A duration being adjusted before it is committed."""

    editing_mode: TimerMode
    proposed_duration: int


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of everything the display needs for one frame."""

    active_mode: TimerMode
    running: bool
    ratio: float
    remaining_seconds: int
    remaining_ticks: int
    focus_duration: int
    break_duration: int
    editing_mode: TimerMode | None = None
    proposed_duration: int | None = None

    @property
    def is_editing(self) -> bool:
        return self.editing_mode is not None


# ── state machine ─────────────────────────────────────────────────────────


class TimerState:
    """Focus/break countdown driven by discrete ticks.

    One tick is ``1 / TICKS_PER_SECOND`` seconds.  The state is mutated
    only through the command methods and :meth:`advance`; everything the
    display reads is derived on demand.

    If a :class:`~focusterm.settings.ConfigStore` is attached, every
    committed edit is written through to it.
    """

    def __init__(
        self,
        focus_duration: int = DEFAULT_DURATIONS.focus_time,
        break_duration: int = DEFAULT_DURATIONS.break_time,
        *,
        store: ConfigStore | None = None,
    ) -> None:
        self._durations: dict[TimerMode, int] = {
            TimerMode.FOCUS: self._bounded(TimerMode.FOCUS, focus_duration),
            TimerMode.BREAK: self._bounded(TimerMode.BREAK, break_duration),
        }
        self._store = store

        self.active_mode: TimerMode = TimerMode.FOCUS
        self.remaining_ticks: int = 0
        self.current_target_ticks: int = 0
        self.running: bool = False
        self.edit: EditSession | None = None

    @classmethod
    def from_durations(
        cls, durations: Durations, *, store: ConfigStore | None = None
    ) -> TimerState:
        return cls(durations.focus_time, durations.break_time, store=store)

    @staticmethod
    def _bounded(mode: TimerMode, seconds: int) -> int:
        clamped = MODES[mode].clamp(seconds)
        if clamped != seconds:
            logger.warning(
                "%s duration %ss is outside [%s, %s]; using %ss",
                MODES[mode].label, seconds,
                MODES[mode].minimum, MODES[mode].maximum, clamped,
            )
        return clamped

    # ══════════════════════════════════════════════════════════════════
    #  PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def focus_duration(self) -> int:
        return self._durations[TimerMode.FOCUS]

    @property
    def break_duration(self) -> int:
        return self._durations[TimerMode.BREAK]

    @property
    def durations(self) -> Durations:
        return Durations(
            focus_time=self.focus_duration,
            break_time=self.break_duration,
        )

    @property
    def proposed_duration(self) -> int | None:
        """The value being edited, or ``None`` outside an edit session."""
        return self.edit.proposed_duration if self.edit else None

    def duration_for(self, mode: TimerMode) -> int:
        return self._durations[mode]

    # ══════════════════════════════════════════════════════════════════
    #  COMMANDS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Let the countdown run.  Valid in any state."""
        self.running = True

    def reset(self) -> None:
        """Stop and re-arm the countdown for the active mode."""
        self.running = False
        self._arm()

    def switch_mode(self) -> None:
        """Flip focus ↔ break and re-arm.  ``running`` is left alone."""
        self.active_mode = self.active_mode.other
        self._arm()

    def begin_edit(self, mode: TimerMode) -> None:
        if self.edit is not None and self.edit.editing_mode == mode:
            return
        self.edit = EditSession(mode, self._durations[mode])

    def adjust_edit(self, direction: Direction) -> None:
        """Move the proposed duration one step, snapping to the bounds."""
        if self.edit is None:
            return
        config = MODES[self.edit.editing_mode]
        proposed = self.edit.proposed_duration + direction.value * EDIT_STEP
        self.edit.proposed_duration = config.clamp(proposed)

    def commit_edit(self) -> None:
        """Store the proposed duration and write both durations through.

        When the edited mode is the active one and the countdown is not
        running, the countdown is re-armed so the new value shows at once.
        A failed write is logged; the in-memory change stays.
        """
        if self.edit is None:
            return
        session, self.edit = self.edit, None
        self._durations[session.editing_mode] = session.proposed_duration
        logger.info(
            "%s duration set to %ss",
            MODES[session.editing_mode].label, session.proposed_duration,
        )

        if session.editing_mode == self.active_mode and not self.running:
            self._arm()

        self._persist()

    def cancel_edit(self) -> None:
        """Drop the edit session without changing anything."""
        self.edit = None

    def advance(self) -> None:
        """Apply one tick."""
        if not self.running:
            return
        if self.remaining_ticks == 0:
            self.switch_mode()
            return
        self.remaining_ticks -= 1

    # ══════════════════════════════════════════════════════════════════
    #  QUERIES
    # ══════════════════════════════════════════════════════════════════

    def ratio(self) -> float:
        """Fraction of the armed countdown still left, in ``[0.0, 1.0]``."""
        if self.remaining_ticks == 0 or self.current_target_ticks == 0:
            return 0.0
        return min(1.0, self.remaining_ticks / self.current_target_ticks)

    def remaining_seconds(self) -> int:
        return self.remaining_ticks // TICKS_PER_SECOND

    def is_editing(self) -> bool:
        return self.edit is not None

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            active_mode=self.active_mode,
            running=self.running,
            ratio=self.ratio(),
            remaining_seconds=self.remaining_seconds(),
            remaining_ticks=self.remaining_ticks,
            focus_duration=self.focus_duration,
            break_duration=self.break_duration,
            editing_mode=self.edit.editing_mode if self.edit else None,
            proposed_duration=self.proposed_duration,
        )

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _arm(self) -> None:
        ticks = self._durations[self.active_mode] * TICKS_PER_SECOND
        self.current_target_ticks = ticks
        self.remaining_ticks = ticks

    def _persist(self) -> None:
        if self._store is None:
            return
        try:
            self._store.save(self.durations)
        except ConfigSaveError as exc:
            logger.warning("Could not save durations: %s", exc)
