"""Full-screen terminal display.

Layout (top → bottom):
    - Header: active mode and running/paused
    - "Time Remaining" gauge
    - "Duration" gauge (only while editing)
    - Settings panel | Messages panel
    - Key hints for the current key map
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from ..timer.state import MODES, TimerMode, TimerSnapshot
from .keys import CONTROL_HINTS, EDIT_HINTS


MODE_STYLES: dict[TimerMode, str] = {
    TimerMode.FOCUS: "green",
    TimerMode.BREAK: "cyan",
}

MESSAGE_LINES = 6


def format_duration(seconds: int) -> str:
    """``m:ss`` for a number of seconds (negative values show as 0:00)."""
    m, s = divmod(max(0, seconds), 60)
    return f"{m}:{s:02d}"


def edit_position(mode: TimerMode, seconds: int) -> float:
    """Where *seconds* sits between *mode*'s bounds, 0.0 → 1.0."""
    config = MODES[mode]
    span = config.maximum - config.minimum
    if span <= 0:
        return 1.0
    return max(0.0, min(1.0, (seconds - config.minimum) / span))


class TimerDisplay:
    """Builds one frame from a :class:`TimerSnapshot`.

    The display never touches the state machine; it only reads the
    snapshot it is given.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render(self, snapshot: TimerSnapshot, messages: Sequence[str] = ()) -> Layout:
        layout = Layout()
        layout.split_column(
            Layout(self._header(snapshot), name="header", size=3),
            Layout(self._countdown_gauge(snapshot), name="gauge", size=5),
            Layout(
                self._duration_gauge(snapshot) if snapshot.is_editing else "",
                name="editor",
                size=5,
                visible=snapshot.is_editing,
            ),
            Layout(name="body"),
            Layout(self._footer(snapshot), name="footer", size=3),
        )
        layout["body"].split_row(
            Layout(self._settings_panel(snapshot), name="settings"),
            Layout(self._messages_panel(messages), name="messages", ratio=2),
        )
        return layout

    # ── sections ──────────────────────────────────────────────────────

    def _header(self, snapshot: TimerSnapshot) -> Panel:
        style = MODE_STYLES[snapshot.active_mode]
        label = MODES[snapshot.active_mode].label.upper()
        status = "RUNNING" if snapshot.running else "PAUSED"
        text = Text(justify="center")
        text.append(label, style=f"bold {style}")
        text.append("  ·  ")
        text.append(status, style="bold" if snapshot.running else "yellow")
        return Panel(Align.center(text, vertical="middle"))

    def _countdown_gauge(self, snapshot: TimerSnapshot) -> Panel:
        label = Text(
            f"{format_duration(snapshot.remaining_seconds)} remaining",
            style="bold",
            justify="center",
        )
        bar = ProgressBar(
            total=1.0,
            completed=snapshot.ratio,
            complete_style=MODE_STYLES[snapshot.active_mode],
            finished_style=MODE_STYLES[snapshot.active_mode],
        )
        return Panel(Group(label, bar), title="Time Remaining", border_style="white")

    def _duration_gauge(self, snapshot: TimerSnapshot) -> Panel:
        mode = snapshot.editing_mode
        proposed = snapshot.proposed_duration
        config = MODES[mode]
        label = Text(justify="center")
        label.append(f"{config.label}: ", style="bold")
        label.append(format_duration(proposed), style="bold cyan")
        label.append(
            f"  ({format_duration(config.minimum)} – {format_duration(config.maximum)})",
            style="dim",
        )
        bar = ProgressBar(
            total=1.0,
            completed=edit_position(mode, proposed),
            complete_style="bold cyan",
            finished_style="bold cyan",
        )
        return Panel(Group(label, bar), title="Duration", border_style="cyan")

    def _settings_panel(self, snapshot: TimerSnapshot) -> Panel:
        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="dim")
        grid.add_column()
        grid.add_row("Ratio", f"{snapshot.ratio:.3f}")
        grid.add_row("Remaining Time", format_duration(snapshot.remaining_seconds))
        grid.add_row("Remaining Ticks", str(snapshot.remaining_ticks))
        grid.add_row("Focus Time", format_duration(snapshot.focus_duration))
        grid.add_row("Break Time", format_duration(snapshot.break_duration))
        grid.add_row("Running", str(snapshot.running))
        return Panel(grid, title="Settings")

    def _messages_panel(self, messages: Sequence[str]) -> Panel:
        lines = list(messages)[-MESSAGE_LINES:]
        body = Text("\n".join(lines)) if lines else Text("No messages", style="dim")
        return Panel(body, title="Messages")

    def _footer(self, snapshot: TimerSnapshot) -> Panel:
        hints = EDIT_HINTS if snapshot.is_editing else CONTROL_HINTS
        text = Text(justify="center")
        for i, (key, action) in enumerate(hints):
            if i:
                text.append("  •  ", style="dim")
            text.append(key, style="bold")
            text.append(f" {action}")
        return Panel(Align.center(text, vertical="middle"))
