"""Shared test helpers for focusterm."""

from focusterm.settings import ConfigSaveError, Durations
from focusterm.timer.state import TimerState


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class RecordingStore:
    """Stand-in ConfigStore that remembers what it was asked to save."""

    def __init__(self):
        self.saved: list[Durations] = []

    def save(self, durations: Durations) -> None:
        self.saved.append(durations)


class FailingStore:
    """Stand-in ConfigStore whose writes always fail."""

    def __init__(self):
        self.attempts = 0

    def save(self, durations: Durations) -> None:
        self.attempts += 1
        raise ConfigSaveError("disk full")


def run_ticks(timer: TimerState, count: int) -> None:
    """Call ``advance()`` *count* times."""
    for _ in range(count):
        timer.advance()
