"""Focus/break durations with JSON persistence.

Durations are stored at ``./settings.json`` (relative to the working
directory) unless ``FOCUSTERM_SETTINGS`` or ``--config`` points elsewhere::

    {
      "focus_time": 1500,
      "break_time": 300
    }

Usage::

    store = ConfigStore()
    durations, problem = store.load()   # never raises
    store.save(durations)               # raises ConfigSaveError
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path


SETTINGS_ENV_VAR = "FOCUSTERM_SETTINGS"
SETTINGS_PATH = Path("settings.json")


@dataclass(frozen=True)
class Durations:
    """Stored durations, in seconds."""

    focus_time: int = 60
    break_time: int = 5


DEFAULT_DURATIONS = Durations()


# ── errors ────────────────────────────────────────────────────────────────


class ConfigError(Exception):
    """Base class for settings file problems."""


class ConfigLoadError(ConfigError):
    """The settings file is missing, unreadable or malformed."""


class ConfigSaveError(ConfigError):
    """The settings file could not be written."""


# ── store ─────────────────────────────────────────────────────────────────


def default_settings_path() -> Path:
    override = os.environ.get(SETTINGS_ENV_VAR)
    return Path(override) if override else SETTINGS_PATH


class ConfigStore:
    """Reads and writes the ``{focus_time, break_time}`` record."""

    def __init__(self, path: str | os.PathLike | None = None) -> None:
        self.path = Path(path) if path is not None else default_settings_path()

    def load(self) -> tuple[Durations, str | None]:
        """Return the stored durations, or the defaults plus a diagnostic.

        The timer must always be usable, so nothing is raised here: any
        problem comes back as a human-readable message instead.
        """
        try:
            return self._read(), None
        except ConfigLoadError as exc:
            return DEFAULT_DURATIONS, f"{exc}; using default durations"

    def save(self, durations: Durations) -> None:
        """Write *durations* to disk as JSON."""
        try:
            text = json.dumps(asdict(durations), indent=2) + "\n"
            if self.path.parent != Path():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text, encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise ConfigSaveError(f"couldn't write {self.path}: {exc}") from exc

    # ── parsing ───────────────────────────────────────────────────────

    def _read(self) -> Durations:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ConfigLoadError(f"{self.path} not found") from None
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigLoadError(f"couldn't read {self.path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            # JSONDecodeError, over-long int literals, runaway nesting
            raise ConfigLoadError(f"{self.path} is not valid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigLoadError(f"{self.path} must contain a JSON object")

        return Durations(
            focus_time=_seconds(data, "focus_time", self.path),
            break_time=_seconds(data, "break_time", self.path),
        )


def _seconds(data: dict, key: str, path: Path) -> int:
    if key not in data:
        raise ConfigLoadError(f"{path} is missing {key!r}")
    value = data[key]
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigLoadError(
            f"{path}: {key!r} must be a non-negative integer, got {value!r}"
        )
    return value
