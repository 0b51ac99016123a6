"""Logging setup.

The terminal belongs to the full-screen display, so log records go to a
rotating file under the platform log directory and to an in-memory
:class:`MessageBuffer` that the display shows in its Messages panel.
"""

from __future__ import annotations

import logging
import logging.handlers
from collections import deque
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "focusterm"
LOG_FILE = "focusterm.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_MESSAGE_LIMIT = 50


class MessageBuffer(logging.Handler):
    """Keeps the most recent formatted records for on-screen display."""

    def __init__(self, capacity: int = _MESSAGE_LIMIT, level: int = logging.INFO) -> None:
        super().__init__(level)
        self._messages: deque[str] = deque(maxlen=capacity)
        self.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._messages.append(self.format(record))
        except Exception:
            self.handleError(record)

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    def post(self, message: str, level: int = logging.WARNING) -> None:
        """Add *message* directly, whatever the logger level is."""
        self._messages.append(f"{logging.getLevelName(level)}: {message}")

    def tail(self, count: int) -> list[str]:
        if count <= 0:
            return []
        return list(self._messages)[-count:]

    def clear(self) -> None:
        self._messages.clear()


def configure_logging(
    level: int | str = logging.INFO,
    log_dir: str | Path | None = None,
    *,
    buffer: MessageBuffer | None = None,
) -> MessageBuffer:
    """Attach the file and message-buffer handlers to the app logger.

    Returns the buffer so the display can read from it.  Calling this
    again replaces the handlers installed by the previous call.
    """
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {name}")

    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    directory = Path(log_dir) if log_dir is not None else Path(user_log_dir(APP_NAME))
    directory.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        directory / LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    if buffer is None:
        buffer = MessageBuffer()
    logger.setLevel(level)
    logger.addHandler(file_handler)
    logger.addHandler(buffer)
    logger.propagate = False
    return buffer
