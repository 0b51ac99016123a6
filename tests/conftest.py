"""Shared pytest fixtures for focusterm tests."""

import logging
import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from focusterm.log import APP_NAME
from focusterm.settings import ConfigStore
from focusterm.timer.engine import TimerEngine
from focusterm.timer.state import TimerState


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    yield app


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "settings.json"


@pytest.fixture
def store(settings_path):
    """ConfigStore pointed at a file inside the test's tmp dir."""
    return ConfigStore(settings_path)


@pytest.fixture
def timer():
    """Fresh TimerState with default durations and no store."""
    return TimerState()


@pytest.fixture
def timer_with_store(store):
    """Fresh TimerState that writes committed edits through to ``store``."""
    return TimerState(store=store)


@pytest.fixture
def engine(qapp, timer):
    """TimerEngine driving ``timer``; the Qt clock is not started."""
    return TimerEngine(timer)


@pytest.fixture
def app_logger():
    """Restore the app logger after configure_logging() has touched it."""
    logger = logging.getLogger(APP_NAME)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
