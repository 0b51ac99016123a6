"""Allow running focusterm as a module: python -m focusterm."""

from __future__ import annotations

import argparse
import logging
import sys

from PyQt6.QtCore import QCoreApplication

from .app import FocusTermApp
from .log import configure_logging
from .settings import SETTINGS_ENV_VAR, ConfigStore

logger = logging.getLogger("focusterm")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="focusterm",
        description="Focus/break countdown timer for the terminal.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help=f"settings file (default: ${SETTINGS_ENV_VAR} or ./settings.json)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="minimum level written to the log (default: INFO)",
    )
    parser.add_argument(
        "--log-dir",
        metavar="DIR",
        help="directory for focusterm.log (default: the platform log dir)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    messages = configure_logging(args.log_level, args.log_dir)

    store = ConfigStore(args.config)
    durations, problem = store.load()
    if problem:
        logger.warning(problem)
        if not logger.isEnabledFor(logging.WARNING):
            messages.post(problem)
    else:
        logger.info("loaded durations from %s", store.path)

    qapp = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    qapp.setApplicationName("focusterm")

    app = FocusTermApp(store, durations, messages=messages)
    sys.exit(app.run())


if __name__ == "__main__":
    main()
