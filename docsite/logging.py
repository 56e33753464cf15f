"""Logging setup for docsite renders.

Malformed input is reported through warnings instead of failing the render,
so the console handler is paired with a counter the CLI reads back when it
prints its summary.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "docsite"

CONSOLE_FORMAT = "[docsite] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class WarningCounter(logging.Handler):
    """Counts records at WARNING and above without emitting them."""

    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.count = 0

    def emit(self, record: logging.LogRecord) -> None:
        self.count += 1


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger below the ``docsite`` namespace."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> WarningCounter:
    """Install console, counter and optional file handlers on the ``docsite`` logger.

    ``verbose`` wins over ``quiet``. Returns the counter so callers can report
    how many symbols, files or settings were skipped.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Re-running a build in the same process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    counter = WarningCounter()
    logger.addHandler(counter)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)
        # The file keeps debug detail even when the console is quieter.
        logger.setLevel(logging.DEBUG)

    return counter


__all__ = ["WarningCounter", "configure_logging", "get_logger"]
