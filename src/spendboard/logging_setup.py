"""Logging initialization with labeled prefixes.

Every module logs through ``logging.getLogger(__name__)``; those loggers
sit under the ``spendboard`` logger configured here, which prints each
message with a short label (INFO, WARN, ERROR, SUMMARY).
"""

import logging
import sys
from typing import Optional

__all__ = [
    "SUMMARY_LEVEL",
    "setup_logging",
    "reset_logging",
]

LOGGER_NAME = "spendboard"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

_logger: Optional[logging.Logger] = None


class LabeledFormatter(logging.Formatter):
    """Formatter that prefixes each message with its level label."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure the application logger.

    Safe to call more than once: the handler is installed on the first
    call and later calls only adjust the level and rebind the handler to
    the current ``sys.stderr``.

    Args:
        debug: Log DEBUG messages when True, INFO and above otherwise

    Returns:
        The configured ``spendboard`` logger
    """
    global _logger

    level = logging.DEBUG if debug else logging.INFO
    if _logger is not None:
        _logger.setLevel(level)
        for handler in _logger.handlers:
            if isinstance(handler, logging.StreamHandler):
                handler.setStream(sys.stderr)
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    # stderr keeps command output on stdout clean
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return logger


def reset_logging() -> None:
    """Remove the installed handler and forget the logger. Used by tests."""
    global _logger
    if _logger is not None:
        for handler in _logger.handlers[:]:
            _logger.removeHandler(handler)
        _logger.propagate = True
    _logger = None
