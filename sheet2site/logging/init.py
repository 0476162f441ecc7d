from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

All modules log through `logging.getLogger(__name__)`, so everything under
the `sheet2site` package logger shares one configuration:
- Labels: DEBUG|INFO|WARN|ERROR|SUMMARY followed by the message
- INFO / SUMMARY (and DEBUG) go to stdout, WARN and above to stderr
- Custom SUMMARY level (25) for the end-of-run line
"""

__all__ = [
    "setup_logging",
    "get_logger",
    "log_summary",
    "reset_logging",
]

LOGGER_NAME = "sheet2site"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

# Global logger instance
_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter producing `LABEL message` lines."""

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


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below `level` (keeps stdout free of warnings)."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def setup_logging(debug: bool = False) -> logging.Logger:
    """Setup the package logger (idempotent).

    Args:
        debug: Lower the level to DEBUG on the logger and its handlers

    Returns:
        Configured `sheet2site` logger
    """
    global _logger

    if _logger is not None:
        if debug:
            set_level(logging.DEBUG)
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Clear any existing handlers to avoid duplication
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = LabeledFormatter()

    out_handler = logging.StreamHandler(sys.stdout)
    out_handler.setLevel(level)
    out_handler.addFilter(_BelowLevelFilter(logging.WARNING))
    out_handler.setFormatter(formatter)

    err_handler = logging.StreamHandler(sys.stderr)
    err_handler.setLevel(logging.WARNING)
    err_handler.setFormatter(formatter)

    logger.addHandler(out_handler)
    logger.addHandler(err_handler)

    # Prevent propagation to root logger to avoid duplicate output
    logger.propagate = False

    _logger = logger
    return logger


def set_level(level: int) -> None:
    """Change the level of the package logger and its stdout handler."""
    logger = get_logger()
    logger.setLevel(level)
    for h in logger.handlers:
        if h.level < logging.WARNING:
            h.setLevel(level)


def get_logger() -> logging.Logger:
    """Get the configured package logger (configures it on first use)."""
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    """Log a message at SUMMARY level."""
    logger = get_logger()
    logger.log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Reset the package logger to an unconfigured state. Mainly for testing."""
    global _logger
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _logger = None
