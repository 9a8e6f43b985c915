"""Structured logging configuration for Stepcalc.

Log lines look like::

    2026-10-19T12:00:00.123456 [INFO] stepcalc.solver: Failed to solve '5/0' [code=MATH_ERROR]

Records logged with ``extra={"error_code": ...}`` get the ``[code=...]``
suffix, so rejected expressions can be grepped by error kind.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime

from . import config

ROOT_LOGGER_NAME = "stepcalc"


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs timestamp, level, logger name, message and error code."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        error_code = getattr(record, "error_code", None)
        if error_code:
            message = f"{message} [code={error_code}]"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(
    level: str | None = None, log_file: str | None = None
) -> logging.Logger:
    """Set up structured logging for the application.

    Calling this again replaces (and closes) the handlers installed by the
    previous call.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            defaults to STEPCALC_LOG_LEVEL
        log_file: Optional file path to write logs in addition to stderr;
            defaults to STEPCALC_LOG_FILE

    Returns:
        Configured logger instance
    """
    level = (level or config.LOG_LEVEL).upper()
    log_file = log_file or config.LOG_FILE

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level, logging.WARNING))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically module name)

    Returns:
        Logger instance under the ``stepcalc`` namespace
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
