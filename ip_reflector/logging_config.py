"""Structured logging configuration for IP Reflector.

Human-readable logs always go to the console. When a log file is configured,
JSON structured logs are written there as well, with 10MB rotation and 5 backups.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger


def setup_logging(log_level: str = "INFO", log_file: Path | None = None) -> logging.Logger:
    """Configure console logging and optional JSON file logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of the JSON log file, or None for console only

    Returns:
        Configured root logger instance
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers
    root_logger.handlers.clear()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        json_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        json_formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(filename)s %(lineno)d",
            timestamp=True,
        )
        json_handler.setFormatter(json_formatter)
        json_handler.setLevel(logging.DEBUG)  # Capture all levels to file
        root_logger.addHandler(json_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    # Page requests are logged by our own middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module; pass ``__name__``."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra_fields: Any,
) -> None:
    """Log ``message`` with ``extra_fields`` attached to the record.

    The fields become LogRecord attributes, so they appear as keys in the
    JSON log file. ``event_type`` names the event; ``raw_address`` and
    ``error`` carry what is needed to diagnose a request afterwards.

    Args:
        logger: Logger to emit on
        level: Level name, case-insensitive ("warning", "ERROR", ...)
        message: Human-readable message
        **extra_fields: Structured fields for the record
    """
    logger.log(logging.getLevelNamesMapping()[level.upper()], message, extra=extra_fields)
