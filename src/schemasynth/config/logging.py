"""Logging configuration for SchemaSynth."""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO
from .settings import get_settings

LOGGER_NAME = "schemasynth"

DEFAULT_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(message)s"
)

# Faker logs every locale lookup at DEBUG
_NOISY_LOGGERS = ("faker", "faker.factory")


def _to_level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def _make_handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure the ``schemasynth`` logger.

    Generated data is written to stdout, so console logs go to stderr unless
    another stream is given. Calling this again replaces earlier handlers.

    Args:
        level: Logging level (defaults to settings.log_level)
        log_file: Also log to this file (defaults to settings.log_file)
        format_string: Record format
        stream: Console stream (default: sys.stderr)
    """
    settings = get_settings()
    log_level = _to_level(level or settings.log_level)
    log_file_path = log_file or settings.log_file
    fmt = format_string or DEFAULT_FORMAT

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(log_level)
    package_logger.handlers.clear()
    package_logger.addHandler(
        _make_handler(logging.StreamHandler(stream or sys.stderr), log_level, fmt)
    )
    if log_file_path:
        package_logger.addHandler(
            _make_handler(logging.FileHandler(log_file_path, encoding="utf-8"), log_level, fmt)
        )
    package_logger.propagate = False

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Module logger under the ``schemasynth`` namespace, configuring logging on first use."""
    if not logging.getLogger(LOGGER_NAME).handlers:
        setup_logging()

    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
