"""Structured logging configuration for TypeMaths.

Every module logs through ``get_logger(<module>)``, a child of the
``typemaths`` logger. ``setup_logging`` attaches the handlers to
``typemaths`` and sets the overall level; single modules can be made
more or less verbose than the rest, e.g. ``parsing=DEBUG`` to trace the
parser while the other modules stay at WARNING. Defaults come from
``TYPEMATHS_LOG_LEVEL`` and ``TYPEMATHS_LOG_MODULE_LEVELS`` (see config.py).
"""

import logging
import sys
from datetime import datetime
from typing import Dict, Mapping, Optional, Union

from . import config

ROOT_LOGGER = "typemaths"

# Module loggers whose level was set by the last setup_logging() call
_module_overrides: set = set()


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs structured log entries with timestamp, module, level, and message."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def level_number(level: Union[str, int]) -> int:
    """Translate a level name such as ``"debug"`` into its number.

    Raises:
        ValueError: for a name ``logging`` does not know
    """
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.strip().upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown logging level {level!r}")
    return number


def parse_module_levels(text: str) -> Dict[str, int]:
    """Parse ``"parsing=DEBUG, api=INFO"`` into ``{"parsing": 10, "api": 20}``.

    Raises:
        ValueError: on an entry without ``=`` or with an unknown level
    """
    levels: Dict[str, int] = {}
    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, level = entry.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Expected MODULE=LEVEL, got {entry!r}")
        levels[name.strip()] = level_number(level)
    return levels


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    module_levels: Optional[Mapping[str, Union[str, int]]] = None,
) -> logging.Logger:
    """Set up structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            defaults to config.LOG_LEVEL, unknown names fall back to WARNING
        log_file: Optional file path to write logs (if None, logs to stderr)
        module_levels: Per-module levels, e.g. ``{"parsing": "DEBUG"}``;
            defaults to config.LOG_MODULE_LEVELS

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(ROOT_LOGGER)
    try:
        logger.setLevel(level_number(level or config.LOG_LEVEL))
    except ValueError:
        logger.setLevel(logging.WARNING)

    # Replace handlers from an earlier call
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    if module_levels is None:
        module_levels = parse_module_levels(config.LOG_MODULE_LEVELS)
    for name in _module_overrides:
        get_logger(name).setLevel(logging.NOTSET)
    _module_overrides.clear()
    for name, module_level in module_levels.items():
        get_logger(name).setLevel(level_number(module_level))
        _module_overrides.add(name)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically module name)

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
