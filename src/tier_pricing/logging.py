"""Logging utilities for the tier pricing visualizer.

This module provides standardized logging functionality for pricing operations.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

# Type for log callback functions
LogCallback = Callable[[int, str, Dict[str, Any]], None]

LOGGER_NAME = "tier_pricing"

_log_callback: Optional[LogCallback] = None


class LogLevel(int, Enum):
    """Log levels for the package."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogEvent(str, Enum):
    """Event types for pricing logging."""

    CALCULATION = "calculation"
    CONFIG_LOAD = "config_load"
    CONFIG_SAVE = "config_save"
    INPUT_NORMALIZATION = "input_normalization"
    CLI = "cli"


def get_logger(name: str) -> logging.Logger:
    """Get a child of the package logger.

    Args:
        name: Short name of the component (e.g. "engine")

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def set_log_callback(callback: Optional[LogCallback]) -> None:
    """Route log events to a callback instead of the standard logger.

    Args:
        callback: Function receiving (level, event, data), or None to reset
    """
    global _log_callback
    _log_callback = callback


def _log(
    callback: LogCallback,
    level: LogLevel,
    event: LogEvent,
    data: Dict[str, Any],
) -> None:
    """Log an event with the provided callback.

    Args:
        callback: Function to call with the log data
        level: Severity level
        event: Event type
        data: Dictionary of event data
    """
    try:
        callback(level, event.value, data)
    except Exception as e:
        # Fallback to standard logging if callback fails
        logging.getLogger(LOGGER_NAME).error(
            f"Logging callback failed with error: {e}. Original log: "
            f"level={level}, event={event}, data={data}"
        )


def _emit(level: LogLevel, event: LogEvent, message: str, data: Dict[str, Any]) -> None:
    if _log_callback is not None:
        _log(_log_callback, level, event, {"message": message, **data})
        return
    logger = get_logger(event.value)
    if logger.isEnabledFor(level):
        suffix = f" {data}" if data else ""
        logger.log(level, f"{message}{suffix}")


def log_debug(event: LogEvent, message: str, **data: Any) -> None:
    """Log a debug-level event."""
    _emit(LogLevel.DEBUG, event, message, data)


def log_info(event: LogEvent, message: str, **data: Any) -> None:
    """Log an info-level event."""
    _emit(LogLevel.INFO, event, message, data)


def log_warning(event: LogEvent, message: str, **data: Any) -> None:
    """Log a warning-level event."""
    _emit(LogLevel.WARNING, event, message, data)


def log_error(event: LogEvent, message: str, **data: Any) -> None:
    """Log an error-level event."""
    _emit(LogLevel.ERROR, event, message, data)


def configure_logging(level: str = "WARNING", no_color: bool = False) -> None:
    """Attach a Rich handler writing to stderr to the package logger.

    Calling this again replaces the previously installed handler.

    Args:
        level: Level name such as "DEBUG" or "WARNING"
        no_color: Disable color output
    """
    root = logging.getLogger(LOGGER_NAME)
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
