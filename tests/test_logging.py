"""Tests for logging helpers."""

import logging
from typing import Any, Dict, Generator, List, Tuple

import pytest
from rich.logging import RichHandler

from tier_pricing.engine import calculate
from tier_pricing.logging import (
    LOGGER_NAME,
    LogEvent,
    LogLevel,
    configure_logging,
    get_logger,
    log_info,
    log_warning,
    set_log_callback,
)
from tier_pricing.models import PricingConfig


@pytest.fixture
def captured() -> Generator[List[Tuple[int, str, Dict[str, Any]]], None, None]:
    """Collect log events through the callback hook."""
    events: List[Tuple[int, str, Dict[str, Any]]] = []
    set_log_callback(lambda level, event, data: events.append((level, event, data)))
    yield events
    set_log_callback(None)


def test_callback_receives_events(captured: List[Tuple[int, str, Dict[str, Any]]]) -> None:
    """The callback gets level, event name and data including the message."""
    log_warning(LogEvent.CONFIG_LOAD, "Unknown currency", path="pricing.json")
    assert captured == [
        (LogLevel.WARNING, "config_load", {"message": "Unknown currency", "path": "pricing.json"}),
    ]


def test_calculation_is_logged(captured: List[Tuple[int, str, Dict[str, Any]]]) -> None:
    """Computing a curve emits a debug summary."""
    calculate(PricingConfig.default())
    level, event, data = captured[-1]
    assert level == LogLevel.DEBUG
    assert event == "calculation"
    assert data["breakpoints"] == 10
    assert data["max_units"] == 3000


def test_failing_callback_falls_back(caplog: pytest.LogCaptureFixture) -> None:
    """Errors in the callback are reported through the standard logger."""

    def broken(level: int, event: str, data: Dict[str, Any]) -> None:
        raise RuntimeError("boom")

    set_log_callback(broken)
    try:
        with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
            log_info(LogEvent.CLI, "hello")
    finally:
        set_log_callback(None)
    assert "Logging callback failed with error: boom" in caplog.text


def test_standard_logger_used_without_callback(caplog: pytest.LogCaptureFixture) -> None:
    """Without a callback events go to a child of the package logger."""
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        log_info(LogEvent.CONFIG_SAVE, "Saved", path="x.json")
    record = caplog.records[-1]
    assert record.name == get_logger("config_save").name == "tier_pricing.config_save"
    assert "Saved" in record.getMessage()


def test_configure_logging_replaces_handler() -> None:
    """Configuring twice leaves a single Rich handler."""
    logger = logging.getLogger(LOGGER_NAME)
    configure_logging("INFO")
    configure_logging("DEBUG", no_color=True)
    try:
        assert len([h for h in logger.handlers if isinstance(h, RichHandler)]) == 1
        assert logger.level == logging.DEBUG
    finally:
        for handler in [h for h in logger.handlers if isinstance(h, RichHandler)]:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
