"""Tests for logging configuration and audit helpers."""

import logging
from unittest.mock import Mock

import pytest
import structlog

from sigsim_app.logging import configure_logging, get_logger
from sigsim_app.logging.config import (
    build_processors,
    enum_values,
    get_gating_logger,
    get_resolution_logger,
    log_gate_decision,
    log_signal_resolution,
)
from sigsim_app.models.indicators import Direction
from sigsim_app.models.signal import SignalResult


@pytest.fixture(autouse=True)
def reset_structlog():
    root_level = logging.getLogger().level
    yield
    structlog.reset_defaults()
    logging.getLogger().setLevel(root_level)


class TestConfigureLogging:

    def test_configure_json(self):
        configure_logging(level="DEBUG", format_json=True)
        config = structlog.get_config()

        assert isinstance(config["processors"][-1], structlog.processors.JSONRenderer)

    def test_configure_console(self):
        configure_logging(level="INFO", include_caller=True)
        processors = structlog.get_config()["processors"]

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert any(
            isinstance(p, structlog.processors.CallsiteParameterAdder) for p in processors
        )

    def test_get_logger(self):
        assert get_logger(__name__) is not None


class TestProcessors:

    def test_enum_values_rendered_by_value(self):
        event = enum_values(None, "info", {
            "event": "Signal resolution",
            "result": SignalResult.WIN,
            "direction": Direction.PUT,
            "confidence": 90.0,
        })
        assert event == {
            "event": "Signal resolution",
            "result": "WIN",
            "direction": "PUT",
            "confidence": 90.0,
        }

    def test_extra_processors_run_before_renderer(self):
        marker = Mock()
        processors = build_processors(format_json=True, include_timestamp=False,
                                      extra_processors=[marker])
        assert processors[-2] is marker
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)


class TestSubsystemLoggers:

    def test_gating_logger_binding(self):
        logger = get_gating_logger("gating")
        assert logger is not None

    def test_resolution_logger_binding(self):
        logger = get_resolution_logger("resolution")
        assert logger is not None


class TestAuditHelpers:

    def test_gate_pass_logs_info(self):
        logger = Mock()
        log_gate_decision(logger, "sure_shot", True, "EURUSD", "confidence 90.00 meets 85.00")

        logger.bind.assert_called_once_with(
            gate_name="sure_shot",
            gate_result="PASS",
            pair="EURUSD",
            reason="confidence 90.00 meets 85.00",
        )
        logger.bind.return_value.info.assert_called_once_with("Gate passed")

    def test_gate_fail_logs_warning_with_context(self):
        logger = Mock()
        log_gate_decision(logger, "sure_shot", False, "EURUSD", "1 risk factor(s) detected",
                          context={"confidence": 88.0})

        bound = logger.bind.return_value
        bound.bind.assert_called_once_with(context={"confidence": 88.0})
        bound.bind.return_value.warning.assert_called_once_with("Gate failed")

    def test_signal_resolution(self):
        logger = Mock()
        log_signal_resolution(logger, 42, "PENDING", "WIN", 0.36)

        logger.bind.assert_called_once_with(
            signal_id=42,
            from_state="PENDING",
            to_state="WIN",
            win_probability=0.36,
        )
        logger.bind.return_value.info.assert_called_once_with("Signal resolution")
