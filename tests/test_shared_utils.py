"""
Tests for shared config, logging, errors and metrics helpers.
"""

import json
from datetime import datetime

import pytest
import structlog

from shared.config import EngineConfig, get_config
from shared.errors import ConfigurationError, ErrorResponse, RulesException
from shared.logging import (
    add_correlation_context,
    add_engine_context,
    clear_context,
    configure_logging,
    get_logger,
    set_correlation_id,
)
from shared.metrics import get_metrics_collector
from rules_engine import FieldNotFoundError, TypeMismatchError, UnknownOperatorError


class TestConfig:
    """Test cases for configuration."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("RULES_LOG_LEVEL", raising=False)
        config = get_config()

        assert isinstance(config, EngineConfig)
        assert config.engine_name == "default"
        assert config.log_level == "info"
        assert config.enable_metrics is True
        assert config.log_evaluations is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("RULES_LOG_LEVEL", "debug")
        monkeypatch.setenv("RULES_ENABLE_METRICS", "false")

        config = get_config("billing")

        assert config.engine_name == "billing"
        assert config.log_level == "debug"
        assert config.enable_metrics is False


class TestErrors:
    """Test cases for error responses."""

    def test_to_response(self):
        error = RulesException("SOME_CODE", "something failed", {"key": "value"})

        response = error.to_response()

        assert isinstance(response, ErrorResponse)
        assert response.trace_id is None
        assert response.code == "SOME_CODE"
        assert response.details == {"key": "value"}

    def test_field_not_found_response(self):
        response = FieldNotFoundError("user.role").to_response()

        assert response.code == "FIELD_NOT_FOUND"
        assert response.message == "field 'user.role' not found"
        assert response.details == {"field": "user.role"}

    def test_unknown_operator_response(self):
        response = UnknownOperatorError("regex").to_response()

        assert response.details == {"operator": "regex"}

    def test_type_mismatch_details(self):
        error = TypeMismatchError("gt", details={"field_type": "str"})

        assert error.message == "type mismatch for gt"
        assert error.details == {"operator": "gt", "field_type": "str"}


class TestLogging:
    """Test cases for structured logging helpers."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()
        clear_context()

    def test_configure_logging(self):
        configure_logging("rules", "info")

        assert structlog.is_configured()
        get_logger("rules.test").info("Configured", answer=42)

    def test_iso_timestamp_survives_processor_chain(self):
        configure_logging("rules", "info")
        # filter_by_level and add_logger_name need a stdlib logger; run the rest
        processors = structlog.get_config()["processors"][2:]

        event = {"event": "Rule evaluated", "logger": "rules.engine"}
        for processor in processors:
            event = processor(None, "info", event)
        payload = json.loads(event)

        assert isinstance(payload["timestamp"], str)
        datetime.fromisoformat(payload["timestamp"].replace("Z", "+00:00"))

    def test_unknown_log_level(self):
        with pytest.raises(ConfigurationError) as exc_info:
            configure_logging("rules", "chatty")

        assert exc_info.value.code == "CONFIGURATION_ERROR"

    def test_correlation_context(self):
        correlation_id = set_correlation_id()

        event = add_correlation_context(None, "info", {"event": "x"})

        assert event["correlation_id"] == correlation_id

    def test_clear_context(self):
        set_correlation_id("abc")
        clear_context()

        assert "correlation_id" not in add_correlation_context(None, "info", {})

    def test_engine_context(self):
        event = add_engine_context(None, "info", {"logger": "rules.engine"})

        assert event["component"] == "rules"


class TestMetricsCollector:
    """Test cases for the metrics collector."""

    def test_unregistered_collectors_coexist(self):
        first = get_metrics_collector("a")
        second = get_metrics_collector("b")

        assert first.get_metric("rule_evaluations_total") is not None
        assert second.get_metric("missing") is None
