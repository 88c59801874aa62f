"""Tests for metrics and logging setup."""

import pytest
import structlog
from prometheus_client import CollectorRegistry

from app_runtime.core import LogContext, configure_logging, get_logger
from app_runtime.monitoring import MetricsCollector


@pytest.mark.unit
def test_metrics_exposition():
    """Test recorded values appear in the Prometheus output."""
    metrics = MetricsCollector(registry=CollectorRegistry())
    metrics.record_tool("calc", "success", 0.002)
    metrics.record_protocol_event("thought")
    metrics.record_generation("ready")
    metrics.set_active_timers(3)

    output = metrics.get_metrics().decode()

    assert 'runtime_tool_executions_total{category="calc",status="success"} 1.0' in output
    assert 'runtime_protocol_events_total{type="thought"} 1.0' in output
    assert 'runtime_generations_total{outcome="ready"} 1.0' in output
    assert "runtime_active_timers 3.0" in output
    assert "runtime_uptime_seconds" in output


@pytest.mark.unit
@pytest.mark.parametrize("json_logs", [False, True])
def test_configure_logging(json_logs):
    configure_logging("DEBUG", json_logs=json_logs)
    logger = get_logger("app_runtime.test")

    logger.info("logging_configured", json_logs=json_logs)


@pytest.mark.unit
def test_log_context_binds_and_unbinds():
    """Test LogContext scopes contextvars to the block."""
    with LogContext(session_id="sess_1", application_id="app-1"):
        bound = structlog.contextvars.get_contextvars()
        assert bound["session_id"] == "sess_1"
        assert bound["application_id"] == "app-1"

    assert "session_id" not in structlog.contextvars.get_contextvars()


@pytest.mark.unit
def test_nested_log_context_restores_outer_values():
    """Test an inner scope does not clobber the enclosing session id."""
    with LogContext(session_id="sess_parent"):
        with LogContext(session_id="sess_child"):
            assert structlog.contextvars.get_contextvars()["session_id"] == "sess_child"
        assert structlog.contextvars.get_contextvars()["session_id"] == "sess_parent"
