"""Pytest configuration and fixtures."""

import os
from typing import Any

import pytest
from prometheus_client import CollectorRegistry

from app_runtime.core.config import Settings
from app_runtime.monitoring import MetricsCollector
from app_runtime.state import ComponentState
from app_runtime.tools import TimerRegistry, ToolExecutor
from app_runtime.channel import AppChannel
from app_runtime.clients import OrchestratorClient, PassthroughClient, ServiceGatewayClient
from app_runtime.runtime import Session


GATEWAY_URL = "http://gateway.test"
ORCHESTRATOR_URL = "http://orchestrator.test"


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["RUNTIME_LOG_LEVEL"] = "DEBUG"
    os.environ["RUNTIME_MAX_THOUGHTS"] = "50"


# ============================================================================
# Fakes
# ============================================================================

class FakeTransport:
    """In-memory duplex transport recording outbound messages."""

    def __init__(self, connected: bool = True, fail_send: bool = False) -> None:
        self.connected = connected
        self.fail_send = fail_send
        self.sent: list[dict[str, Any]] = []

    def is_connected(self) -> bool:
        return self.connected

    async def send(self, message: dict[str, Any]) -> None:
        if self.fail_send:
            raise ConnectionError("socket closed")
        self.sent.append(message)


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    return Settings(gateway_url=GATEWAY_URL, orchestrator_url=ORCHESTRATOR_URL)


@pytest.fixture
def metrics():
    """Metrics collector on a private registry."""
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def state():
    """Empty component state."""
    return ComponentState()


@pytest.fixture
def channel():
    """Host channel for a test session."""
    return AppChannel("sess_test")


@pytest.fixture
def timers(metrics):
    """Timer registry."""
    return TimerRegistry(metrics)


@pytest.fixture
def gateway():
    """Service gateway client pointed at the mocked gateway."""
    return ServiceGatewayClient(GATEWAY_URL)


@pytest.fixture
def orchestrator():
    """Orchestrator client pointed at the mocked orchestrator."""
    return OrchestratorClient(ORCHESTRATOR_URL)


@pytest.fixture
def passthrough():
    """HTTP passthrough client."""
    return PassthroughClient()


@pytest.fixture
def executor(state, gateway, orchestrator, passthrough, timers, channel, metrics):
    """Tool executor with every collaborator wired."""
    return ToolExecutor(
        state,
        gateway=gateway,
        orchestrator=orchestrator,
        http=passthrough,
        timers=timers,
        channel=channel,
        metrics=metrics,
    )


@pytest.fixture
def make_transport():
    """Factory for fake transports in a chosen condition."""
    return FakeTransport


@pytest.fixture
def transport():
    """Connected fake transport."""
    return FakeTransport()


@pytest.fixture
def session(transport, gateway, orchestrator, passthrough, settings, metrics):
    """Session with a connected transport."""
    return Session(
        transport=transport,
        gateway=gateway,
        orchestrator=orchestrator,
        http=passthrough,
        settings=settings,
        metrics=metrics,
    )


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def sample_ui_spec():
    """Sample calculator specification."""
    return {
        "type": "app",
        "title": "Calculator",
        "layout": "vertical",
        "components": [
            {
                "type": "input",
                "id": "display",
                "props": {"value": "0", "readonly": True},
            },
            {
                "type": "grid",
                "id": "keypad",
                "props": {"columns": 4},
                "children": [
                    {
                        "type": "button",
                        "id": "btn-7",
                        "props": {"text": "7"},
                        "on_event": {"click": "calc.append_digit"},
                    },
                    {
                        "type": "button",
                        "id": "btn-equals",
                        "props": {"text": "="},
                        "on_event": {"click": "calc.evaluate"},
                    },
                ],
            },
        ],
        "lifecycle_hooks": {"on_mount": ["calc.clear"], "on_unmount": ["system.log"]},
    }


@pytest.fixture
def todo_ui_spec():
    """Sample todo-list specification."""
    return {
        "title": "Todo",
        "components": [
            {"type": "input", "id": "task-input", "props": {"placeholder": "New task"}},
            {
                "type": "button",
                "id": "add",
                "props": {"text": "Add"},
                "on_event": {"click": "ui.add_todo"},
            },
        ],
        "lifecycle_hooks": {"on_mount": ["ui.set_state"]},
    }
