"""Clients for external services."""

from .base import BackendHTTPClient
from .gateway import ServiceGatewayClient
from .orchestrator import GeneratedApp, OrchestratorClient
from .passthrough import PassthroughClient

__all__ = [
    "BackendHTTPClient",
    "ServiceGatewayClient",
    "GeneratedApp",
    "OrchestratorClient",
    "PassthroughClient",
]
