"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from .config import Settings, get_settings
from .logging_config import configure_logging
from ..clients import OrchestratorClient, PassthroughClient, ServiceGatewayClient
from ..runtime import SessionFactory
from ..tools import ToolRegistry, build_default_registry


class RuntimeModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide runtime settings."""
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_tool_registry(self) -> ToolRegistry:
        """Provide tool registry singleton."""
        return build_default_registry()

    @singleton
    @provider
    def provide_gateway(self, settings: Settings) -> ServiceGatewayClient:
        """Provide service gateway client."""
        return ServiceGatewayClient(
            settings.gateway_url,
            timeout=settings.request_timeout,
            fail_max=settings.breaker_fail_max,
            reset_timeout=settings.breaker_reset_timeout,
        )

    @singleton
    @provider
    def provide_orchestrator(self, settings: Settings) -> OrchestratorClient:
        """Provide app orchestrator client."""
        return OrchestratorClient(
            settings.orchestrator_url,
            timeout=settings.request_timeout,
            fail_max=settings.breaker_fail_max,
            reset_timeout=settings.breaker_reset_timeout,
        )

    @singleton
    @provider
    def provide_passthrough(self, settings: Settings) -> PassthroughClient:
        """Provide HTTP passthrough client."""
        return PassthroughClient(timeout=settings.request_timeout)

    @singleton
    @provider
    def provide_session_factory(
        self,
        settings: Settings,
        gateway: ServiceGatewayClient,
        orchestrator: OrchestratorClient,
        http: PassthroughClient,
        registry: ToolRegistry,
    ) -> SessionFactory:
        """Provide the session factory wired with shared clients."""
        return SessionFactory(settings, gateway, orchestrator, http, registry)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector; configures logging from the settings."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.json_logs)
    return Injector([RuntimeModule(settings)])
