"""
Session
One host-side interpreter instance: state, tools, lifecycle and protocol.
"""

import asyncio
from typing import Any, AsyncIterable, Dict, Optional

from ..blueprint import AppSpec
from ..channel import AppChannel, CloseApp, SpawnApp
from ..clients import OrchestratorClient, PassthroughClient, ServiceGatewayClient
from ..core import AppRuntimeError, LogContext, Settings, get_logger, get_settings, new_session_id, validate_app_spec
from ..core.validate import ValidationError
from ..monitoring import MetricsCollector, metrics_collector
from ..state import ComponentState
from ..tools import TimerRegistry, ToolExecutor, ToolRegistry
from .lifecycle import LifecycleController
from .protocol import GenerationSnapshot, ProtocolController, Transport

logger = get_logger(__name__)

APPLICATION_ID_KEY = "application_id"


class Session:
    """
    Interpreter for one host session.

    Owns one state store (cleared on every install), one tool executor
    (rebound on every install), one timer registry and the channel to its
    host. Child sessions created by ``mount_child`` keep a reference to
    their parent and report to it over their own channel.
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        gateway: Optional[ServiceGatewayClient] = None,
        orchestrator: Optional[OrchestratorClient] = None,
        http: Optional[PassthroughClient] = None,
        registry: Optional[ToolRegistry] = None,
        settings: Optional[Settings] = None,
        parent: Optional["Session"] = None,
        metrics: MetricsCollector = metrics_collector,
    ) -> None:
        self.session_id = new_session_id()
        self.settings = settings or get_settings()
        self.parent = parent
        self.children: Dict[str, "Session"] = {}
        self.metrics = metrics

        self.state = ComponentState()
        self.timers = TimerRegistry(metrics)
        self.channel = AppChannel(self.session_id)
        self.executor = ToolExecutor(
            self.state,
            registry=registry,
            gateway=gateway,
            orchestrator=orchestrator,
            http=http,
            timers=self.timers,
            channel=self.channel,
            metrics=metrics,
        )
        self.lifecycle = LifecycleController(self.executor, metrics)
        self.protocol = ProtocolController(self.install, transport, self.settings, metrics)

        self.app_spec: Optional[AppSpec] = None
        self.application_id: Optional[str] = None
        self.closed = False
        self._pending: set[asyncio.Task] = set()

        logger.info("session_created", session_id=self.session_id, parent=parent.session_id if parent else None)

    # ------------------------------------------------------------------
    # Install / teardown
    # ------------------------------------------------------------------

    async def install(self, spec: AppSpec, application_id: str) -> None:
        """
        Replace the active application.

        The previous spec's on_unmount hooks finish before the store is
        cleared; the new spec's on_mount hooks start after the new id is bound.
        """
        if self.closed:
            logger.warning("install_after_close", session_id=self.session_id, application_id=application_id)
            return

        with LogContext(session_id=self.session_id, application_id=application_id):
            previous = self.app_spec
            if previous is not None:
                logger.info("spec_teardown", previous_application_id=self.application_id)
                await self.lifecycle.unmount(previous)

            self.state.clear()
            self.app_spec = spec
            self.application_id = application_id
            self.state.set(APPLICATION_ID_KEY, application_id)
            self.executor.set_application_id(application_id)
            logger.info("spec_installed", title=spec.title, component_count=len(spec.components))

            await self.lifecycle.mount(spec)

    async def close(self) -> None:
        """End the session: unmount, cancel timers, close children and the channel."""
        if self.closed:
            return
        self.closed = True

        with LogContext(session_id=self.session_id):
            for application_id in list(self.children):
                await self.close_child(application_id)

            if self.app_spec is not None:
                await self.lifecycle.unmount(self.app_spec)

            cancelled = self.timers.close()
            for task in list(self._pending):
                task.cancel()
            self.channel.close()
            logger.info("session_closed", timers_cancelled=cancelled)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def request(self, message: str, context: Optional[Dict[str, Any]] = None) -> bool:
        """Ask the generation service for a new application."""
        if self.closed:
            logger.warning("request_after_close", session_id=self.session_id)
            return False
        return await self.protocol.request(message, context)

    async def handle_event(self, frame: Any) -> None:
        """Feed one inbound protocol frame."""
        if self.closed:
            logger.debug("event_after_close", session_id=self.session_id)
            return
        await self.protocol.handle_event(frame)

    async def consume(self, stream: AsyncIterable[Any]) -> None:
        """Feed a stream of inbound protocol frames."""
        async for frame in stream:
            await self.handle_event(frame)

    def snapshot(self) -> GenerationSnapshot:
        return self.protocol.snapshot()

    # ------------------------------------------------------------------
    # User events
    # ------------------------------------------------------------------

    async def dispatch(
        self, component_id: str, event_name: str, event_data: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Run the tool bound to a component event.

        Returns:
            The tool result, or None when nothing is bound
        """
        if self.closed:
            logger.warning("dispatch_after_close", component_id=component_id)
            return None
        if self.app_spec is None:
            logger.warning("dispatch_without_app", component_id=component_id)
            return None

        component = self.app_spec.find_component(component_id)
        if component is None:
            logger.warning("unknown_component", component_id=component_id)
            return None

        tool_id = component.tool_for(event_name)
        if tool_id is None:
            return None

        params = {**(event_data or {}), "componentId": component.id}
        # Calculator buttons carry their digit as the button text
        if "text" in component.props:
            params["digit"] = component.props["text"]
        return await self.executor.execute(tool_id, params)

    def set_value(self, component_id: str, value: Any) -> None:
        """Write an input component's value (presentation change events)."""
        self.state.set(component_id, value)

    # ------------------------------------------------------------------
    # Child applications
    # ------------------------------------------------------------------

    async def mount_child(self, message: SpawnApp) -> "Session":
        """
        Mount a spawned application as a child of this session.

        Raises:
            ValidationError: The spawned spec is invalid
            AppRuntimeError: This session is closed
        """
        if self.closed:
            raise AppRuntimeError("Session is closed")

        result = validate_app_spec(
            message.ui_spec,
            max_size=self.settings.max_spec_size,
            max_depth=self.settings.max_spec_depth,
        )
        spec = result.value_or(None)
        if spec is None:
            raise ValidationError(f"Invalid child spec: {result.failure().message}")

        # A respawn under the same id supersedes the previous child
        if message.application_id in self.children:
            await self.close_child(message.application_id)

        child = Session(
            gateway=self.executor.gateway,
            orchestrator=self.executor.orchestrator,
            http=self.executor.http,
            registry=self.executor.registry,
            settings=self.settings,
            parent=self,
            metrics=self.metrics,
        )
        self.children[message.application_id] = child
        child.channel.attach(lambda msg: self._on_child_message(child, msg))
        await child.install(spec, message.application_id)

        logger.info(
            "child_mounted",
            session_id=self.session_id,
            child_session_id=child.session_id,
            application_id=message.application_id,
        )
        return child

    async def close_child(self, application_id: str) -> bool:
        """Close a child application and forget it."""
        child = self.children.pop(application_id, None)
        if child is None:
            return False
        await child.close()
        logger.info("child_closed", session_id=self.session_id, application_id=application_id)
        return True

    def _on_child_message(self, child: "Session", message: SpawnApp | CloseApp) -> None:
        if isinstance(message, CloseApp):
            self._spawn_task(self.close_child(child.application_id or message.application_id or ""))
        elif isinstance(message, SpawnApp):
            # A grandchild belongs to the child that spawned it
            self._spawn_task(child.mount_child(message))

    def _spawn_task(self, coro: Any) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("child_task_failed", session_id=self.session_id, error=str(task.exception()))


class SessionFactory:
    """Builds sessions sharing one set of backend clients."""

    def __init__(
        self,
        settings: Settings,
        gateway: ServiceGatewayClient,
        orchestrator: OrchestratorClient,
        http: PassthroughClient,
        registry: ToolRegistry,
    ) -> None:
        self.settings = settings
        self.gateway = gateway
        self.orchestrator = orchestrator
        self.http = http
        self.registry = registry

    def create(self, transport: Optional[Transport] = None) -> Session:
        return Session(
            transport=transport,
            gateway=self.gateway,
            orchestrator=self.orchestrator,
            http=self.http,
            registry=self.registry,
            settings=self.settings,
        )

    async def close(self) -> None:
        """Close the shared HTTP clients."""
        await self.gateway.close()
        await self.orchestrator.close()
        await self.http.close()
