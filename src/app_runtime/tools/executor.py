"""
Tool Executor
Routes tool invocations to registered handlers and isolates their failures.
"""

import inspect
import time
from typing import TYPE_CHECKING, Any, Dict, Optional

from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

from ..core import ToolExecutionError, get_logger
from ..monitoring import MetricsCollector, metrics_collector
from ..state import ComponentState
from .categories import build_default_registry
from .registry import (
    BUILTIN_CATEGORIES,
    REMOTE_CATEGORIES,
    ToolContext,
    ToolRegistry,
    split_tool_id,
)

if TYPE_CHECKING:
    from ..channel import AppChannel
    from ..clients import OrchestratorClient, PassthroughClient, ServiceGatewayClient
    from .timers import TimerRegistry

logger = get_logger(__name__)

ERROR_KEY = "error"


class ToolExecutor:
    """
    Executes tools on behalf of the installed application.

    ``execute`` never raises: failures are logged with timing, written to
    the ``error`` state key and reported as ``None``. The executor outlives
    installs; only its bound application id changes.
    """

    def __init__(
        self,
        state: ComponentState,
        registry: Optional[ToolRegistry] = None,
        gateway: Optional["ServiceGatewayClient"] = None,
        orchestrator: Optional["OrchestratorClient"] = None,
        http: Optional["PassthroughClient"] = None,
        timers: Optional["TimerRegistry"] = None,
        channel: Optional["AppChannel"] = None,
        metrics: MetricsCollector = metrics_collector,
    ) -> None:
        self.state = state
        self.registry = registry or build_default_registry()
        self.gateway = gateway
        self.orchestrator = orchestrator
        self.http = http
        self.timers = timers
        self.channel = channel
        self.metrics = metrics
        self.application_id: Optional[str] = None

    def set_application_id(self, application_id: Optional[str]) -> None:
        """Bind the application that subsequent calls belong to."""
        self.application_id = application_id
        logger.debug("executor_bound", application_id=application_id)

    def _context(self, tool_id: str, category: str, action: str) -> ToolContext:
        return ToolContext(
            tool_id=tool_id,
            category=category,
            action=action,
            state=self.state,
            application_id=self.application_id,
            executor=self,
            gateway=self.gateway,
            orchestrator=self.orchestrator,
            http=self.http,
            timers=self.timers,
            channel=self.channel,
        )

    async def run(self, tool_id: str, params: Optional[Dict[str, Any]] = None) -> Result[Any, str]:
        """
        Execute a tool and report the outcome as a Result.

        Unknown tools succeed with ``None``. Never raises.
        """
        start_time = time.perf_counter()
        label = "other"

        try:
            params = dict(params or {})
            category, action = split_tool_id(tool_id)
            if category in REMOTE_CATEGORIES | BUILTIN_CATEGORIES:
                label = category

            logger.debug("tool_execute", tool_id=tool_id, params_count=len(params))

            handler = self.registry.resolve(category, action)
            if handler is None:
                logger.warning("unknown_tool", tool_id=tool_id, category=category)
                self.metrics.record_tool(label, "unknown", time.perf_counter() - start_time)
                return Success(None)

            outcome = handler(params, self._context(tool_id, category, action))
            if inspect.isawaitable(outcome):
                outcome = await outcome

            if isinstance(outcome, Result):
                if not is_successful(outcome):
                    raise ToolExecutionError(tool_id, str(outcome.failure()))
                outcome = outcome.unwrap()

        except Exception as e:
            duration = time.perf_counter() - start_time
            message = str(e) or type(e).__name__
            logger.error(
                "tool_failed",
                tool_id=tool_id,
                error=message,
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 3),
            )
            self.metrics.record_tool(label, "error", duration)
            self.state.set(ERROR_KEY, f"Tool {tool_id} failed: {message}")
            return Failure(message)

        duration = time.perf_counter() - start_time
        logger.debug("tool_complete", tool_id=tool_id, duration_ms=round(duration * 1000, 3))
        self.metrics.record_tool(label, "success", duration)
        return Success(outcome)

    async def execute(self, tool_id: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Execute a tool; returns its value, or None on any failure."""
        result = await self.run(tool_id, params)
        return result.value_or(None)
