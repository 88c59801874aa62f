"""Tool Registry - maps (category, action) to handlers."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from ..core import get_logger
from ..state import ComponentState

if TYPE_CHECKING:
    from ..clients import OrchestratorClient, PassthroughClient, ServiceGatewayClient
    from ..channel import AppChannel
    from .executor import ToolExecutor
    from .timers import TimerRegistry

logger = get_logger(__name__)

# Categories always served by the service gateway
REMOTE_CATEGORIES = frozenset({"storage", "auth", "ai", "sync", "media"})

# Categories implemented in-process
BUILTIN_CATEGORIES = frozenset({"calc", "ui", "system", "app", "http", "timer"})


def split_tool_id(tool_id: str) -> Tuple[str, str]:
    """Split "category.action" on the first separator."""
    category, _, action = tool_id.partition(".")
    return category, action


@dataclass
class ToolContext:
    """Everything a handler may touch while serving one call."""

    tool_id: str
    category: str
    action: str
    state: ComponentState
    application_id: Optional[str] = None
    executor: Optional["ToolExecutor"] = None
    gateway: Optional["ServiceGatewayClient"] = None
    orchestrator: Optional["OrchestratorClient"] = None
    http: Optional["PassthroughClient"] = None
    timers: Optional["TimerRegistry"] = None
    channel: Optional["AppChannel"] = None


# A handler returns a plain value or a returns.result.Result, sync or async
ToolHandler = Callable[[Dict[str, Any], ToolContext], Any]


class ToolRegistry:
    """
    Registry of tool handlers.

    Lookups try the exact (category, action) pair first, then a handler
    registered for the whole category.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Tuple[str, str], ToolHandler] = {}
        self._category_handlers: Dict[str, ToolHandler] = {}

    def register(self, tool_id: str, handler: ToolHandler) -> None:
        """Register a handler for one tool id."""
        category, action = split_tool_id(tool_id)
        if not category or not action:
            raise ValueError(f"Tool id must look like 'category.action': {tool_id!r}")
        if category in REMOTE_CATEGORIES:
            raise ValueError(f"Category '{category}' is served by the service gateway")
        if (category, action) in self._handlers:
            logger.warning("tool_replaced", tool_id=tool_id)
        self._handlers[(category, action)] = handler

    def tool(self, tool_id: str) -> Callable[[ToolHandler], ToolHandler]:
        """Decorator form of ``register``."""

        def decorator(handler: ToolHandler) -> ToolHandler:
            self.register(tool_id, handler)
            return handler

        return decorator

    def register_category(self, category: str, handler: ToolHandler) -> None:
        """Register a handler serving every action of a category."""
        self._category_handlers[category] = handler

    def resolve(self, category: str, action: str) -> Optional[ToolHandler]:
        """Find the handler for a call, or None when nothing serves it."""
        handler = self._handlers.get((category, action))
        if handler is not None:
            return handler
        return self._category_handlers.get(category)

    def list_tools(self, category: Optional[str] = None) -> List[str]:
        """Registered tool ids, optionally filtered by category."""
        ids = [f"{c}.{a}" for c, a in self._handlers]
        if category:
            ids = [i for i in ids if split_tool_id(i)[0] == category]
        return sorted(ids)

    def get_categories(self) -> List[str]:
        """All categories with at least one handler."""
        categories = {c for c, _ in self._handlers} | set(self._category_handlers)
        return sorted(categories)

    def __contains__(self, tool_id: object) -> bool:
        if not isinstance(tool_id, str):
            return False
        return self.resolve(*split_tool_id(tool_id)) is not None
