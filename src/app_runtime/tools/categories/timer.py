"""
Timer Tools
Deferred and periodic tool invocations backed by the session's timer registry.
"""

from typing import TYPE_CHECKING, Any, Callable

from returns.result import Failure, Result, Success

from ...core import get_logger

if TYPE_CHECKING:
    from ..registry import ToolContext, ToolRegistry

logger = get_logger(__name__)


def _milliseconds(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    return float(value)


def _action_callback(params: dict[str, Any], context: "ToolContext") -> Callable[[], Any]:
    """Build the callback run on each firing: the bound tool, or just a log line."""
    action = params.get("action")
    action_params = params.get("params") or {}

    def fire() -> Any:
        if action and context.executor is not None:
            return context.executor.execute(action, dict(action_params))
        logger.info("timer_fired", action=action)
        return None

    return fire


def set_timeout(params: dict[str, Any], context: "ToolContext") -> Result[Any, str]:
    if context.timers is None:
        return Failure("Timer registry not available")
    delay = _milliseconds(params.get("delay"))
    handle = context.timers.schedule_once(delay / 1000, _action_callback(params, context))
    context.state.set(handle.state_key, handle.id)
    return Success(handle.id)


def set_interval(params: dict[str, Any], context: "ToolContext") -> Result[Any, str]:
    if context.timers is None:
        return Failure("Timer registry not available")
    interval = _milliseconds(params.get("interval"))
    if interval <= 0:
        return Failure("timer.interval requires a positive 'interval'")
    handle = context.timers.schedule_interval(interval / 1000, _action_callback(params, context))
    context.state.set(handle.state_key, handle.id)
    return Success(handle.id)


def clear(params: dict[str, Any], context: "ToolContext") -> Result[Any, str]:
    """Cancel a timer of either kind; ``timer_id`` may be a state key or a raw id."""
    if context.timers is None:
        return Failure("Timer registry not available")
    timer_id = params.get("timer_id")
    if timer_id:
        handle_id = context.state.get(str(timer_id), timer_id)
        context.timers.cancel(str(handle_id))
    return Success(True)


def register_timer_tools(registry: "ToolRegistry") -> None:
    """Register timer tools."""
    registry.register("timer.set", set_timeout)
    registry.register("timer.interval", set_interval)
    registry.register("timer.clear", clear)
