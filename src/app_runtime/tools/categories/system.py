"""System tools: user alerts and diagnostic logging."""

from typing import TYPE_CHECKING, Any

from ...core import get_logger

if TYPE_CHECKING:
    from ..registry import ToolContext, ToolRegistry

logger = get_logger(__name__)

ALERT_KEY = "alert"


def alert(params: dict[str, Any], context: "ToolContext") -> bool:
    message = params.get("message", "")
    logger.info("system_alert", application_id=context.application_id, message=message)
    # The presentation layer subscribes to this key to show the alert
    context.state.set(ALERT_KEY, message)
    return True


def log(params: dict[str, Any], context: "ToolContext") -> bool:
    logger.info("system_log", application_id=context.application_id, message=params.get("message", ""))
    return True


def register_system_tools(registry: "ToolRegistry") -> None:
    """Register system tools."""
    registry.register("system.alert", alert)
    registry.register("system.log", log)
