"""
App Tools
Spawn, close and list applications through the orchestrator.
"""

from typing import TYPE_CHECKING, Any

from returns.result import Failure, Result, Success

from ...channel import CloseApp, SpawnApp
from ...core import get_logger

if TYPE_CHECKING:
    from ..registry import ToolContext, ToolRegistry

logger = get_logger(__name__)


async def spawn(params: dict[str, Any], context: "ToolContext") -> Result[Any, str]:
    """Generate a child application and hand it to the host for mounting."""
    message = params.get("request") or params.get("message")
    if not message:
        return Failure("app.spawn requires 'request'")
    if context.orchestrator is None:
        return Failure("App orchestrator not configured")

    parent_id = context.state.get("application_id", context.application_id)
    logger.info("app_spawn", request=str(message)[:50], parent_application_id=parent_id)

    generated = await context.orchestrator.generate_ui(str(message), parent_application_id=parent_id)

    if context.channel is not None:
        context.channel.post(
            SpawnApp(
                application_id=generated.application_id,
                ui_spec=generated.ui_spec,
                source_application_id=context.application_id,
            )
        )
    return Success(generated.ui_spec)


def close(params: dict[str, Any], context: "ToolContext") -> bool:
    """Ask the host to close the current application."""
    logger.info("app_close", application_id=context.application_id)
    if context.channel is not None:
        context.channel.post(CloseApp(application_id=context.application_id))
    return True


async def list_apps(params: dict[str, Any], context: "ToolContext") -> Result[Any, str]:
    if context.orchestrator is None:
        return Failure("App orchestrator not configured")
    return Success(await context.orchestrator.list_apps())


def register_app_tools(registry: "ToolRegistry") -> None:
    """Register app management tools."""
    registry.register("app.spawn", spawn)
    registry.register("app.close", close)
    registry.register("app.list", list_apps)
