"""Remote tool categories, delegated to the service gateway."""

from typing import TYPE_CHECKING, Any

from returns.result import Failure, Result, Success

from ..registry import REMOTE_CATEGORIES

if TYPE_CHECKING:
    from ..registry import ToolContext, ToolRegistry


async def execute_remote(params: dict[str, Any], context: "ToolContext") -> Result[Any, str]:
    if context.gateway is None:
        return Failure("Service gateway not configured")
    data = await context.gateway.execute(context.tool_id, params, context.application_id)
    return Success(data)


def register_remote_tools(registry: "ToolRegistry") -> None:
    """Route every remote category to the service gateway."""
    for category in sorted(REMOTE_CATEGORIES):
        registry.register_category(category, execute_remote)
