"""Network tools: JSON passthrough to arbitrary URLs."""

from typing import TYPE_CHECKING, Any

from returns.result import Failure, Result, Success

if TYPE_CHECKING:
    from ..registry import ToolContext, ToolRegistry


async def get(params: dict[str, Any], context: "ToolContext") -> Result[Any, str]:
    url = params.get("url")
    if not url:
        return Failure("http.get requires 'url'")
    if context.http is None:
        return Failure("HTTP client not configured")
    return Success(await context.http.get(url))


async def post(params: dict[str, Any], context: "ToolContext") -> Result[Any, str]:
    url = params.get("url")
    if not url:
        return Failure("http.post requires 'url'")
    if context.http is None:
        return Failure("HTTP client not configured")
    return Success(await context.http.post(url, params.get("data")))


def register_http_tools(registry: "ToolRegistry") -> None:
    """Register network tools."""
    registry.register("http.get", get)
    registry.register("http.post", post)
