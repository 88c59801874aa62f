"""Service Gateway Client"""

from typing import Any

from ..core import ServiceCallError, get_logger
from .base import BackendHTTPClient

logger = get_logger(__name__)


class ServiceGatewayClient(BackendHTTPClient):
    """
    Client for the service gateway that executes remote tool categories
    (storage, auth, ai, sync, media).
    """

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 5.0, **kwargs: Any) -> None:
        super().__init__(base_url, timeout=timeout, name="service-gateway", **kwargs)

    async def execute(
        self, tool_id: str, params: dict[str, Any], application_id: str | None
    ) -> Any:
        """
        Execute a remote tool.

        Args:
            tool_id: Full tool ID (e.g., "storage.get")
            params: Tool parameters, forwarded unchanged
            application_id: Installed application the call belongs to

        Returns:
            The ``data`` field of a successful response

        Raises:
            ServiceCallError: Gateway answered with ``success: false``
            httpx.HTTPError: Transport failure or non-2xx status
            pybreaker.CircuitBreakerError: Gateway circuit is open
        """
        payload = {"tool_id": tool_id, "params": params, "application_id": application_id}
        response = await self._request("POST", "/services/execute", json=payload)

        try:
            result = response.json()
        except ValueError as e:
            raise ServiceCallError(f"Invalid gateway response: {e}") from e

        if not isinstance(result, dict) or not result.get("success", False):
            error = result.get("error") if isinstance(result, dict) else None
            logger.warning("service_rejected", tool_id=tool_id, error=error)
            raise ServiceCallError(error or "Service execution failed")

        logger.debug("service_result", tool_id=tool_id)
        return result.get("data")
