"""Generic HTTP passthrough used by the ``http`` tool category."""

from typing import Any

import httpx

from ..core import get_logger

logger = get_logger(__name__)


class PassthroughClient:
    """
    Calls arbitrary URLs on behalf of generated applications.

    There is no allow-list: any URL a spec supplies is fetched.
    """

    def __init__(self, timeout: float = 5.0, client: httpx.AsyncClient | None = None) -> None:
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def get(self, url: str) -> Any:
        """GET ``url`` and decode the JSON body."""
        logger.debug("http_get", url=url)
        response = await self._client.get(url)
        response.raise_for_status()
        return response.json()

    async def post(self, url: str, data: Any = None) -> Any:
        """POST ``data`` as JSON to ``url`` and decode the JSON body."""
        logger.debug("http_post", url=url)
        response = await self._client.post(url, json=data)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        await self._client.aclose()
