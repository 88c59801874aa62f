"""Shared HTTP plumbing for backend clients."""

import time
from typing import Any

import httpx
import pybreaker

from ..core import get_logger

logger = get_logger(__name__)


class BreakerListener(pybreaker.CircuitBreakerListener):
    """Listener for circuit breaker state changes."""

    def state_change(self, cb, old_state, new_state):
        """Called when circuit breaker state changes."""
        logger.warning(
            "breaker_state_change",
            breaker=cb.name,
            from_state=str(old_state),
            to_state=str(new_state),
        )


class BackendHTTPClient:
    """
    Async HTTP client for one backend, protected by a circuit breaker.

    Every request outcome is recorded on the breaker; once it opens,
    requests fail fast with ``pybreaker.CircuitBreakerError`` until the
    reset timeout elapses.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        name: str = "backend-http",
        fail_max: int = 5,
        reset_timeout: int = 30,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._reset_timeout = reset_timeout
        self._opened_at: float | None = None
        self._breaker = pybreaker.CircuitBreaker(
            fail_max=fail_max,
            reset_timeout=reset_timeout,
            name=name,
            listeners=[BreakerListener()],
        )

        logger.info("client_init", client=name, url=self.base_url)

    @property
    def breaker(self) -> pybreaker.CircuitBreaker:
        return self._breaker

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Send a request and record its outcome on the circuit breaker.

        Raises:
            httpx.HTTPError: Transport failure or non-2xx status
            pybreaker.CircuitBreakerError: Breaker is open
        """
        self._fail_fast()

        url = f"{self.base_url}{path}"
        error: httpx.HTTPError | None = None
        response: httpx.Response | None = None
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            error = e

        def _outcome() -> httpx.Response:
            if error is not None:
                raise error
            response.raise_for_status()
            return response

        try:
            return self._breaker.call(_outcome)
        finally:
            if self._breaker.current_state == pybreaker.STATE_OPEN and self._opened_at is None:
                self._opened_at = time.monotonic()

    def _fail_fast(self) -> None:
        """Reject without sending while the breaker is open and cooling down."""
        if self._breaker.current_state != pybreaker.STATE_OPEN:
            self._opened_at = None
            return
        if self._opened_at is not None and time.monotonic() - self._opened_at < self._reset_timeout:
            raise pybreaker.CircuitBreakerError("Circuit breaker open - backend unavailable")
        # Trial request; the breaker moves to half-open and re-stamps on failure
        self._opened_at = None

    async def close(self) -> None:
        """Close HTTP client"""
        await self._client.aclose()

    async def __aenter__(self) -> "BackendHTTPClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
