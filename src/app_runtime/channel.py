"""
App Channel
Message passing between a session and the container hosting it.
"""

import asyncio
from typing import Any, Callable, Literal, Optional

from pydantic import BaseModel, Field

from .core import get_logger

logger = get_logger(__name__)


class SpawnApp(BaseModel):
    """Ask the host to mount a newly generated child application."""

    type: Literal["spawn_app"] = "spawn_app"
    application_id: str
    ui_spec: dict[str, Any] = Field(default_factory=dict)
    source_application_id: Optional[str] = None


class CloseApp(BaseModel):
    """Ask the host to close an application."""

    type: Literal["close_app"] = "close_app"
    application_id: Optional[str] = None


MessageHandler = Callable[[Any], None]


class AppChannel:
    """
    One-way channel from a session to its host.

    Messages are delivered to the attached handler when there is one;
    otherwise they queue until the host reads them with ``get``.
    """

    def __init__(self, owner_id: str) -> None:
        self.owner_id = owner_id
        self._queue: asyncio.Queue = asyncio.Queue()
        self._handler: Optional[MessageHandler] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def post(self, message: SpawnApp | CloseApp) -> bool:
        """
        Send a message to the host.

        Returns:
            False if the channel is closed and the message was dropped
        """
        if self._closed:
            logger.warning("channel_closed_drop", owner=self.owner_id, message_type=message.type)
            return False

        logger.debug("channel_post", owner=self.owner_id, message_type=message.type)
        if self._handler is not None:
            self._handler(message)
        else:
            self._queue.put_nowait(message)
        return True

    def attach(self, handler: MessageHandler) -> None:
        """Deliver messages to ``handler``, starting with any already queued."""
        self._handler = handler
        while not self._queue.empty():
            handler(self._queue.get_nowait())

    def detach(self) -> None:
        self._handler = None

    async def get(self) -> SpawnApp | CloseApp:
        """Wait for the next queued message."""
        return await self._queue.get()

    def get_nowait(self) -> Optional[SpawnApp | CloseApp]:
        """Next queued message, or None."""
        if self._queue.empty():
            return None
        return self._queue.get_nowait()

    def pending(self) -> int:
        return self._queue.qsize()

    def close(self) -> None:
        """Stop accepting messages."""
        self._closed = True
        self._handler = None
