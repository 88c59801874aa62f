"""
Protocol Controller
State machine consuming generation events and installing the resulting spec.
"""

from collections import deque
from enum import Enum
from typing import (
    Annotated,
    Any,
    AsyncIterable,
    Awaitable,
    Callable,
    Literal,
    Optional,
    Protocol,
    Union,
)

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from returns.pipeline import is_successful

from ..blueprint import AppSpec
from ..core import (
    GenerationRequest,
    JSONParseError,
    ProtocolError,
    Settings,
    decode_frame,
    get_logger,
    get_settings,
    new_request_id,
    validate_app_spec,
)
from ..monitoring import MetricsCollector, metrics_collector

logger = get_logger(__name__)

NOT_CONNECTED = "Not connected to AI service"


# ============================================================================
# Inbound Events
# ============================================================================


class _Event(BaseModel):
    model_config = ConfigDict(extra="ignore")

    request_id: Optional[str] = None


class GenerationStart(_Event):
    type: Literal["generation_start"]
    message: str = ""


class Thought(_Event):
    type: Literal["thought"]
    content: str = ""


class UIGenerated(_Event):
    type: Literal["ui_generated"]
    application_id: str = Field(validation_alias=AliasChoices("application_id", "app_id"))
    ui_spec: dict[str, Any]


class Complete(_Event):
    type: Literal["complete"]


class ErrorEvent(_Event):
    type: Literal["error"]
    message: str = "Generation failed"


ProtocolEvent = Annotated[
    Union[GenerationStart, Thought, UIGenerated, Complete, ErrorEvent],
    Field(discriminator="type"),
]

_event_adapter: TypeAdapter = TypeAdapter(ProtocolEvent)

EVENT_TYPES = frozenset({"generation_start", "thought", "ui_generated", "complete", "error"})


def parse_event(frame: str | bytes | dict[str, Any]) -> Optional[ProtocolEvent]:
    """
    Parse one transport frame.

    Returns:
        The typed event, or None for event types this controller ignores

    Raises:
        JSONParseError: Frame is not a JSON object
        ProtocolError: Known event type with an invalid payload
    """
    data = decode_frame(frame)
    if data.get("type") not in EVENT_TYPES:
        return None
    try:
        return _event_adapter.validate_python(data)
    except PydanticValidationError as e:
        raise ProtocolError(f"Invalid {data['type']} event: {e.errors()[0]['msg']}") from e


# ============================================================================
# State Machine
# ============================================================================


class GenerationStatus(str, Enum):
    """Generation lifecycle states."""

    IDLE = "idle"
    REQUESTING = "requesting"
    GENERATING = "generating"
    READY = "ready"
    FAILED = "failed"


class Transport(Protocol):
    """Duplex connection to the generation service."""

    def is_connected(self) -> bool:
        ...

    async def send(self, message: dict[str, Any]) -> None:
        ...


class GenerationSnapshot(BaseModel):
    """Observable generation state handed to listeners."""

    status: GenerationStatus
    loading: bool
    error: Optional[str]
    thoughts: list[str]
    application_id: Optional[str]
    title: Optional[str]


Installer = Callable[[AppSpec, str], Awaitable[None]]
SnapshotListener = Callable[[GenerationSnapshot], None]


class ProtocolController:
    """
    Consumes generation events in arrival order.

    idle -> requesting -> generating -> ready | failed, and back to
    requesting on the next request. Events carrying a ``request_id`` that
    does not match the outstanding request are dropped.
    """

    def __init__(
        self,
        install: Installer,
        transport: Optional[Transport] = None,
        settings: Optional[Settings] = None,
        metrics: MetricsCollector = metrics_collector,
    ) -> None:
        self._install = install
        self.transport = transport
        self.settings = settings or get_settings()
        self.metrics = metrics

        self.status = GenerationStatus.IDLE
        self.loading = False
        self.error: Optional[str] = None
        self.thoughts: deque[str] = deque(maxlen=self.settings.max_thoughts)
        self.ui_spec: Optional[AppSpec] = None
        self.application_id: Optional[str] = None
        self.request_id: Optional[str] = None
        self._listeners: list[SnapshotListener] = []

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def outstanding(self) -> bool:
        """True while a generation request has not reached a terminal event."""
        return self.status in (GenerationStatus.REQUESTING, GenerationStatus.GENERATING)

    def snapshot(self) -> GenerationSnapshot:
        return GenerationSnapshot(
            status=self.status,
            loading=self.loading,
            error=self.error,
            thoughts=list(self.thoughts),
            application_id=self.application_id,
            title=self.ui_spec.title if self.ui_spec else None,
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener called after every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error("snapshot_listener_failed", error=str(e), exc_info=True)

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------

    async def request(self, message: str, context: Optional[dict[str, Any]] = None) -> bool:
        """
        Ask the generation service for a new application.

        Returns:
            True if the request was sent
        """
        if self.transport is None or not self.transport.is_connected():
            logger.error("not_connected", has_transport=self.transport is not None)
            self.error = NOT_CONNECTED
            self.metrics.record_generation("rejected")
            self._notify()
            return False

        if len(message) > self.settings.max_message_length:
            self.error = f"Request exceeds {self.settings.max_message_length} characters"
            self.metrics.record_generation("rejected")
            self._notify()
            return False

        try:
            validated = GenerationRequest(message=message, context=context or {})
        except PydanticValidationError as e:
            self.error = f"Invalid request: {e.errors()[0]['msg']}"
            self.metrics.record_generation("rejected")
            self._notify()
            return False

        self.request_id = new_request_id()
        self.status = GenerationStatus.REQUESTING
        self.loading = True
        self.error = None
        self.thoughts.clear()
        self._notify()

        logger.info("generation_request", request_id=self.request_id, message=validated.message[:50])
        self.metrics.record_generation("requested")

        try:
            await self.transport.send(
                {
                    "type": "generate",
                    "message": validated.message,
                    "context": validated.context,
                    "request_id": self.request_id,
                }
            )
        except Exception as e:
            logger.error("generation_send_failed", request_id=self.request_id, error=str(e))
            self._fail(str(e) or "Failed to send request")
            return False
        return True

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------

    async def consume(self, stream: AsyncIterable[Any]) -> None:
        """Process every frame of a stream in arrival order."""
        async for frame in stream:
            await self.handle_event(frame)

    async def handle_event(self, frame: Any) -> None:
        """Process one inbound frame; malformed frames are logged and dropped."""
        try:
            event = parse_event(frame)
        except (JSONParseError, ProtocolError) as e:
            logger.warning("invalid_frame", error=str(e))
            self.metrics.record_protocol_event("invalid")
            return

        if event is None:
            logger.debug("ignored_frame")
            return

        self.metrics.record_protocol_event(event.type)

        if event.request_id and self.request_id and event.request_id != self.request_id:
            logger.info("stale_event", event_type=event.type, request_id=event.request_id)
            return

        if isinstance(event, GenerationStart):
            self._on_generation_start(event)
        elif isinstance(event, Thought):
            self._on_thought(event)
        elif isinstance(event, UIGenerated):
            await self._on_ui_generated(event)
        elif isinstance(event, Complete):
            self._on_complete()
        elif isinstance(event, ErrorEvent):
            logger.error("generation_error", message=event.message)
            self._fail(event.message)

    def _on_generation_start(self, event: GenerationStart) -> None:
        logger.info("generation_start", message=event.message)
        self.status = GenerationStatus.GENERATING
        self.loading = True
        if event.message:
            self.thoughts.append(event.message)
        self._notify()

    def _on_thought(self, event: Thought) -> None:
        if not self.outstanding:
            logger.debug("thought_without_generation")
            return
        self.thoughts.append(event.content)
        self._notify()

    async def _on_ui_generated(self, event: UIGenerated) -> None:
        result = validate_app_spec(
            event.ui_spec,
            max_size=self.settings.max_spec_size,
            max_depth=self.settings.max_spec_depth,
        )
        if not is_successful(result):
            failure = result.failure()
            logger.error("invalid_ui_spec", application_id=event.application_id, error=failure.message)
            self._fail(f"Invalid UI spec: {failure.message}")
            return

        spec = result.unwrap()
        logger.info(
            "ui_generated",
            application_id=event.application_id,
            title=spec.title,
            component_count=len(spec.components),
        )
        await self._install(spec, event.application_id)
        self.ui_spec = spec
        self.application_id = event.application_id
        self._notify()

    def _on_complete(self) -> None:
        logger.info("generation_complete", application_id=self.application_id)
        self.loading = False
        self.status = GenerationStatus.READY
        self.metrics.record_generation("ready")
        self._notify()

    def _fail(self, message: str) -> None:
        self.error = message
        self.loading = False
        self.status = GenerationStatus.FAILED
        self.metrics.record_generation("failed")
        self._notify()
