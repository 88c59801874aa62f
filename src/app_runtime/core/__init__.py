"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    AppRuntimeError,
    ToolExecutionError,
    ServiceCallError,
    OrchestratorError,
    ProtocolError,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import decode_frame, safe_json_dumps, JSONParseError
from .validate import (
    ValidationError,
    ValidationResult,
    GenerationRequest,
    validate_app_spec,
    validate_json_depth,
)
from .id import new_session_id, new_request_id, new_timer_id


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "AppRuntimeError",
    "ToolExecutionError",
    "ServiceCallError",
    "OrchestratorError",
    "ProtocolError",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "decode_frame",
    "safe_json_dumps",
    "JSONParseError",
    # Validation
    "ValidationError",
    "ValidationResult",
    "GenerationRequest",
    "validate_app_spec",
    "validate_json_depth",
    # IDs
    "new_session_id",
    "new_request_id",
    "new_timer_id",
    # DI
    "create_container",
]
