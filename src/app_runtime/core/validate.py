"""Input validation with strong typing."""

from dataclasses import dataclass
from typing import Any
from returns.result import Result, Success, Failure

from pydantic import BaseModel, Field, field_validator, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..blueprint import AppSpec
from .errors import AppRuntimeError
from .json import json_size


# Validation limits
MAX_UI_SPEC_SIZE = 512 * 1024  # 512KB
MAX_JSON_DEPTH = 20
MAX_MESSAGE_LENGTH = 10_000


class ValidationError(AppRuntimeError):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class RequestValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(
        strict=True, validate_assignment=True, extra="forbid", frozen=True  # Immutable by default
    )


class GenerationRequest(RequestValidator):
    """Validated outbound generation request."""

    message: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)
    context: dict[str, Any] = Field(default_factory=dict)

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        """Ensure message is non-empty after stripping."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Message cannot be empty")
        return stripped


def validate_json_depth(obj: Any, max_depth: int = MAX_JSON_DEPTH, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent stack overflow.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth
        current_depth: Current depth (internal)

    Raises:
        ValidationError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise ValidationError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)


def _check_unique_ids(spec: AppSpec) -> None:
    seen: set[str] = set()
    for component_id in spec.component_ids():
        if component_id in seen:
            raise ValidationError(f"Duplicate component id '{component_id}'")
        seen.add(component_id)


def validate_app_spec(
    spec: dict[str, Any] | AppSpec,
    max_size: int = MAX_UI_SPEC_SIZE,
    max_depth: int = MAX_JSON_DEPTH,
) -> Result[AppSpec, ValidationResult]:
    """
    Validate and parse an application specification.

    Args:
        spec: Raw spec dictionary (or an already-built AppSpec)
        max_size: Maximum encoded size in bytes
        max_depth: Maximum nesting depth

    Returns:
        Success with the parsed AppSpec, or Failure describing the problem
    """
    if isinstance(spec, AppSpec):
        spec = spec.model_dump(mode="json")

    if not isinstance(spec, dict):
        return Failure(ValidationResult("UI spec must be an object", value=type(spec).__name__))

    try:
        size = json_size(spec)
        if size > max_size:
            raise ValidationError(f"UI spec size {size} bytes exceeds maximum {max_size} bytes")
        validate_json_depth(spec, max_depth)

        if "title" not in spec:
            raise ValidationError("UI spec missing required 'title' field")
        if not isinstance(spec.get("components", []), list):
            raise ValidationError("UI spec 'components' must be a list")

        parsed = AppSpec.model_validate(spec)
        _check_unique_ids(parsed)
        return Success(parsed)
    except ValidationError as e:
        return Failure(ValidationResult(str(e)))
    except PydanticValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        return Failure(ValidationResult(str(first.get("msg", e)), field=location or None))
