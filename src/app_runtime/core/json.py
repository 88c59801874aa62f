"""Fast JSON decoding for transport frames."""

from typing import Any
import json

import orjson

from .errors import AppRuntimeError


class JSONParseError(AppRuntimeError):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def decode_frame(raw: str | bytes | dict[str, Any]) -> dict[str, Any]:
    """
    Decode one transport frame into a dictionary.

    Args:
        raw: Already-decoded mapping, or JSON text/bytes

    Returns:
        Parsed frame

    Raises:
        JSONParseError: If the frame is not a JSON object
    """
    if isinstance(raw, dict):
        return raw

    try:
        result = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise JSONParseError(f"Invalid JSON frame: {e}", e)

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected object, got {type(result).__name__}")
    return result


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, ValueError):
            # Fallback for edge cases (e.g., integers outside 64-bit range)
            pass

    return json.dumps(obj, indent=indent if indent > 0 else None, default=str)


def json_size(obj: Any) -> int:
    """Size in bytes of the compact JSON encoding of ``obj``."""
    return len(safe_json_dumps(obj).encode("utf-8"))
