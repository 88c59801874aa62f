"""Tool dispatch: registry, executor, timers and built-in categories."""

from .arithmetic import ExpressionError, evaluate, format_number
from .categories import build_default_registry
from .executor import ToolExecutor
from .registry import (
    BUILTIN_CATEGORIES,
    REMOTE_CATEGORIES,
    ToolContext,
    ToolHandler,
    ToolRegistry,
    split_tool_id,
)
from .timers import TimerHandle, TimerKind, TimerRegistry

__all__ = [
    "ExpressionError",
    "evaluate",
    "format_number",
    "build_default_registry",
    "ToolExecutor",
    "BUILTIN_CATEGORIES",
    "REMOTE_CATEGORIES",
    "ToolContext",
    "ToolHandler",
    "ToolRegistry",
    "split_tool_id",
    "TimerHandle",
    "TimerKind",
    "TimerRegistry",
]
