"""
Generic UI State Tools
Direct state access plus the todo-list helper.
"""

import time
from typing import TYPE_CHECKING, Any

from returns.result import Failure, Result, Success

if TYPE_CHECKING:
    from ..registry import ToolContext, ToolRegistry

TODOS_KEY = "todos"
TASK_INPUT_KEY = "task-input"


def set_state(params: dict[str, Any], context: "ToolContext") -> Result[Any, str]:
    key = params.get("key")
    if not key:
        return Failure("ui.set_state requires 'key'")
    value = params.get("value")
    context.state.set(key, value)
    return Success(value)


def get_state(params: dict[str, Any], context: "ToolContext") -> Result[Any, str]:
    key = params.get("key")
    if not key:
        return Failure("ui.get_state requires 'key'")
    return Success(context.state.get(key))


def add_todo(params: dict[str, Any], context: "ToolContext") -> list[dict[str, Any]]:
    """Append the text of ``task-input`` to ``todos`` unless it is blank."""
    todos = list(context.state.get(TODOS_KEY, []))
    task = context.state.get(TASK_INPUT_KEY, "")
    text = task if isinstance(task, str) else str(task)

    if text.strip():
        todos.append({"id": int(time.time() * 1000), "text": text, "done": False})
        context.state.set(TODOS_KEY, todos)
        context.state.set(TASK_INPUT_KEY, "")
    return todos


def register_ui_tools(registry: "ToolRegistry") -> None:
    """Register generic UI tools that work across all app types."""
    registry.register("ui.set_state", set_state)
    registry.register("ui.get_state", get_state)
    registry.register("ui.add_todo", add_todo)
