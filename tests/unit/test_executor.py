"""Tests for the tool executor and its built-in categories."""

import pytest
from returns.pipeline import is_successful
from returns.result import Failure

from app_runtime.tools import ToolExecutor, ToolRegistry, split_tool_id
from app_runtime.tools.executor import ERROR_KEY


@pytest.mark.unit
@pytest.mark.asyncio
async def test_calc_add(executor):
    """Test calc.add sums its parameters."""
    assert await executor.execute("calc.add", {"a": 2, "b": 3}) == 5


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "tool_id,params,expected",
    [
        ("calc.subtract", {"a": 10, "b": 4}, 6),
        ("calc.multiply", {"a": "3", "b": 4}, 12),
        ("calc.divide", {"a": 9, "b": 3}, 3.0),
        ("calc.add", {"a": "1.5", "b": 1}, 2.5),
        ("calc.add", {}, 0),
    ],
)
async def test_calc_arithmetic(executor, tool_id, params, expected):
    """Test parameter arithmetic with loose numeric input."""
    assert await executor.execute(tool_id, params) == expected


@pytest.mark.unit
@pytest.mark.asyncio
async def test_calc_divide_by_zero_returns_error_marker(executor, state):
    """Test division by zero yields "Error" without failing the call."""
    assert await executor.execute("calc.divide", {"a": 1, "b": 0}) == "Error"
    assert state.get(ERROR_KEY) is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_append_digit_replaces_leading_zero(executor, state):
    """Test digits accumulate on the display."""
    await executor.execute("calc.append_digit", {"digit": "5"})
    assert state.get("display") == "5"

    await executor.execute("calc.append_digit", {"digit": "3"})
    assert state.get("display") == "53"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_clear_resets_display(executor, state):
    """Test calc.clear writes "0"."""
    state.set("display", "123")
    await executor.execute("calc.clear")
    assert state.get("display") == "0"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_evaluate_display(executor, state):
    """Test the display expression is evaluated in place."""
    state.set("display", "6×2−4")
    result = await executor.execute("calc.evaluate")

    assert result == 8
    assert state.get("display") == "8"


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "display",
    [
        "5/0",
        "2++",
        "os.system('x')",
        "(" * 2000 + "1" + ")" * 2000,
        "-" * 500 + "1",
        "9" * 3000 + "*" + "9" * 3000,
    ],
)
async def test_evaluate_invalid_display_shows_error(executor, state, display):
    """Test malformed or undefined expressions show "Error"."""
    state.set("display", display)
    result = await executor.execute("calc.evaluate")

    assert result == "Error"
    assert state.get("display") == "Error"
    assert state.get(ERROR_KEY) is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_add_todo(executor, state):
    """Test the task input is appended to todos and cleared."""
    state.set("task-input", "Buy milk")
    todos = await executor.execute("ui.add_todo")

    assert len(todos) == 1
    assert todos[0]["text"] == "Buy milk"
    assert todos[0]["done"] is False
    assert isinstance(todos[0]["id"], int)
    assert state.get("todos") == todos
    assert state.get("task-input") == ""


@pytest.mark.unit
@pytest.mark.asyncio
async def test_add_todo_ignores_blank_input(executor, state):
    """Test whitespace-only input leaves todos untouched."""
    state.set("task-input", "   ")
    await executor.execute("ui.add_todo")

    assert state.get("todos", []) == []
    assert state.get("task-input") == "   "


@pytest.mark.unit
@pytest.mark.asyncio
async def test_add_todo_does_not_mutate_previous_list(executor, state):
    """Test a fresh list is stored on every append."""
    original = [{"id": 1, "text": "first", "done": False}]
    state.set("todos", original)
    state.set("task-input", "second")

    await executor.execute("ui.add_todo")

    assert len(original) == 1
    assert [t["text"] for t in state.get("todos")] == ["first", "second"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_set_and_get_state(executor, state):
    """Test direct state access tools."""
    assert await executor.execute("ui.set_state", {"key": "theme", "value": "dark"}) == "dark"
    assert state.get("theme") == "dark"
    assert await executor.execute("ui.get_state", {"key": "theme"}) == "dark"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_system_alert_writes_alert_key(executor, state):
    """Test system.alert publishes its message for the presentation layer."""
    assert await executor.execute("system.alert", {"message": "Saved"}) is True
    assert state.get("alert") == "Saved"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unknown_tool_returns_none(executor, state):
    """Test unknown tools are logged, not failed."""
    assert await executor.execute("nonexistent.tool", {"x": 1}) is None
    assert state.get(ERROR_KEY) is None

    result = await executor.run("nonexistent.tool")
    assert is_successful(result)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failure_result_sets_error_key(executor, state):
    """Test a handler Failure surfaces through the error key."""
    assert await executor.execute("ui.set_state", {}) is None
    assert state.get(ERROR_KEY) == "Tool ui.set_state failed: ui.set_state requires 'key'"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_raising_handler_is_contained(executor, state):
    """Test exceptions never escape execute()."""

    def boom(params, context):
        raise RuntimeError("kaboom")

    executor.registry.register("custom.boom", boom)

    assert await executor.execute("custom.boom") is None
    assert state.get(ERROR_KEY) == "Tool custom.boom failed: kaboom"

    result = await executor.run("custom.boom")
    assert result == Failure("kaboom")


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("tool_id,params", [("calc.add", ["a", "b"]), ("calc.add", "abc"), (None, {}), (42, None)])
async def test_malformed_call_is_contained(executor, state, tool_id, params):
    """Test bad tool ids or params become failures, never exceptions."""
    result = await executor.run(tool_id, params)

    assert not is_successful(result)
    assert state.get(ERROR_KEY).startswith(f"Tool {tool_id} failed:")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_async_handler_is_awaited(executor):
    """Test coroutine handlers are awaited."""

    async def slow(params, context):
        return params["value"] * 2

    executor.registry.register("custom.slow", slow)
    assert await executor.execute("custom.slow", {"value": 21}) == 42


@pytest.mark.unit
@pytest.mark.asyncio
async def test_context_carries_application_id(executor):
    """Test handlers see the bound application id."""
    seen = []
    executor.registry.register("custom.whoami", lambda p, c: seen.append(c.application_id))

    executor.set_application_id("app-1")
    await executor.execute("custom.whoami")

    assert seen == ["app-1"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_params_are_copied(executor):
    """Test handlers cannot mutate the caller's params."""
    executor.registry.register("custom.mutate", lambda p, c: p.update(x=2))
    params = {"x": 1}

    await executor.execute("custom.mutate", params)

    assert params == {"x": 1}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_metrics_recorded(executor, metrics):
    """Test every call is counted by category and status."""
    await executor.execute("calc.add", {"a": 1, "b": 1})
    await executor.execute("ui.set_state", {})
    await executor.execute("weird.thing")

    sample = metrics.registry.get_sample_value
    assert sample("runtime_tool_executions_total", {"category": "calc", "status": "success"}) == 1
    assert sample("runtime_tool_executions_total", {"category": "ui", "status": "error"}) == 1
    assert sample("runtime_tool_executions_total", {"category": "other", "status": "unknown"}) == 1


@pytest.mark.unit
def test_executor_builds_default_registry(state):
    """Test an executor without a registry gets the built-in tools."""
    executor = ToolExecutor(state)

    assert "calc.add" in executor.registry
    assert "storage.get" in executor.registry


class TestToolRegistry:
    """Test tool registration and lookup."""

    @pytest.mark.unit
    def test_split_tool_id(self):
        assert split_tool_id("calc.add") == ("calc", "add")
        assert split_tool_id("storage.files.read") == ("storage", "files.read")
        assert split_tool_id("nodot") == ("nodot", "")

    @pytest.mark.unit
    @pytest.mark.parametrize("tool_id", ["nodot", ".action", "category."])
    def test_rejects_malformed_ids(self, tool_id):
        registry = ToolRegistry()
        with pytest.raises(ValueError):
            registry.register(tool_id, lambda p, c: None)

    @pytest.mark.unit
    def test_rejects_remote_categories(self):
        registry = ToolRegistry()
        with pytest.raises(ValueError, match="service gateway"):
            registry.register("storage.get", lambda p, c: None)

    @pytest.mark.unit
    def test_exact_match_beats_category_handler(self):
        registry = ToolRegistry()
        exact = lambda p, c: "exact"
        fallback = lambda p, c: "fallback"
        registry.register_category("custom", fallback)
        registry.register("custom.special", exact)

        assert registry.resolve("custom", "special") is exact
        assert registry.resolve("custom", "other") is fallback
        assert registry.resolve("missing", "x") is None

    @pytest.mark.unit
    def test_decorator_registration(self):
        registry = ToolRegistry()

        @registry.tool("custom.hello")
        def hello(params, context):
            return "hi"

        assert "custom.hello" in registry
        assert registry.list_tools("custom") == ["custom.hello"]
        assert registry.get_categories() == ["custom"]
