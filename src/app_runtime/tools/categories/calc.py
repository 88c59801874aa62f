"""
Calculator Tools
Arithmetic on parameters and on the shared ``display`` value.
"""

from typing import TYPE_CHECKING, Any

from ..arithmetic import ExpressionError, evaluate, format_number

if TYPE_CHECKING:
    from ..registry import ToolContext, ToolRegistry

DISPLAY_KEY = "display"


def _number(value: Any) -> int | float:
    """Coerce a loosely typed parameter to a number (missing -> 0)."""
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return float(value)
    raise TypeError(f"Expected a number, got {type(value).__name__}")


def add(params: dict[str, Any], context: "ToolContext") -> Any:
    return _number(params.get("a")) + _number(params.get("b"))


def subtract(params: dict[str, Any], context: "ToolContext") -> Any:
    return _number(params.get("a")) - _number(params.get("b"))


def multiply(params: dict[str, Any], context: "ToolContext") -> Any:
    return _number(params.get("a")) * _number(params.get("b"))


def divide(params: dict[str, Any], context: "ToolContext") -> Any:
    divisor = _number(params.get("b"))
    if divisor == 0:
        return "Error"
    return _number(params.get("a")) / divisor


def append_digit(params: dict[str, Any], context: "ToolContext") -> str:
    current = str(context.state.get(DISPLAY_KEY, "0"))
    digit = params.get("digit")
    digit = "" if digit is None else str(digit)

    value = digit if current == "0" else current + digit
    context.state.set(DISPLAY_KEY, value)
    return value


def clear(params: dict[str, Any], context: "ToolContext") -> str:
    context.state.set(DISPLAY_KEY, "0")
    return "0"


def evaluate_display(params: dict[str, Any], context: "ToolContext") -> Any:
    """Evaluate the display; any parse or arithmetic problem shows "Error"."""
    expression = str(context.state.get(DISPLAY_KEY, "0"))
    try:
        result = evaluate(expression)
        rendered = format_number(result)
    except (ExpressionError, ZeroDivisionError, OverflowError, ValueError, RecursionError):
        context.state.set(DISPLAY_KEY, "Error")
        return "Error"

    context.state.set(DISPLAY_KEY, rendered)
    return result


def register_calc_tools(registry: "ToolRegistry") -> None:
    """Register calculator tools."""
    registry.register("calc.add", add)
    registry.register("calc.subtract", subtract)
    registry.register("calc.multiply", multiply)
    registry.register("calc.divide", divide)
    registry.register("calc.append_digit", append_digit)
    registry.register("calc.clear", clear)
    registry.register("calc.evaluate", evaluate_display)
