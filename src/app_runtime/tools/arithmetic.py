"""
Restricted arithmetic evaluation for calculator displays.

Grammar (numbers, + - * /, parentheses, unary sign):

    expr   := term (("+" | "-") term)*
    term   := factor (("*" | "/") factor)*
    factor := ("+" | "-") factor | NUMBER | "(" expr ")"
"""

import math
import re

# Display glyphs mapped to ASCII operators
GLYPHS = {"×": "*", "÷": "/", "−": "-"}

# Longer or deeper input is rejected with ExpressionError
MAX_EXPRESSION_LENGTH = 1000
MAX_NESTING = 100

_TOKEN = re.compile(r"\s*(?:(\d+\.?\d*|\.\d+)|(.))")

Number = int | float


class ExpressionError(ValueError):
    """Expression is not valid arithmetic."""

    pass


def normalize_expression(text: str) -> str:
    """Replace display glyphs with ASCII operators."""
    for glyph, ascii_op in GLYPHS.items():
        text = text.replace(glyph, ascii_op)
    return text


def _tokenize(text: str) -> list[str]:
    if len(text) > MAX_EXPRESSION_LENGTH:
        raise ExpressionError(f"Expression longer than {MAX_EXPRESSION_LENGTH} characters")
    tokens = []
    position = 0
    stripped = text.rstrip()
    while position < len(stripped):
        match = _TOKEN.match(stripped, position)
        if match is None:
            raise ExpressionError(f"Unexpected input at {position}")
        number, symbol = match.groups()
        if number is not None:
            tokens.append(number)
        elif symbol in "+-*/()":
            tokens.append(symbol)
        else:
            raise ExpressionError(f"Unexpected character {symbol!r}")
        position = match.end()
    return tokens


class _Parser:
    def __init__(self, tokens: list[str]) -> None:
        self.tokens = tokens
        self.index = 0
        self.depth = 0

    def peek(self) -> str | None:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def take(self) -> str:
        token = self.peek()
        if token is None:
            raise ExpressionError("Unexpected end of expression")
        self.index += 1
        return token

    def expr(self) -> Number:
        value = self.term()
        while self.peek() in ("+", "-"):
            if self.take() == "+":
                value = value + self.term()
            else:
                value = value - self.term()
        return value

    def term(self) -> Number:
        value = self.factor()
        while self.peek() in ("*", "/"):
            if self.take() == "*":
                value = value * self.factor()
            else:
                divisor = self.factor()
                if divisor == 0:
                    raise ZeroDivisionError("division by zero")
                value = value / divisor
        return value

    def factor(self) -> Number:
        token = self.take()
        if token in "+-(":
            self.depth += 1
            if self.depth > MAX_NESTING:
                raise ExpressionError(f"Nesting deeper than {MAX_NESTING}")
            try:
                return self._nested(token)
            finally:
                self.depth -= 1
        if token in "*/)":
            raise ExpressionError(f"Unexpected operator {token!r}")
        return float(token) if "." in token else int(token)

    def _nested(self, token: str) -> Number:
        if token == "+":
            return self.factor()
        if token == "-":
            return -self.factor()
        value = self.expr()
        if self.take() != ")":
            raise ExpressionError("Expected ')'")
        return value


def evaluate(expression: str) -> Number:
    """
    Evaluate an arithmetic expression.

    Raises:
        ExpressionError: Malformed expression
        ZeroDivisionError: Division by zero
    """
    tokens = _tokenize(normalize_expression(expression))
    if not tokens:
        raise ExpressionError("Empty expression")

    parser = _Parser(tokens)
    value = parser.expr()
    if parser.peek() is not None:
        raise ExpressionError(f"Unexpected token {parser.peek()!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ExpressionError("Result is not finite")
    return value


def format_number(value: Number) -> str:
    """Render a result the way a calculator display shows it (2.0 -> "2")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
