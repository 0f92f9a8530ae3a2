"""
General-purpose assistant tools: weather, arithmetic and jokes.

Each tool reports what it is doing through the custom stream before
answering.
"""

import ast
import operator
from typing import Annotated, Union

from pydantic import Field

from ..core.errors import ToolValidationError
from ..core.tool_registry import ToolRegistryMixin
from .progress import report_progress

_BINARY_OPERATORS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}
_UNARY_OPERATORS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}
MAX_EXPONENT = 100


def evaluate_arithmetic(expression: str) -> Union[int, float]:
    """
    Evaluate a plain arithmetic expression without ``eval``.

    Only numbers, parentheses and ``+ - * / // % **`` are accepted.

    Raises:
        ValueError: If the expression contains anything else or cannot be computed
    """
    try:
        tree = ast.parse(expression, mode="eval")
    except SyntaxError as e:
        raise ValueError(f"Malformed expression: {expression}") from e

    def _eval(node):
        if isinstance(node, ast.Expression):
            return _eval(node.body)
        if isinstance(node, ast.Constant) and type(node.value) in (int, float):
            return node.value
        if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPERATORS:
            left, right = _eval(node.left), _eval(node.right)
            if isinstance(node.op, ast.Pow) and abs(right) > MAX_EXPONENT:
                raise ValueError("Exponent too large")
            return _BINARY_OPERATORS[type(node.op)](left, right)
        if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPERATORS:
            return _UNARY_OPERATORS[type(node.op)](_eval(node.operand))
        raise ValueError(f"Unsupported element in expression: {ast.dump(node)}")

    try:
        return _eval(tree)
    except ZeroDivisionError as e:
        raise ValueError("Division by zero") from e


class AssistantTools(ToolRegistryMixin):
    """Weather, calculator and joke tools for the streaming demo."""

    def __init__(self):
        ToolRegistryMixin.__init__(self)

    @ToolRegistryMixin.tool(name="getWeather")
    def get_weather(
        self,
        city: Annotated[str, Field(description="The city to get the weather for")]
    ) -> str:
        """Get weather for a given city."""
        report_progress(f"Fetching weather for {city}...")
        return f"The weather in {city} is sunny and 72°F!"

    @ToolRegistryMixin.tool(name="calculator")
    def calculate(
        self,
        expression: Annotated[str, Field(description="The mathematical expression to calculate")]
    ) -> str:
        """Perform basic math calculations."""
        report_progress(f"Calculating {expression}...")
        try:
            result = evaluate_arithmetic(expression)
        except ValueError as e:
            raise ToolValidationError(f"Error calculating {expression}: {e}") from e
        return f"The result of {expression} is {result}"

    @ToolRegistryMixin.tool(name="tellJoke")
    def tell_joke(
        self,
        topic: Annotated[str, Field(description="The topic for the joke")]
    ) -> str:
        """Tell a joke about a given topic."""
        report_progress(f"Thinking of a joke about {topic}...")
        return f"Why did the {topic} go to the doctor? Because it wasn't feeling well!"
