"""Built-in tool executors: echo, timestamp, weather (simulated), calculate.

Each executor takes :class:`Arguments` and returns an ordered list of
:class:`TextContent` chunks, raising an :class:`RpcError` subclass on failure.
"""

from __future__ import annotations

import math
import random
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from switchboard.capabilities.arguments import Arguments
from switchboard.protocol.errors import ExpressionError
from switchboard.protocol.models import TextContent, ToolDescriptor

ToolExecutor = Callable[[Arguments], list[TextContent]]

WEATHER_CONDITIONS = ("Sunny", "Cloudy", "Rainy", "Snowy")

# Checked in this order; the first operator present wins.
_OPERATORS = ("+", "-", "*", "/")

# Plain decimal literal: no digit separators, no inf or nan spellings.
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class Tool:
    """A tool descriptor paired with the function that executes it."""

    descriptor: ToolDescriptor
    executor: ToolExecutor

    @property
    def name(self) -> str:
        return self.descriptor.name

    def run(self, arguments: Arguments) -> list[TextContent]:
        return self.executor(arguments)


def format_timestamp(moment: datetime | None = None) -> str:
    """Format *moment* (default: now) as ``YYYY-MM-DDTHH:mm:ss.sssZ`` in UTC."""
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


# ---------------------------------------------------------------------------
# echo / timestamp
# ---------------------------------------------------------------------------


def echo(arguments: Arguments) -> list[TextContent]:
    text = arguments.get_str("text", "No text provided")
    return [TextContent(text=f"Echo: {text}")]


def timestamp(arguments: Arguments) -> list[TextContent]:
    return [TextContent(text=f"Current UTC timestamp: {format_timestamp()}")]


# ---------------------------------------------------------------------------
# calculate
# ---------------------------------------------------------------------------


def evaluate_expression(expression: str) -> float:
    """Evaluate a two-operand expression such as ``"12 / 4"``.

    Supports exactly one of ``+ - * /`` with no precedence or parentheses.
    The operator is chosen by checking ``+``, ``-``, ``*``, ``/`` in order and
    the text is split on its first occurrence; a string with no operator is
    parsed as a bare number.  Division by zero yields ``inf``/``nan`` rather
    than raising.

    Raises:
        ExpressionError: If either operand is not a valid number.
    """
    compact = expression.replace(" ", "")
    for operator in _OPERATORS:
        if operator in compact:
            left_text, right_text = compact.split(operator, 1)
            left = _parse_operand(expression, left_text)
            right = _parse_operand(expression, right_text)
            return _apply(operator, left, right)
    return _parse_operand(expression, compact)


def _parse_operand(expression: str, text: str) -> float:
    if _NUMBER.fullmatch(text) is None:
        raise ExpressionError(expression, f"'{text}' is not a valid number")
    return float(text)


def _apply(operator: str, left: float, right: float) -> float:
    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    return _ieee_divide(left, right)


def _ieee_divide(left: float, right: float) -> float:
    if right != 0.0:
        return left / right
    if left == 0.0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


def format_number(value: float) -> str:
    """Render integral finite values without a fractional part."""
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def calculate(arguments: Arguments) -> list[TextContent]:
    expression = arguments.get_str("expression", "0")
    value = evaluate_expression(expression)
    return [TextContent(text=f"Result: {expression} = {format_number(value)}")]


# ---------------------------------------------------------------------------
# weather (simulated)
# ---------------------------------------------------------------------------


class WeatherSimulator:
    """Produces fake weather reports from an injected random source.

    No external service is contacted: every value is drawn from *rng*, so the
    shape of a report is fixed while its values are not.  Pass a seeded
    :class:`random.Random` to make reports reproducible.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def __call__(self, arguments: Arguments) -> list[TextContent]:
        location = arguments.get_str("location", "Unknown location")
        detailed = arguments.get_bool("detailed", False)

        temperature = self._rng.randrange(-10, 35)
        condition = self._rng.choice(WEATHER_CONDITIONS)
        humidity = self._rng.randrange(30, 90)

        if not detailed:
            return [
                TextContent(
                    text=(
                        f"Weather in {location} (simulated): {temperature}°C, "
                        f"{condition}, {humidity}% humidity"
                    )
                )
            ]

        wind_speed = self._rng.randrange(5, 25)
        pressure = self._rng.randrange(980, 1030)
        return [
            TextContent(text=f"Weather Report for {location} (simulated):\n"),
            TextContent(text=f"Temperature: {temperature}°C\nCondition: {condition}\n"),
            TextContent(
                text=(
                    f"Humidity: {humidity}%\n"
                    f"Wind Speed: {wind_speed} km/h\n"
                    f"Pressure: {pressure} hPa"
                )
            ),
        ]


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


def builtin_tools(rng: random.Random | None = None) -> list[Tool]:
    """Return the built-in tool set, with *rng* feeding the weather stub."""
    return [
        Tool(
            ToolDescriptor(
                name="echo",
                description="Echo back the input text",
                input_schema={
                    "type": "object",
                    "properties": {
                        "text": {"type": "string", "description": "Text to echo back"},
                    },
                    "required": ["text"],
                },
            ),
            echo,
        ),
        Tool(
            ToolDescriptor(
                name="timestamp",
                description="Get the current UTC timestamp",
                input_schema={"type": "object", "properties": {}},
            ),
            timestamp,
        ),
        Tool(
            ToolDescriptor(
                name="weather",
                description=(
                    "Get simulated weather information for a location. "
                    "Values are randomly generated; no real weather service is queried."
                ),
                input_schema={
                    "type": "object",
                    "properties": {
                        "location": {
                            "type": "string",
                            "description": "Location to get weather for",
                        },
                        "detailed": {
                            "type": "boolean",
                            "description": "Include wind speed and pressure, split into three chunks",
                        },
                    },
                    "required": ["location"],
                },
            ),
            WeatherSimulator(rng),
        ),
        Tool(
            ToolDescriptor(
                name="calculate",
                description="Perform basic two-operand arithmetic (+, -, *, /)",
                input_schema={
                    "type": "object",
                    "properties": {
                        "expression": {
                            "type": "string",
                            "description": "Expression with a single operator (e.g. '12 / 4')",
                        },
                    },
                    "required": ["expression"],
                },
            ),
            calculate,
        ),
    ]
