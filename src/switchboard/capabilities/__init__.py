"""The built-in tools, resources and prompts, and the registry holding them."""

from switchboard.capabilities.arguments import Arguments
from switchboard.capabilities.prompts import Prompt
from switchboard.capabilities.registry import CapabilityRegistry, DuplicateCapabilityError
from switchboard.capabilities.resources import Resource
from switchboard.capabilities.tools import Tool, WeatherSimulator, evaluate_expression

__all__ = [
    "Arguments",
    "CapabilityRegistry",
    "DuplicateCapabilityError",
    "Prompt",
    "Resource",
    "Tool",
    "WeatherSimulator",
    "evaluate_expression",
]
