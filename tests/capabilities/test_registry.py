"""Tests for CapabilityRegistry."""

from __future__ import annotations

import random

import pytest

from switchboard.capabilities.arguments import Arguments
from switchboard.capabilities.registry import CapabilityRegistry, DuplicateCapabilityError
from switchboard.capabilities.tools import Tool, echo
from switchboard.config.models import ServerSettings
from switchboard.protocol.errors import (
    PromptNotFoundError,
    ResourceNotFoundError,
    ToolNotFoundError,
)
from switchboard.protocol.models import ToolDescriptor


class TestDefaultRegistry:
    def test_tools(self, registry: CapabilityRegistry) -> None:
        assert registry.tool_names == ["echo", "timestamp", "weather", "calculate"]
        assert [d.name for d in registry.list_tools()] == registry.tool_names

    def test_resources(self, registry: CapabilityRegistry) -> None:
        uris = [d.uri for d in registry.list_resources()]
        assert uris == ["file:///readme.txt", "file:///config.json"]

    def test_prompts(self, registry: CapabilityRegistry) -> None:
        assert [d.name for d in registry.list_prompts()] == ["greeting", "code_review"]

    def test_listing_is_stable(self, registry: CapabilityRegistry) -> None:
        assert registry.list_tools() == registry.list_tools()
        assert registry.list_resources() == registry.list_resources()
        assert registry.list_prompts() == registry.list_prompts()

    def test_call_tool(self, registry: CapabilityRegistry) -> None:
        [chunk] = registry.call_tool("echo", Arguments({"text": "hi"}))
        assert chunk.text == "Echo: hi"

    def test_call_unknown_tool(self, registry: CapabilityRegistry) -> None:
        with pytest.raises(ToolNotFoundError, match="Unknown tool: nope"):
            registry.call_tool("nope", Arguments())

    def test_read_resource(self, registry: CapabilityRegistry) -> None:
        [contents] = registry.read_resource("file:///readme.txt")
        assert "- weather" in contents.text

    def test_read_unknown_resource(self, registry: CapabilityRegistry) -> None:
        with pytest.raises(ResourceNotFoundError, match="file:///missing"):
            registry.read_resource("file:///missing")

    def test_get_prompt(self, registry: CapabilityRegistry) -> None:
        result = registry.get_prompt("greeting", Arguments({"name": "Bo"}))
        assert result.messages[0].content.text.startswith("Hello Bo!")

    def test_get_unknown_prompt(self, registry: CapabilityRegistry) -> None:
        with pytest.raises(PromptNotFoundError, match="Unknown prompt: nope"):
            registry.get_prompt("nope", Arguments())

    def test_weather_seed_is_reproducible(self) -> None:
        settings = ServerSettings(weather_seed=3)
        args = Arguments({"location": "Lima"})
        first = CapabilityRegistry.default(settings).call_tool("weather", args)
        second = CapabilityRegistry.default(settings).call_tool("weather", args)
        assert first == second

    def test_injected_rng(self) -> None:
        settings = ServerSettings()
        args = Arguments({"location": "Lima"})
        first = CapabilityRegistry.default(settings, rng=random.Random(9)).call_tool("weather", args)
        second = CapabilityRegistry.default(settings, rng=random.Random(9)).call_tool("weather", args)
        assert first == second


class TestCustomRegistry:
    def test_empty(self) -> None:
        registry = CapabilityRegistry()
        assert registry.list_tools() == []
        assert registry.list_resources() == []
        assert registry.list_prompts() == []

    def test_duplicate_tool_rejected(self) -> None:
        tool = Tool(ToolDescriptor(name="echo"), echo)
        with pytest.raises(DuplicateCapabilityError, match="Duplicate tool: echo"):
            CapabilityRegistry(tools=[tool, tool])
