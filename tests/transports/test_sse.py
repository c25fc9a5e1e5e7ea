"""Tests for the Server-Sent-Events stream."""

from __future__ import annotations

import json
from typing import Any

from switchboard.server.dispatcher import Dispatcher
from switchboard.transports.sse import event_stream, format_event, format_uptime


def _parse(frame: str) -> tuple[str, dict[str, Any]]:
    event_line, data_line, *_ = frame.split("\n")
    assert event_line.startswith("event: ")
    assert data_line.startswith("data: ")
    return event_line[len("event: ") :], json.loads(data_line[len("data: ") :])


def _disconnect_after(checks: int) -> Any:
    calls = 0

    async def is_disconnected() -> bool:
        nonlocal calls
        calls += 1
        return calls > checks

    return is_disconnected


class TestFormatting:
    def test_format_event(self) -> None:
        assert format_event("heartbeat", {"a": 1}) == 'event: heartbeat\ndata: {"a": 1}\n\n'

    def test_format_uptime(self) -> None:
        assert format_uptime(0) == "00:00:00"
        assert format_uptime(3725.9) == "01:02:05"
        assert format_uptime(90061) == "25:01:01"


class TestEventStream:
    async def test_connected_then_capabilities(self, dispatcher: Dispatcher) -> None:
        frames = [f async for f in event_stream(dispatcher, _disconnect_after(0), interval=0)]
        assert len(frames) == 2

        event, data = _parse(frames[0])
        assert event == "connected"
        assert data["type"] == "connected"
        assert data["message"] == "MCP SSE Server connected"

        event, data = _parse(frames[1])
        assert event == "capabilities"
        assert data["protocolVersion"] == "2024-11-05"
        assert data["serverInfo"] == {"name": "Switchboard MCP Server", "version": "1.0.0"}
        assert data["availableTools"] == ["echo", "timestamp", "weather", "calculate"]
        assert data["note"] == "Use POST /mcp for tool execution"

    async def test_heartbeats_until_disconnect(self, dispatcher: Dispatcher) -> None:
        ticks = iter([0.0, 1.0, 3725.0])
        frames = [
            f
            async for f in event_stream(
                dispatcher,
                _disconnect_after(2),
                interval=0,
                clock=lambda: next(ticks),
            )
        ]
        heartbeats = [_parse(f) for f in frames[2:]]
        assert [event for event, _ in heartbeats] == ["heartbeat", "heartbeat"]
        assert heartbeats[0][1]["uptime"] == "00:00:01"
        assert heartbeats[1][1]["uptime"] == "01:02:05"
        assert heartbeats[1][1]["timestamp"].endswith("Z")

    async def test_interval_defaults_to_settings(self, dispatcher: Dispatcher) -> None:
        # the fixture settings use a 10ms heartbeat
        frames = [f async for f in event_stream(dispatcher, _disconnect_after(1))]
        assert len(frames) == 3
