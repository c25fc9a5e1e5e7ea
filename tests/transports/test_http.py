"""Tests for the FastAPI application (HTTP, SSE route, REST facade)."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from switchboard.capabilities.registry import CapabilityRegistry
from switchboard.config.models import ServerSettings
from switchboard.server.dispatcher import Dispatcher
from switchboard.transports.http import create_app


@pytest.fixture
def client(settings: ServerSettings, registry: CapabilityRegistry) -> TestClient:
    return TestClient(create_app(settings, registry))


def _post(client: TestClient, body: str) -> Any:
    return client.post("/mcp", content=body, headers={"Content-Type": "application/json"})


class TestRpcEndpoint:
    def test_ping(self, client: TestClient) -> None:
        resp = _post(client, '{"jsonrpc": "2.0", "id": 1, "method": "ping"}')
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("application/json")
        body = resp.json()
        assert body["id"] == 1
        assert body["result"]["transport"] == "http"

    def test_tools_call(self, client: TestClient) -> None:
        payload = {
            "jsonrpc": "2.0",
            "id": "c1",
            "method": "tools/call",
            "params": {"name": "calculate", "arguments": {"expression": "12/4"}},
        }
        body = _post(client, json.dumps(payload)).json()
        assert body["id"] == "c1"
        assert body["result"]["content"][0]["text"] == "Result: 12/4 = 3"

    def test_notification_is_no_content(self, client: TestClient) -> None:
        resp = _post(client, '{"jsonrpc": "2.0", "method": "notifications/initialized"}')
        assert resp.status_code == 204
        assert resp.content == b""

    def test_parse_error(self, client: TestClient) -> None:
        resp = _post(client, "{broken")
        assert resp.status_code == 200
        assert resp.json()["error"]["code"] == -32700
        assert resp.json()["id"] is None

    def test_unknown_method(self, client: TestClient) -> None:
        resp = _post(client, '{"jsonrpc": "2.0", "id": 2, "method": "foo/bar"}')
        assert resp.json()["error"]["code"] == -32601

    def test_transport_fault_is_500(self, client: TestClient) -> None:
        with patch.object(Dispatcher, "handle_message", side_effect=RuntimeError("boom")):
            resp = _post(client, '{"jsonrpc": "2.0", "id": 1, "method": "ping"}')
        assert resp.status_code == 500
        body = resp.json()
        assert body["id"] is None
        assert body["error"] == {"code": -32603, "message": "Internal error", "data": "boom"}

    def test_cors(self, client: TestClient) -> None:
        resp = client.post(
            "/mcp",
            content='{"jsonrpc": "2.0", "id": 1, "method": "ping"}',
            headers={"Origin": "http://example.com"},
        )
        assert resp.headers["access-control-allow-origin"] == "*"


class TestRestFacade:
    def test_info(self, client: TestClient) -> None:
        assert client.get("/api/mcp/info").json() == {
            "name": "Switchboard MCP Server",
            "version": "1.0.0",
            "protocolVersion": "2024-11-05",
        }

    def test_tools(self, client: TestClient) -> None:
        tools = client.get("/api/mcp/tools").json()
        assert [t["name"] for t in tools] == ["echo", "timestamp", "weather", "calculate"]

    def test_call_tool(self, client: TestClient) -> None:
        resp = client.post("/api/mcp/tools/echo", json={"text": "hi"})
        assert resp.status_code == 200
        assert resp.json() == {"content": [{"type": "text", "text": "Echo: hi"}]}

    def test_call_tool_without_body(self, client: TestClient) -> None:
        resp = client.post("/api/mcp/tools/echo")
        assert resp.json()["content"][0]["text"] == "Echo: No text provided"

    def test_unknown_tool(self, client: TestClient) -> None:
        resp = client.post("/api/mcp/tools/nope", json={})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Unknown tool: nope"}

    def test_tool_error(self, client: TestClient) -> None:
        resp = client.post("/api/mcp/tools/calculate", json={"expression": "a+b"})
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("Error calculating expression 'a+b'")

    def test_invalid_json_body(self, client: TestClient) -> None:
        resp = client.post("/api/mcp/tools/echo", content="{nope")
        assert resp.status_code == 400


class TestSseRoute:
    def test_stream_headers_and_frames(self, client: TestClient) -> None:
        async def _finite(dispatcher: Dispatcher, is_disconnected: Any) -> AsyncIterator[str]:
            assert dispatcher.transport == "sse"
            yield "event: connected\ndata: {}\n\n"

        with patch("switchboard.transports.http.event_stream", _finite):
            resp = client.get("/mcp/sse")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/event-stream")
        assert resp.headers["cache-control"] == "no-cache"
        assert resp.text == "event: connected\ndata: {}\n\n"
