"""FastAPI application: JSON-RPC over HTTP plus the SSE and WebSocket routes.

Routes
------
``POST /mcp``
    One JSON-RPC message per request body.  Notifications get ``204``.
``GET /mcp/sse``
    Informational event stream (see :mod:`switchboard.transports.sse`).
``WS /mcp/ws``
    JSON-RPC over WebSocket (see :mod:`switchboard.transports.websocket`).
``/api/mcp/...``
    A small REST facade over the tool registry.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import uvicorn
from fastapi import FastAPI, Request, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response, StreamingResponse

from switchboard.capabilities.arguments import Arguments
from switchboard.capabilities.registry import CapabilityRegistry
from switchboard.config.models import ServerSettings
from switchboard.protocol.errors import InternalError, RpcError
from switchboard.protocol.models import JsonRpcResponse, to_wire
from switchboard.server.dispatcher import Dispatcher
from switchboard.transports.sse import SSE_HEADERS, event_stream
from switchboard.transports.websocket import serve_websocket

logger = logging.getLogger(__name__)


def create_app(
    settings: ServerSettings | None = None,
    registry: CapabilityRegistry | None = None,
) -> FastAPI:
    """Build the HTTP application around one shared registry."""
    settings = settings or ServerSettings()
    registry = registry or CapabilityRegistry.default(settings)
    dispatcher = Dispatcher(registry, settings, transport="http")
    sse_dispatcher = dispatcher.for_transport("sse")
    ws_dispatcher = dispatcher.for_transport("websocket")

    app = FastAPI(title=settings.name, version=settings.version)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.dispatcher = dispatcher

    # -- JSON-RPC ------------------------------------------------------------

    @app.post("/mcp")
    async def rpc_endpoint(request: Request) -> Response:
        body = await request.body()
        try:
            reply = dispatcher.handle_message(body)
        except Exception as exc:
            logger.exception("HTTP request handling failed")
            envelope = JsonRpcResponse.failure(None, InternalError(data=str(exc)))
            return JSONResponse(envelope.to_wire(), status_code=500)
        if reply is None:
            return Response(status_code=204)
        return Response(content=reply, media_type="application/json")

    @app.get("/mcp/sse")
    async def sse_endpoint(request: Request) -> StreamingResponse:
        logger.info("SSE client connected")
        return StreamingResponse(
            event_stream(sse_dispatcher, request.is_disconnected),
            media_type="text/event-stream",
            headers=SSE_HEADERS,
        )

    @app.websocket("/mcp/ws")
    async def ws_endpoint(websocket: WebSocket) -> None:
        await serve_websocket(websocket, ws_dispatcher)

    # -- REST facade ---------------------------------------------------------

    @app.get("/api/mcp/info")
    async def server_info() -> dict[str, Any]:
        return {
            "name": settings.name,
            "version": settings.version,
            "protocolVersion": settings.protocol_version,
        }

    @app.get("/api/mcp/tools")
    async def list_tools() -> list[dict[str, Any]]:
        return [to_wire(d) for d in registry.list_tools()]

    @app.post("/api/mcp/tools/{name}")
    async def call_tool(name: str, request: Request) -> JSONResponse:
        body = await request.body()
        try:
            raw = json.loads(body) if body.strip() else None
        except ValueError:
            return JSONResponse({"error": "Request body must be valid JSON"}, status_code=400)
        try:
            chunks = registry.call_tool(name, Arguments.from_params(raw))
        except RpcError as exc:
            return JSONResponse({"error": exc.message}, status_code=400)
        return JSONResponse({"content": [to_wire(chunk) for chunk in chunks]})

    return app


def run_http(
    settings: ServerSettings,
    registry: CapabilityRegistry | None = None,
    *,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Serve :func:`create_app` with uvicorn until interrupted."""
    app = create_app(settings, registry)
    bind_host = host or settings.host
    bind_port = port or settings.port
    logger.info("%s v%s listening on http://%s:%d", settings.name, settings.version, bind_host, bind_port)
    uvicorn.run(app, host=bind_host, port=bind_port, log_level=settings.log_level.lower())
