"""JSON-RPC over a WebSocket (``/mcp/ws``).

Each inbound text frame is one message; each non-null dispatcher result is
sent back as one text frame.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastapi.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from switchboard.capabilities.tools import format_timestamp
from switchboard.protocol.errors import InternalError
from switchboard.protocol.models import JsonRpcResponse

if TYPE_CHECKING:
    from switchboard.server.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


def welcome_frame() -> str:
    return json.dumps(
        {
            "type": "connected",
            "message": "MCP WebSocket Server connected",
            "timestamp": format_timestamp(),
        }
    )


async def serve_websocket(websocket: WebSocket, dispatcher: Dispatcher) -> int:
    """Run the receive/dispatch/send loop for one connection.

    Returns the number of responses sent.  A client close ends the loop
    normally; any other failure sends one ``-32603`` envelope (if the socket
    is still open) and closes the connection.
    """
    await websocket.accept()
    await websocket.send_text(welcome_frame())
    logger.info("WebSocket client connected")

    sent = 0
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            text = message.get("text")
            if text is None:
                logger.debug("Ignoring non-text WebSocket frame")
                continue
            reply = dispatcher.handle_message(text)
            if reply is not None:
                await websocket.send_text(reply)
                sent += 1
    except WebSocketDisconnect:
        pass
    except Exception as exc:
        logger.exception("WebSocket connection failed")
        await _send_fault(websocket, exc)
    logger.info("WebSocket client disconnected after %d responses", sent)
    return sent


async def _send_fault(websocket: WebSocket, exc: Exception) -> None:
    if websocket.application_state != WebSocketState.CONNECTED:
        return
    envelope = JsonRpcResponse.failure(None, InternalError(data=str(exc)))
    try:
        await websocket.send_text(envelope.to_json())
        await websocket.close(code=1011)
    except (RuntimeError, WebSocketDisconnect) as send_exc:
        logger.debug("Could not deliver fault envelope: %s", send_exc)
