"""Server-Sent-Events stream for ``GET /mcp/sse``.

The stream is informational only: it announces the server, lists the tools,
then emits heartbeats until the client goes away.  Requests still travel
over ``POST /mcp``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TYPE_CHECKING, Any

from switchboard.capabilities.tools import format_timestamp

if TYPE_CHECKING:
    from switchboard.server.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

IsDisconnected = Callable[[], Awaitable[bool]]

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


def format_event(event: str, data: dict[str, Any]) -> str:
    """Render one SSE frame: an ``event:`` line, a ``data:`` line, a blank line."""
    return f"event: {event}\ndata: {json.dumps(data, ensure_ascii=False)}\n\n"


def format_uptime(seconds: float) -> str:
    """Render elapsed *seconds* as ``HH:MM:SS``."""
    total = max(int(seconds), 0)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


async def event_stream(
    dispatcher: Dispatcher,
    is_disconnected: IsDisconnected,
    *,
    interval: float | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> AsyncIterator[str]:
    """Yield the ``connected`` and ``capabilities`` frames, then heartbeats.

    *interval* defaults to the dispatcher's ``heartbeat_interval`` setting.
    The generator returns once *is_disconnected* reports ``True``.
    """
    settings = dispatcher.settings
    period = settings.heartbeat_interval if interval is None else interval

    yield format_event(
        "connected",
        {
            "type": "connected",
            "message": "MCP SSE Server connected",
            "timestamp": format_timestamp(),
        },
    )
    yield format_event(
        "capabilities",
        {
            "type": "capabilities",
            "protocolVersion": settings.protocol_version,
            "serverInfo": {"name": settings.name, "version": settings.version},
            "availableTools": dispatcher.registry.tool_names,
            "note": "Use POST /mcp for tool execution",
            "timestamp": format_timestamp(),
        },
    )

    started = clock()
    while True:
        await asyncio.sleep(period)
        if await is_disconnected():
            logger.debug("SSE client disconnected")
            return
        yield format_event(
            "heartbeat",
            {
                "type": "heartbeat",
                "timestamp": format_timestamp(),
                "uptime": format_uptime(clock() - started),
            },
        )
