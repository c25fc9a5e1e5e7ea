"""Transport adapters for stdio, HTTP, Server-Sent-Events and WebSocket.

Each adapter is a thin shell around one :class:`~switchboard.server.Dispatcher`:
it moves raw text in and out and never interprets JSON-RPC itself.
"""

from switchboard.transports.stdio import StdioServer

__all__ = [
    "StdioServer",
]
