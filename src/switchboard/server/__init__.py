"""The JSON-RPC dispatcher shared by every transport."""

from switchboard.server.dispatcher import NOTIFICATION_METHODS, Dispatcher

__all__ = [
    "NOTIFICATION_METHODS",
    "Dispatcher",
]
