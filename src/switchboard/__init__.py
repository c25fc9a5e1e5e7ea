"""Switchboard: a transport-agnostic MCP-style JSON-RPC server."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from switchboard.capabilities.registry import CapabilityRegistry as CapabilityRegistry
    from switchboard.server.dispatcher import Dispatcher as Dispatcher

_LAZY_EXPORTS = {
    "CapabilityRegistry": "switchboard.capabilities.registry",
    "Dispatcher": "switchboard.server.dispatcher",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'switchboard' has no attribute {name!r}")
