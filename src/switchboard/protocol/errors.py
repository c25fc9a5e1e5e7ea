"""JSON-RPC error taxonomy.

Every failure the dispatcher can report is an :class:`RpcError` carrying the
JSON-RPC ``code`` it maps to.  Handler-level failures (unknown tool, bad
expression, ...) are :class:`InternalError` subclasses, so they all surface as
``-32603``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Reserved JSON-RPC 2.0 error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class RpcError(Exception):
    """Base error for every failure reported back to a JSON-RPC client."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None, data: Any = None) -> None:
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)


class ParseError(RpcError):
    """The message was not valid JSON."""

    code = ErrorCode.PARSE_ERROR
    default_message = "Parse error"


class InvalidRequestError(RpcError):
    """The JSON was valid but not a usable request envelope."""

    code = ErrorCode.INVALID_REQUEST
    default_message = "Invalid Request"


class MethodNotFoundError(RpcError):
    """No handler is registered for the requested method."""

    code = ErrorCode.METHOD_NOT_FOUND
    default_message = "Method not found"

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(data=method)


class InvalidParamsError(RpcError):
    """Required params are missing or have the wrong type."""

    code = ErrorCode.INVALID_PARAMS
    default_message = "Invalid params"


class InternalError(RpcError):
    """A handler failed while executing."""

    code = ErrorCode.INTERNAL_ERROR
    default_message = "Internal error"


class ToolNotFoundError(InternalError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}", data=name)


class ResourceNotFoundError(InternalError):
    """Requested resource URI does not exist in the registry."""

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(f"Resource not found: {uri}", data=uri)


class PromptNotFoundError(InternalError):
    """Requested prompt does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown prompt: {name}", data=name)


class ExpressionError(InternalError):
    """An arithmetic expression could not be evaluated."""

    def __init__(self, expression: str, detail: str = "") -> None:
        self.expression = expression
        self.detail = detail
        msg = f"Error calculating expression '{expression}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg, data=expression)
