"""JSON-RPC envelopes and the error taxonomy."""

from switchboard.protocol.errors import (
    ErrorCode,
    ExpressionError,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    PromptNotFoundError,
    ResourceNotFoundError,
    RpcError,
    ToolNotFoundError,
)
from switchboard.protocol.models import JsonRpcError, JsonRpcRequest, JsonRpcResponse

__all__ = [
    "ErrorCode",
    "ExpressionError",
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MethodNotFoundError",
    "ParseError",
    "PromptNotFoundError",
    "ResourceNotFoundError",
    "RpcError",
    "ToolNotFoundError",
]
