"""Protocol models — JSON-RPC 2.0 envelopes and MCP capability payloads.

Implements the message format exchanged by every transport: request and
response envelopes, plus the descriptor and content shapes returned by
``tools/*``, ``resources/*`` and ``prompts/*``.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from switchboard.protocol.errors import RpcError

RequestId = int | str | None

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request or notification.

    Validation is strict so that e.g. ``"id": true`` or ``"method": 5`` are
    rejected instead of coerced.
    """

    model_config = ConfigDict(strict=True)

    jsonrpc: str = "2.0"
    method: str
    id: RequestId = None
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        """``True`` when the envelope carried no ``id`` member at all."""
        return "id" not in self.model_fields_set

    @property
    def arguments(self) -> dict[str, Any]:
        return self.params or {}


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None

    @classmethod
    def from_exception(cls, exc: RpcError) -> JsonRpcError:
        return cls(code=int(exc.code), message=exc.message, data=exc.data)


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Exactly one of ``result`` and ``error`` is set.
    """

    jsonrpc: str = "2.0"
    id: RequestId = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> JsonRpcResponse:
        if (self.result is None) == (self.error is None):
            msg = "response must carry exactly one of 'result' or 'error'"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, request_id: RequestId, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId, exc: RpcError) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError.from_exception(exc))

    def to_wire(self) -> dict[str, Any]:
        """Dump to the wire shape: ``id`` always present, only one outcome key."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.model_dump(exclude_none=True)
        else:
            data["result"] = self.result
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_wire(), ensure_ascii=False)


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    """A single text chunk of a tool or prompt result."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        alias="inputSchema",
    )


class ResourceDescriptor(BaseModel):
    """A resource definition as returned by ``resources/list``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    uri: str
    name: str
    description: str = ""
    mime_type: str = Field(default="text/plain", alias="mimeType")


class ResourceContents(BaseModel):
    """Inline contents returned by ``resources/read``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    uri: str
    mime_type: str = Field(default="text/plain", alias="mimeType")
    text: str


class PromptArgument(BaseModel):
    """One declared argument of a prompt template."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    required: bool = False


class PromptDescriptor(BaseModel):
    """A prompt definition as returned by ``prompts/list``."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    arguments: tuple[PromptArgument, ...] = ()


class PromptMessage(BaseModel):
    """A role-tagged message produced by rendering a prompt."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"] = "user"
    content: TextContent


class PromptResult(BaseModel):
    """The rendered prompt returned by ``prompts/get``."""

    description: str
    messages: list[PromptMessage]


def to_wire(model: BaseModel) -> dict[str, Any]:
    """Dump a payload model using its wire (camelCase) field names."""
    return model.model_dump(by_alias=True, mode="json")
