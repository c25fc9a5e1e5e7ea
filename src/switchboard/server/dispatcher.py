"""Dispatcher — turns one JSON-RPC message into one response (or none).

The dispatcher is the only component with a method table.  Transports hand
it raw text via :meth:`Dispatcher.handle_message` and write back whatever it
returns; ``None`` means "write nothing" (a notification).

It holds no mutable state: the registry and settings are read-only, so any
number of transports may call it concurrently.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from switchboard.capabilities.arguments import Arguments
from switchboard.capabilities.tools import format_timestamp
from switchboard.protocol.errors import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    RpcError,
)
from switchboard.protocol.models import JsonRpcRequest, JsonRpcResponse, RequestId, to_wire
from switchboard.utils.telemetry import (
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_ID,
    ATTR_RPC_METHOD,
    ATTR_RPC_NOTIFICATION,
    ATTR_TOOL_NAME,
    ATTR_TRANSPORT,
    get_tracer,
)

if TYPE_CHECKING:
    from opentelemetry.trace import Span

    from switchboard.capabilities.registry import CapabilityRegistry
    from switchboard.config.models import ServerSettings

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

Handler = Callable[[dict[str, Any]], dict[str, Any]]

# Notifications that are acknowledged silently.
NOTIFICATION_METHODS = frozenset({"initialized", "notifications/initialized"})


class Dispatcher:
    """Routes JSON-RPC requests to the :class:`CapabilityRegistry`.

    Usage::

        dispatcher = Dispatcher(registry, settings, transport="stdio")
        reply = dispatcher.handle_message('{"jsonrpc": "2.0", "id": 1, "method": "ping"}')
        if reply is not None:
            write(reply)

    *transport* only labels ``ping`` and ``initialize`` results; it does not
    change routing.
    """

    def __init__(
        self,
        registry: CapabilityRegistry,
        settings: ServerSettings,
        *,
        transport: str = "stdio",
    ) -> None:
        self._registry = registry
        self._settings = settings
        self._transport = transport
        self._methods: Mapping[str, Handler] = MappingProxyType(
            {
                "initialize": self._initialize,
                "tools/list": self._list_tools,
                "tools/call": self._call_tool,
                "resources/list": self._list_resources,
                "resources/read": self._read_resource,
                "prompts/list": self._list_prompts,
                "prompts/get": self._get_prompt,
                "ping": self._ping,
            }
        )

    @property
    def registry(self) -> CapabilityRegistry:
        return self._registry

    @property
    def settings(self) -> ServerSettings:
        return self._settings

    @property
    def transport(self) -> str:
        return self._transport

    @property
    def methods(self) -> list[str]:
        return list(self._methods)

    def for_transport(self, transport: str) -> Dispatcher:
        """Return a dispatcher sharing this registry, labelled for *transport*."""
        return Dispatcher(self._registry, self._settings, transport=transport)

    # -- entry points --------------------------------------------------------

    def handle_message(self, raw: str | bytes) -> str | None:
        """Handle one raw message and return the serialized response, if any."""
        response = self.handle_raw(raw)
        return None if response is None else response.to_json()

    def handle_raw(self, raw: str | bytes) -> JsonRpcResponse | None:
        """Parse *raw* as JSON and dispatch it.

        Malformed JSON always yields a ``-32700`` response with ``id: null``.
        """
        try:
            payload: Any = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            logger.debug("JSON parse error: %s", exc)
            return JsonRpcResponse.failure(None, ParseError(data=str(exc)))
        return self.handle(payload)

    def handle(self, payload: Any) -> JsonRpcResponse | None:
        """Dispatch an already-decoded JSON value."""
        with _tracer.start_as_current_span("rpc.dispatch") as span:
            span.set_attribute(ATTR_TRANSPORT, self._transport)
            response = self._dispatch(payload, span)
            if response is not None and response.error is not None:
                span.set_attribute(ATTR_RPC_ERROR_CODE, response.error.code)
            return response

    # -- routing -------------------------------------------------------------

    def _dispatch(self, payload: Any, span: Span) -> JsonRpcResponse | None:
        try:
            request = _parse_request(payload)
        except InvalidRequestError as exc:
            if _is_notification_envelope(payload):
                logger.debug("Dropping invalid notification: %s", exc)
                return None
            return JsonRpcResponse.failure(_recover_id(payload), exc)

        span.set_attribute(ATTR_RPC_METHOD, request.method)
        span.set_attribute(ATTR_RPC_NOTIFICATION, request.is_notification)
        if request.id is not None:
            span.set_attribute(ATTR_RPC_ID, str(request.id))

        if request.method in NOTIFICATION_METHODS:
            logger.debug("Received notification: %s", request.method)
            return None

        logger.debug("Processing method: %s with id: %s", request.method, request.id)

        try:
            result = self._invoke(request)
        except RpcError as exc:
            if request.is_notification:
                logger.debug("Dropping error for notification %s: %s", request.method, exc)
                return None
            return JsonRpcResponse.failure(request.id, exc)

        if request.is_notification:
            return None
        return JsonRpcResponse.success(request.id, result)

    def _invoke(self, request: JsonRpcRequest) -> dict[str, Any]:
        handler = self._methods.get(request.method)
        if handler is None:
            raise MethodNotFoundError(request.method)
        try:
            return handler(request.arguments)
        except RpcError:
            raise
        except Exception as exc:
            logger.exception("Unhandled error while processing %s", request.method)
            raise InternalError(data=f"{type(exc).__name__}: {exc}") from exc

    # -- method handlers -----------------------------------------------------

    def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        client_name, client_version = _client_info(params.get("clientInfo"))
        logger.info(
            "Client %s %s initialized via %s",
            client_name,
            client_version,
            self._transport,
        )
        return {
            "protocolVersion": self._settings.protocol_version,
            "capabilities": {"tools": {}, "resources": {}, "prompts": {}},
            "serverInfo": {
                "name": self._settings.name,
                "version": self._settings.version,
            },
            "instructions": (
                f"Server initialized successfully. Connected via {self._transport} transport."
            ),
        }

    def _list_tools(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": [to_wire(d) for d in self._registry.list_tools()]}

    def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        name = _require_param(params, "name")
        arguments = Arguments.from_params(params.get("arguments"))
        with _tracer.start_as_current_span("rpc.tool") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            chunks = self._registry.call_tool(name, arguments)
        return {"content": [to_wire(chunk) for chunk in chunks]}

    def _list_resources(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"resources": [to_wire(d) for d in self._registry.list_resources()]}

    def _read_resource(self, params: dict[str, Any]) -> dict[str, Any]:
        uri = _require_param(params, "uri")
        return {"contents": [to_wire(c) for c in self._registry.read_resource(uri)]}

    def _list_prompts(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"prompts": [to_wire(d) for d in self._registry.list_prompts()]}

    def _get_prompt(self, params: dict[str, Any]) -> dict[str, Any]:
        name = _require_param(params, "name")
        arguments = Arguments.from_params(params.get("arguments"))
        return to_wire(self._registry.get_prompt(name, arguments))

    def _ping(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "status": "pong",
            "timestamp": format_timestamp(),
            "transport": self._transport,
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_request(payload: Any) -> JsonRpcRequest:
    if not isinstance(payload, dict):
        raise InvalidRequestError("Invalid Request - expected a JSON object")
    if "method" not in payload:
        raise InvalidRequestError("Invalid Request - Missing method")
    try:
        return JsonRpcRequest.model_validate(payload)
    except ValidationError as exc:
        raise InvalidRequestError(data=_summarize(exc)) from exc


def _is_notification_envelope(payload: Any) -> bool:
    """An object naming a method without an ``id`` never gets a reply."""
    return isinstance(payload, dict) and "method" in payload and "id" not in payload


def _recover_id(payload: Any) -> RequestId:
    """Best-effort ``id`` for an envelope that failed validation."""
    if not isinstance(payload, dict):
        return None
    request_id = payload.get("id")
    if isinstance(request_id, bool) or not isinstance(request_id, (int, str)):
        return None
    return request_id


def _summarize(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'envelope'}: {err['msg']}"
        for err in exc.errors()
    )


def _require_param(params: dict[str, Any], key: str) -> str:
    value = params.get(key)
    if not isinstance(value, str):
        msg = f"Missing required parameter '{key}'"
        raise InvalidParamsError(msg, data=key)
    return value


def _client_info(raw: Any) -> tuple[str, str]:
    if not isinstance(raw, dict):
        return "Unknown", "1.0.0"
    name = raw.get("name")
    version = raw.get("version")
    return (
        name if isinstance(name, str) else "Unknown",
        version if isinstance(version, str) else "1.0.0",
    )
