"""OpenTelemetry tracing for Switchboard.

Every module takes its tracer from :func:`get_tracer`; until
:func:`configure_telemetry` installs an SDK provider, the API hands out no-op
tracers and spans cost nothing.

Usage::

    from switchboard.utils.telemetry import ATTR_RPC_METHOD, get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("rpc.dispatch") as span:
        span.set_attribute(ATTR_RPC_METHOD, "tools/list")

Exporting spans needs the ``otel`` extra: ``pip install switchboard[otel]``.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from opentelemetry import trace

if TYPE_CHECKING:
    from switchboard.config.models import TelemetrySettings

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_RPC_METHOD = "switchboard.rpc.method"
ATTR_RPC_ID = "switchboard.rpc.id"
ATTR_RPC_ERROR_CODE = "switchboard.rpc.error_code"
ATTR_RPC_NOTIFICATION = "switchboard.rpc.notification"
ATTR_TRANSPORT = "switchboard.transport"
ATTR_TOOL_NAME = "switchboard.tool.name"

_INSTRUMENTATION_NAME = "switchboard"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return the tracer for *name* (no-op until telemetry is configured)."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    settings: TelemetrySettings,
    *,
    service_name: str = _INSTRUMENTATION_NAME,
    allow_console: bool = True,
) -> bool:
    """Install an SDK tracer provider described by *settings*.

    Returns ``False`` (and changes nothing) when ``settings.enabled`` is off.
    *allow_console* must be ``False`` for the stdio transport: the console
    exporter writes to stdout.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, with an OTLP endpoint,
            ``opentelemetry-exporter-otlp``) is not installed.
    """
    if not settings.enabled:
        return False

    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install switchboard[otel]"
        )
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    for processor in _span_processors(settings, allow_console=allow_console):
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    return True


def _span_processors(settings: TelemetrySettings, *, allow_console: bool) -> Iterator[Any]:
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    if settings.export_to_console and allow_console:
        yield SimpleSpanProcessor(ConsoleSpanExporter())

    if settings.otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = (
                "opentelemetry-exporter-otlp is required for OTLP export. "
                "Install it with: pip install switchboard[otel]"
            )
            raise ImportError(msg) from exc
        yield BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint))
