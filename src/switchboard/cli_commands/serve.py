"""``switchboard serve`` — run the server on stdio or HTTP."""

from __future__ import annotations

import click

from switchboard.cli_commands._output import config_option, load_settings_or_exit
from switchboard.config.models import ServerSettings  # noqa: TC001

_LOG_LEVELS = click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False)


@click.group()
def serve() -> None:
    """Run the JSON-RPC server."""


@serve.command("stdio")
@config_option
@click.option("--log-level", type=_LOG_LEVELS, default=None, help="Override the configured log level.")
def serve_stdio(config_path: str | None, log_level: str | None) -> None:
    """Serve line-delimited JSON-RPC on stdin/stdout.

    Logs go to stderr; stdout carries responses only.
    """
    from switchboard.capabilities.registry import CapabilityRegistry
    from switchboard.server.dispatcher import Dispatcher
    from switchboard.transports.stdio import StdioServer

    settings = load_settings_or_exit(config_path, log_level=_upper(log_level))
    _configure_ambient(settings, allow_console_spans=False)

    registry = CapabilityRegistry.default(settings)
    StdioServer(Dispatcher(registry, settings, transport="stdio")).serve()


@serve.command("http")
@config_option
@click.option("--host", default=None, help="Bind address (overrides configuration).")
@click.option("--port", type=click.IntRange(1, 65535), default=None, help="Bind port (overrides configuration).")
@click.option("--log-level", type=_LOG_LEVELS, default=None, help="Override the configured log level.")
def serve_http(
    config_path: str | None,
    host: str | None,
    port: int | None,
    log_level: str | None,
) -> None:
    """Serve JSON-RPC over HTTP, SSE and WebSocket."""
    from switchboard.transports.http import run_http

    settings = load_settings_or_exit(config_path, host=host, port=port, log_level=_upper(log_level))
    _configure_ambient(settings, allow_console_spans=True)
    run_http(settings)


def _upper(value: str | None) -> str | None:
    return value.upper() if value is not None else None


def _configure_ambient(settings: ServerSettings, *, allow_console_spans: bool) -> None:
    from switchboard.utils.log import configure_logging

    configure_logging(settings.log_level)

    from switchboard.utils.telemetry import configure_telemetry

    try:
        configure_telemetry(
            settings.telemetry,
            service_name=settings.name,
            allow_console=allow_console_spans,
        )
    except ImportError as exc:
        click.echo(f"Telemetry disabled: {exc}", err=True)
