"""Pydantic models for the server configuration YAML."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

PROTOCOL_VERSION = "2024-11-05"


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None
    export_to_console: bool = False


class ServerSettings(BaseModel):
    """Top-level server configuration.

    Every field has a default, so an empty file (or no file) is a valid
    configuration.
    """

    name: str = "Switchboard MCP Server"
    version: str = "1.0.0"
    protocol_version: str = PROTOCOL_VERSION
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    heartbeat_interval: float = Field(
        default=30.0,
        gt=0,
        description="Seconds between SSE heartbeat events.",
    )
    weather_seed: int | None = Field(
        default=None,
        description="Seed for the simulated weather generator (random when unset).",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)
