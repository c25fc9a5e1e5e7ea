"""Built-in resources: the server README and its configuration summary."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from switchboard.protocol.models import ResourceContents, ResourceDescriptor

if TYPE_CHECKING:
    from switchboard.config.models import ServerSettings


@dataclass(frozen=True)
class Resource:
    """A resource descriptor paired with its inline text."""

    descriptor: ResourceDescriptor
    text: str

    @property
    def uri(self) -> str:
        return self.descriptor.uri

    def read(self) -> list[ResourceContents]:
        return [
            ResourceContents(
                uri=self.descriptor.uri,
                mime_type=self.descriptor.mime_type,
                text=self.text,
            )
        ]


def _readme_text(settings: ServerSettings, tool_names: list[str]) -> str:
    lines = [
        f"# {settings.name}",
        "",
        "A small Model Context Protocol server exposing tools, resources and prompts",
        "over stdio, HTTP, Server-Sent-Events and WebSocket transports.",
        "",
        "Tools:",
        *(f"- {name}" for name in tool_names),
        "",
        "Also provides resource reading and prompt templates.",
    ]
    return "\n".join(lines)


def _config_text(settings: ServerSettings) -> str:
    payload = {
        "server": {
            "name": settings.name,
            "version": settings.version,
            "protocol": settings.protocol_version,
        },
        "capabilities": {
            "tools": True,
            "resources": True,
            "prompts": True,
        },
    }
    return json.dumps(payload, indent=2)


def builtin_resources(settings: ServerSettings, tool_names: list[str]) -> list[Resource]:
    """Return the built-in resources rendered for *settings*."""
    return [
        Resource(
            ResourceDescriptor(
                uri="file:///readme.txt",
                name="Server README",
                description="Information about this MCP server",
                mime_type="text/plain",
            ),
            _readme_text(settings, tool_names),
        ),
        Resource(
            ResourceDescriptor(
                uri="file:///config.json",
                name="Server Configuration",
                description="Server configuration details",
                mime_type="application/json",
            ),
            _config_text(settings),
        ),
    ]
