"""Shared CLI helpers: console output and settings loading."""

from __future__ import annotations

import sys
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from switchboard.config.errors import ConfigError
from switchboard.config.loader import CONFIG_ENV_VAR, load_settings
from switchboard.config.models import ServerSettings  # noqa: TC001

console = Console()

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    envvar=CONFIG_ENV_VAR,
    default=None,
    help=f"Server YAML configuration (env: {CONFIG_ENV_VAR}).",
)


def load_settings_or_exit(config_path: str | None, **overrides: Any) -> ServerSettings:
    """Load settings, apply non-``None`` *overrides*, or exit with status 1."""
    try:
        settings = load_settings(config_path)
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        sys.exit(1)
    updates = {key: value for key, value in overrides.items() if value is not None}
    if updates:
        settings = settings.model_copy(update=updates)
    return settings


def print_tools_table(tools: list[dict[str, Any]]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Required")

    for tool in tools:
        schema = tool.get("inputSchema", {})
        required = ", ".join(schema.get("required", [])) or "-"
        table.add_row(
            tool.get("name", "?"),
            _truncate(tool.get("description", "")),
            required,
        )

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
