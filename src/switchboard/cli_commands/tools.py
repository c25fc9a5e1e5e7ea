"""``switchboard tools`` — list and invoke registered tools in-process."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING

import click
from rich.markup import escape

from switchboard.cli_commands._output import (
    config_option,
    console,
    load_settings_or_exit,
    print_tools_table,
)

if TYPE_CHECKING:
    from switchboard.capabilities.registry import CapabilityRegistry


@click.group()
def tools() -> None:
    """List and invoke tools."""


@tools.command("list")
@config_option
@click.option("--json", "as_json", is_flag=True, help="Print descriptors as JSON.")
def list_tools(config_path: str | None, as_json: bool) -> None:
    """Show every registered tool and its required arguments."""
    from switchboard.capabilities.registry import CapabilityRegistry
    from switchboard.protocol.models import to_wire

    settings = load_settings_or_exit(config_path)
    registry = CapabilityRegistry.default(settings)
    descriptors = [to_wire(d) for d in registry.list_tools()]

    if as_json:
        console.print_json(json.dumps(descriptors))
        return

    print_tools_table(descriptors)


@tools.command("call")
@click.argument("name")
@click.option(
    "--arg",
    "-a",
    "assignments",
    multiple=True,
    metavar="KEY=VALUE",
    help="Tool argument; repeatable. Values for boolean parameters accept 'true'/'false'.",
)
@click.option("--seed", type=int, default=None, help="Seed for simulated tools.")
@config_option
def call_tool(
    name: str,
    assignments: tuple[str, ...],
    seed: int | None,
    config_path: str | None,
) -> None:
    """Invoke tool NAME and print each content chunk."""
    from switchboard.capabilities.arguments import Arguments
    from switchboard.capabilities.registry import CapabilityRegistry
    from switchboard.protocol.errors import RpcError

    settings = load_settings_or_exit(config_path, weather_seed=seed)
    registry = CapabilityRegistry.default(settings)
    flags = _boolean_parameters(registry, name)

    try:
        raw = dict(_parse_assignment(item, flags) for item in assignments)
    except click.BadParameter as exc:
        console.print(f"[red]Argument error:[/red] {escape(exc.message)}")
        sys.exit(2)

    try:
        chunks = registry.call_tool(name, Arguments.from_params(raw))
    except RpcError as exc:
        console.print(f"[red]Tool error:[/red] {escape(exc.message)}")
        sys.exit(1)

    for chunk in chunks:
        click.echo(chunk.text)


def _boolean_parameters(registry: CapabilityRegistry, name: str) -> frozenset[str]:
    """Names of the properties tool *name* declares as ``"type": "boolean"``."""
    for descriptor in registry.list_tools():
        if descriptor.name == name:
            properties = descriptor.input_schema.get("properties", {})
            return frozenset(
                key
                for key, spec in properties.items()
                if isinstance(spec, dict) and spec.get("type") == "boolean"
            )
    return frozenset()


def _parse_assignment(item: str, flags: frozenset[str]) -> tuple[str, str | bool]:
    key, sep, value = item.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"expected KEY=VALUE, got {item!r}")
    if key not in flags:
        return key, value
    lowered = value.lower()
    if lowered not in ("true", "false"):
        raise click.BadParameter(f"{key} expects true or false, got {value!r}")
    return key, lowered == "true"
