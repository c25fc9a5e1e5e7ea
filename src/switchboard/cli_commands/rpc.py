"""``switchboard rpc`` — dispatch one raw JSON-RPC message in-process."""

from __future__ import annotations

import click

from switchboard.cli_commands._output import config_option, console, load_settings_or_exit


@click.command()
@click.argument("message")
@click.option(
    "--transport",
    default="cli",
    show_default=True,
    help="Transport label reported by ping and initialize.",
)
@config_option
def rpc(message: str, transport: str, config_path: str | None) -> None:
    """Send MESSAGE (a JSON-RPC envelope) to the dispatcher and print the reply.

    Example: switchboard rpc '{"jsonrpc":"2.0","id":1,"method":"tools/list"}'
    """
    from switchboard.capabilities.registry import CapabilityRegistry
    from switchboard.server.dispatcher import Dispatcher

    settings = load_settings_or_exit(config_path)
    dispatcher = Dispatcher(CapabilityRegistry.default(settings), settings, transport=transport)

    reply = dispatcher.handle_message(message)
    if reply is None:
        console.print("[dim]No response (notification).[/dim]")
        return
    click.echo(reply)
