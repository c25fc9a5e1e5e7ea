"""Switchboard CLI entrypoint."""

from __future__ import annotations

import click

from switchboard import __version__

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="switchboard")
def main() -> None:
    """Switchboard — an MCP-style JSON-RPC server.

    Serve the built-in tools, resources and prompts over stdio or HTTP, or
    exercise them in-process with ``tools`` and ``rpc``.
    """


# Register subcommands
from switchboard.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
