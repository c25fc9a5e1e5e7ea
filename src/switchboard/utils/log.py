"""Logging setup.

All log output goes to stderr through a rich handler: the stdio transport
uses stdout exclusively for JSON-RPC responses.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "switchboard"


def configure_logging(level: str = "INFO", *, console: Console | None = None) -> logging.Logger:
    """Attach a stderr :class:`RichHandler` to the ``switchboard`` logger.

    Calling it again replaces the previously installed handler instead of
    stacking a second one.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    return logger
