"""Line-delimited JSON-RPC over stdin/stdout.

One request per input line, one response per output line.  stdout carries
protocol traffic only; diagnostics go through :mod:`logging` to stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from switchboard.server.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class StdioServer:
    """Serve a :class:`Dispatcher` over a pair of text streams.

    Usage::

        StdioServer(dispatcher).serve()

    The loop ends when the input stream is exhausted or an empty line arrives.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    def serve(self) -> int:
        """Process lines until the stream ends; return the number of responses written."""
        settings = self._dispatcher.settings
        logger.info("%s v%s starting on stdio", settings.name, settings.version)
        logger.info("Available methods: %s", ", ".join(self._dispatcher.methods))

        written = 0
        while True:
            line = self._stdin.readline()
            if not line.rstrip("\r\n"):
                break
            reply = self._dispatcher.handle_message(line)
            if reply is None:
                continue
            self._stdout.write(reply + "\n")
            self._stdout.flush()
            written += 1

        logger.info("Input closed, stdio server stopping")
        return written
