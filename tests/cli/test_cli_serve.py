"""Tests for ``switchboard serve``."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from switchboard.cli import main
from switchboard.config.models import ServerSettings

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[None]:
    logger = logging.getLogger("switchboard")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestServeStdio:
    def test_round_trip(self) -> None:
        lines = "\n".join(
            [
                '{"jsonrpc": "2.0", "id": 1, "method": "initialize"}',
                '{"jsonrpc": "2.0", "method": "notifications/initialized"}',
                '{"jsonrpc": "2.0", "id": 2, "method": "tools/call",'
                ' "params": {"name": "echo", "arguments": {"text": "hi"}}}',
            ]
        )
        runner = CliRunner()
        result = runner.invoke(main, ["serve", "stdio", "--log-level", "error"], input=lines + "\n")

        assert result.exit_code == 0
        responses = [json.loads(line) for line in result.output.splitlines() if line.strip()]
        assert [r["id"] for r in responses] == [1, 2]
        assert responses[1]["result"]["content"][0]["text"] == "Echo: hi"

    def test_bad_config(self, tmp_path: Path) -> None:
        f = tmp_path / "bad.yaml"
        f.write_text("heartbeat_interval: -1\n")

        runner = CliRunner()
        result = runner.invoke(main, ["serve", "stdio", "--config", str(f)], input="")

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestServeHttp:
    def test_overrides_reach_uvicorn(self, tmp_path: Path) -> None:
        f = tmp_path / "server.yaml"
        f.write_text("name: Configured\nport: 9000\n")

        with patch("switchboard.transports.http.run_http") as run_http:
            runner = CliRunner()
            result = runner.invoke(
                main,
                ["serve", "http", "--config", str(f), "--port", "9100", "--log-level", "warning"],
            )

        assert result.exit_code == 0
        [settings] = run_http.call_args.args
        assert isinstance(settings, ServerSettings)
        assert settings.name == "Configured"
        assert settings.port == 9100
        assert settings.host == "127.0.0.1"
        assert settings.log_level == "WARNING"

    def test_invalid_port(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["serve", "http", "--port", "0"])

        assert result.exit_code == 2


class TestVersion:
    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output
