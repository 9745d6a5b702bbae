"""Tests for the probe command."""

from __future__ import annotations

import socket

from click.testing import CliRunner

from hellod.cli import cli
from hellod.server.responder import Responder


class TestProbeCommand:
    def test_healthy(self, cli_runner: CliRunner, responder: Responder) -> None:
        result = cli_runner.invoke(cli, ["probe", "--url", responder.url])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "status: 200" in result.output

    def test_uses_port_env(self, cli_runner: CliRunner, responder: Responder) -> None:
        result = cli_runner.invoke(cli, ["-q", "probe"], env={"PORT": str(responder.port)})
        assert result.exit_code == 0
        assert result.output.strip() == "200"

    def test_json(self, cli_runner: CliRunner, responder: Responder) -> None:
        result = cli_runner.invoke(cli, ["--json", "probe", "--url", responder.url])
        assert result.exit_code == 0
        assert '"body": "Hello from Multi-Stage Node.js Build!"' in result.output

    def test_unreachable_exits_1(self, cli_runner: CliRunner) -> None:
        with socket.socket() as sock:
            sock.bind(("127.0.0.1", 0))
            port = sock.getsockname()[1]
        result = cli_runner.invoke(
            cli, ["probe", "--url", f"http://127.0.0.1:{port}/", "--timeout", "1"]
        )
        assert result.exit_code == 1
        assert "ERROR" in result.output

    def test_timeout_must_be_positive(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["probe", "--timeout", "0"])
        assert result.exit_code == 2
