"""Tests for the serve command."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from hellod.cli import cli
from hellod.server.responder import Responder
from hellod.services.result import ServiceResult


def _ok_result() -> ServiceResult:
    return ServiceResult(ok=True, op="serve", data={"port": 3000})


class TestServeCommand:
    def test_help_shows_host_port(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["serve", "--help"])
        assert result.exit_code == 0
        assert "--host" in result.output
        assert "--port" in result.output

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["serve", "--examples"])
        assert result.exit_code == 0
        assert "PORT=8080 hellod serve" in result.output

    def test_defaults_to_port_3000(self, cli_runner: CliRunner) -> None:
        with patch("hellod.services.serve.ServeService") as service_cls:
            service_cls.return_value.run.return_value = _ok_result()
            result = cli_runner.invoke(cli, ["serve"])

        assert result.exit_code == 0
        settings = service_cls.call_args.args[0]
        assert settings.port == 3000
        assert settings.server.host == "0.0.0.0"

    def test_port_env(self, cli_runner: CliRunner) -> None:
        with patch("hellod.services.serve.ServeService") as service_cls:
            service_cls.return_value.run.return_value = _ok_result()
            result = cli_runner.invoke(cli, ["serve"], env={"PORT": "8080"})

        assert result.exit_code == 0
        assert service_cls.call_args.args[0].port == 8080

    def test_flags_override_env(self, cli_runner: CliRunner) -> None:
        service = MagicMock()
        service.run.return_value = _ok_result()
        with patch("hellod.services.serve.ServeService", return_value=service) as service_cls:
            result = cli_runner.invoke(
                cli,
                ["serve", "--host", "127.0.0.1", "--port", "9000"],
                env={"PORT": "8080"},
            )

        assert result.exit_code == 0
        settings = service_cls.call_args.args[0]
        assert settings.port == 9000
        assert settings.server.host == "127.0.0.1"
        service.run.assert_called_once_with()

    def test_port_out_of_range(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["serve", "--port", "70000"])
        assert result.exit_code == 2

    def test_second_instance_fails_to_bind(
        self, cli_runner: CliRunner, responder: Responder
    ) -> None:
        result = cli_runner.invoke(
            cli, ["serve", "--host", "127.0.0.1", "--port", str(responder.port)]
        )
        assert result.exit_code == 1
        assert result.output.count("address already in use") == 1

    def test_bind_error_json(self, cli_runner: CliRunner, responder: Responder) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "serve", "--host", "127.0.0.1", "--port", str(responder.port)],
        )
        assert result.exit_code == 1
        assert '"code": "BIND_ERROR"' in result.output


@pytest.mark.skipif(sys.platform == "win32", reason="SIGTERM is POSIX-only")
class TestServeProcess:
    """Runs ``python -m hellod serve`` as a real process."""

    def test_sigterm_exits_zero(self) -> None:
        env = {**os.environ, "PORT": "0"}
        proc = subprocess.Popen(
            [sys.executable, "-m", "hellod", "serve", "--host", "127.0.0.1"],
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        try:
            assert proc.stderr is not None
            line = proc.stderr.readline()
            assert b"Server running on port" in line, line
            proc.send_signal(signal.SIGTERM)
            proc.communicate(timeout=10)
        finally:
            if proc.poll() is None:
                proc.kill()
                proc.wait()
        assert proc.returncode == 0
