"""Shared pytest fixtures for hellod tests."""

from __future__ import annotations

import logging
import threading
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from hellod.server.responder import Responder

_ENV_VARS = (
    "PORT",
    "HELLOD_PORT",
    "HELLOD_CONFIG",
    "HELLOD_CONFIG_PATH",
    "HELLOD_SERVER__HOST",
    "HELLOD_SERVER__MESSAGE",
    "HELLOD_PROBE__TIMEOUT",
    "HELLOD_VERBOSE",
    "HELLOD_QUIET",
)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear hellod env vars and run from an empty temp dir.

    Keeps a stray ``PORT`` or a ``hellod.toml`` higher up the tree from
    leaking into settings.
    """
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HELLOD_CONFIG", str(tmp_path / "absent.toml"))


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test.

    CLI invocations reconfigure logging against CliRunner's temporary
    streams; leaving that handler in place breaks later tests.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    hellod_logger = logging.getLogger("hellod")
    hellod_level = hellod_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    hellod_logger.setLevel(hellod_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def responder() -> Generator[Responder]:
    """A responder on an ephemeral loopback port, serving in a background thread."""
    r = Responder("127.0.0.1", 0).bind()
    thread = threading.Thread(target=r.serve_forever, kwargs={"poll_interval": 0.05}, daemon=True)
    thread.start()
    try:
        yield r
    finally:
        r.shutdown()
        thread.join(timeout=5)
