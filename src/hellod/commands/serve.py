"""serve — run the responder until interrupted."""

from __future__ import annotations

import click

from hellod.commands._base import HellodCommand
from hellod.commands._context import AppContext


@click.command(
    cls=HellodCommand,
    examples="""\
  # Listen on $PORT (default 3000) on all interfaces
  hellod serve

  # Loopback only, custom port
  hellod serve --host 127.0.0.1 --port 8080

  # Same, via the environment
  PORT=8080 hellod serve

  # JSON log lines with one access event per request
  hellod --log-json -v serve""",
)
@click.option("--host", default=None, help="Bind address (default: [server] host).")
@click.option(
    "--port",
    default=None,
    type=click.IntRange(0, 65535),
    help="Listen port (default: $PORT, else 3000).",
)
@click.pass_obj
def serve(app: AppContext, host: str | None, port: int | None) -> None:
    """Answer every HTTP request with the configured greeting."""
    from hellod.services.serve import ServeService

    settings = app.settings.with_overrides(host=host, port=port)
    result = ServeService(settings).run()
    if not result.ok:
        app.emit(result)
