"""probe — health-check a running responder."""

from __future__ import annotations

import click

from hellod.commands._base import HellodCommand
from hellod.commands._context import AppContext


@click.command(
    cls=HellodCommand,
    examples="""\
  # Check the local responder on $PORT
  hellod probe

  # Dockerfile health check
  HEALTHCHECK CMD ["hellod", "-q", "probe"]

  # Another host, HEAD only, tight timeout
  hellod probe --url http://app:3000/ --method HEAD --timeout 0.5""",
)
@click.option("--url", default=None, help="Target URL (default: http://127.0.0.1:$PORT/).")
@click.option("--method", default="GET", show_default=True, help="HTTP method to send.")
@click.option(
    "--timeout",
    default=None,
    type=click.FloatRange(min=0, min_open=True),
    help="Seconds before giving up (default: [probe] timeout).",
)
@click.pass_obj
def probe(app: AppContext, url: str | None, method: str, timeout: float | None) -> None:
    """Send one request to a responder; exit 1 unless it is healthy."""
    from hellod.services.probe import ProbeService

    app.emit(ProbeService(app.settings).probe(url, method=method, timeout=timeout))
