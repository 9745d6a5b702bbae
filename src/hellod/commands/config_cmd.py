"""config — show the resolved settings."""

from __future__ import annotations

import click

from hellod.commands._base import HellodCommand
from hellod.commands._context import AppContext
from hellod.services.result import ServiceResult

_OUTPUT_FLAGS = {"json_output", "quiet", "verbose", "log_json"}


@click.command(
    "config",
    cls=HellodCommand,
    examples="""\
  # Where would serve listen?
  hellod config

  # Machine-readable
  PORT=8080 hellod --json config""",
)
@click.pass_obj
def config_cmd(app: AppContext) -> None:
    """Print the merged settings (flags > env > hellod.toml > defaults)."""
    data = app.settings.model_dump(mode="json", exclude=_OUTPUT_FLAGS)
    app.emit(ServiceResult(ok=True, op="config", data=data))
