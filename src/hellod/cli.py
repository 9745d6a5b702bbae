"""Root CLI group for hellod with global flags and command registration."""

from __future__ import annotations

import click

from hellod import __version__
from hellod.commands import register_commands
from hellod.commands._base import HellodGroup
from hellod.commands._context import AppContext
from hellod.config.settings import HellodSettings


@click.group(
    cls=HellodGroup,
    invoke_without_command=True,
    examples="""\
  # Serve on $PORT (default 3000)
  hellod serve

  # Check it from a container health check
  hellod -q probe

  # Show the merged settings as JSON
  hellod --json config""",
)
@click.version_option(version=__version__, prog_name="hellod")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging, one event per request.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Override config file path.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """hellod — answers every HTTP request with a fixed greeting."""
    ctx.ensure_object(dict)
    settings = HellodSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
