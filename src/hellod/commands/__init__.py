"""Subcommand modules for hellod.

Provides register_commands() which uses deferred imports to keep
``hellod --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from hellod.commands.config_cmd import config_cmd
    from hellod.commands.probe import probe
    from hellod.commands.serve import serve

    cli.add_command(serve)
    cli.add_command(probe)
    cli.add_command(config_cmd)
