"""Allow ``python -m hellod``."""

from hellod.cli import cli

cli()
