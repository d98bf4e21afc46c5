"""restyle CLI entry point: Click group with subcommands."""

import click

from restyle import __version__


@click.group()
@click.version_option(version=__version__, prog_name="restyle")
def cli() -> None:
    """restyle - migrate Radium inline styles to styled-components."""


# Import and register subcommands
from restyle.cli.convert import convert  # noqa: E402
from restyle.cli.inspect import inspect  # noqa: E402

cli.add_command(convert)
cli.add_command(inspect)
