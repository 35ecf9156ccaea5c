"""
Defines the main Click command group for shline.

This module provides:
- The root `cli` command group for the application.
- Integration with Rich-enhanced Click classes (`RichGroup`).
- Registration of subcommands from other modules.

Usage:
Import `cli` to initialize and run the command-line interface.
"""

import click
from shline.commands.base import RichGroup
from shline.commands.line import parse, expand, run
from shline.commands.var import var


@click.group(
    cls=RichGroup,
    help="""
    shline Command Palette

    Tokenize, expand and run shell-like command lines without a shell.
    """,
)
@click.version_option(package_name="shline", prog_name="shline")
def cli() -> None:
    """
    The root Click command group for shline.
    """
    pass


# Explicitly annotate `cli` as `click.Group` for static type checking
cli: click.Group = cli

# Register subcommands
cli.add_command(parse)
cli.add_command(expand)
cli.add_command(run)
cli.add_command(var)
