"""
Variable Management Commands

This module provides CLI commands for managing variables stored in the shline
config file. Stored variables are used when expanding command lines, after
--var overrides and before the process environment.

Commands:
- shline var set <name> <value>: Set a variable.
- shline var show <name>: Show a variable's value.
- shline var showall: List all variables.
- shline var delete <name>: Delete a variable.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table
import click
from shline.commands.base import RichGroup, RichCommand, rich_help
from shline.config.settings import config_varsLoad, config_varsSave
from shline.lib.log import LOG

console: Console = Console()


@click.group(
    cls=RichGroup,
    short_help="Manage variables",
    help="""
    Variable Management

    Commands to manage stored variables.
    """,
)
def var() -> None:
    """
    Root group for variable-related commands.
    """
    pass


var: click.Group = var


@var.command(
    cls=RichCommand,
    help=rich_help(
        command="set",
        description="Set a stored variable.",
        usage="shline var set <name> <value>",
        args={
            "<name>": "The name of the variable to set.",
            "<value>": "The value to assign to the variable.",
        },
    ),
)
@click.argument("name", type=str)
@click.argument("value", type=str)
def set(name: str, value: str) -> None:
    """
    Sets a variable in the config file.

    :param name: The name of the variable.
    :param value: The value of the variable.
    """
    try:
        variables: dict[str, str] = config_varsLoad()
        variables[name] = value
        if config_varsSave(variables):
            console.print(f"[bold green]Variable '{name}' set successfully.[/bold green]")
        else:
            console.print(f"[bold red]Failed to set variable '{name}'.[/bold red]")
    except Exception as e:
        LOG(f"Error setting variable '{name}': {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")


@var.command(
    cls=RichCommand,
    help=rich_help(
        command="show",
        description="Show the value of a stored variable.",
        usage="shline var show <name>",
        args={
            "<name>": "The name of the variable to show.",
        },
    ),
)
@click.argument("name", type=str)
def show(name: str) -> None:
    """
    Show a variable's value from the config file.

    :param name: The name of the variable to show.
    """
    try:
        variables: dict[str, str] = config_varsLoad()
        if name in variables:
            console.print(f"[bold cyan]{name}:[/bold cyan] {escape(variables[name])}")
        else:
            console.print(f"[bold red]Variable '{name}' not found.[/bold red]")
    except Exception as e:
        LOG(f"Error showing variable '{name}': {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")


@var.command(
    cls=RichCommand,
    help=rich_help(
        command="showall",
        description="Show a list of all stored variables.",
        usage="shline var showall",
        args={},
    ),
)
def showall() -> None:
    """
    Displays all variables in the config file.
    """
    try:
        variables: dict[str, str] = config_varsLoad()
        if not variables:
            console.print("[bold yellow]No variables stored.[/bold yellow]")
            return
        table: Table = Table(title="All variables")
        table.add_column("Name", style="cyan")
        table.add_column("Value", style="green")
        for name, value in sorted(variables.items()):
            table.add_row(escape(name), escape(value))
        console.print(table)
    except Exception as e:
        LOG(f"Error showing all variables: {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")


@var.command(
    cls=RichCommand,
    help=rich_help(
        command="delete",
        description="Delete a stored variable.",
        usage="shline var delete <name>",
        args={
            "<name>": "The name of the variable to delete.",
        },
    ),
)
@click.argument("name", type=str)
def delete(name: str) -> None:
    """
    Deletes a variable from the config file.

    :param name: The name of the variable to delete.
    """
    try:
        variables: dict[str, str] = config_varsLoad()
        if name not in variables:
            console.print(f"[bold red]Variable '{name}' not found.[/bold red]")
            return
        del variables[name]
        if config_varsSave(variables):
            console.print(
                f"[bold green]Variable '{name}' deleted successfully.[/bold green]"
            )
        else:
            console.print(f"[bold red]Failed to delete variable '{name}'.[/bold red]")
    except Exception as e:
        LOG(f"Error deleting variable '{name}': {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")
