"""
Command Line Commands

This module provides the CLI commands that tokenize, expand and run shell-like
command lines.

Commands:
- shline parse <line>: Show how a line is split into arguments and segments.
- shline expand <line>: Print the resolved arguments, one per line.
- shline run <line>: Execute the line and exit with its return code.

Variables are resolved, in order, from --var overrides, the stored variables
(see `shline var`), and the process environment. --strict aborts on an unknown
variable; --disabled turns expansion off.
"""

from typing import Callable
from rich.console import Console
from rich.markup import escape
from rich.table import Table
import click
from shline.commands.base import RichCommand, rich_help
from shline.config.settings import appsettings, config_varsLoad
from shline.lib.log import LOG
from shline.lib.parser import (
    Resolver,
    UnresolvedVariableFault,
    expand_disabled,
    expand_env,
    expand_map,
    expand_panic,
    line_parse,
    resolvers_chain,
)
from shline.lib.sh import Sh, args_format
from shline.models.dataModel import ExecResult, Line

console: Console = Console()


def vars_parse(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    """
    Click callback turning repeated NAME=VALUE options into a mapping.

    :raises click.BadParameter: If an entry has no '='.
    """
    overrides: dict[str, str] = {}
    for entry in values:
        name, sep, value = entry.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got '{entry}'")
        overrides[name] = value
    return overrides


def resolver_build(
    overrides: dict[str, str],
    no_env: bool = False,
    strict: bool = False,
    disabled: bool = False,
) -> Resolver:
    """
    Assemble the resolver chain used by the CLI.

    :param overrides: Variables given on the command line.
    :param no_env: Skip the process environment.
    :param strict: Abort on unresolved variables.
    :param disabled: Turn variable expansion off entirely.
    :return: The composed Resolver.
    """
    if disabled:
        return expand_disabled()

    chain: list[Resolver] = [expand_map(overrides), expand_map(config_varsLoad())]
    if not (no_env or appsettings.noEnv):
        chain.append(expand_env())
    if strict or appsettings.strict:
        chain.append(expand_panic())
    return resolvers_chain(*chain)


def expansion_options(command: Callable) -> Callable:
    """Attach the options shared by `expand` and `run`."""
    options = [
        click.option(
            "--var",
            "overrides",
            multiple=True,
            callback=vars_parse,
            help="NAME=VALUE variable, tried before stored and env variables.",
        ),
        click.option("--no-env", is_flag=True, help="Do not read the process environment."),
        click.option("--strict", is_flag=True, help="Fail on unresolved variables."),
        click.option("--disabled", is_flag=True, help="Do not expand variables."),
    ]
    for option in reversed(options):
        command = option(command)
    return command


@click.command(
    cls=RichCommand,
    short_help="Show how a line is tokenized",
    help=rich_help(
        command="parse",
        description="Split a command line into arguments and segments.",
        usage="shline parse <line>",
        args={"<line>": "The shell-like command line to tokenize."},
    ),
)
@click.argument("command_line", type=str)
def parse(command_line: str) -> None:
    """
    Print a table of arguments and their segments.

    :param command_line: The raw command line.
    """
    line: Line = line_parse(command_line)
    table: Table = Table(title="Arguments")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Segment", style="green")
    table.add_column("Expandable", style="magenta")
    for index, arg in enumerate(line):
        for position, segment in enumerate(arg):
            table.add_row(
                str(index) if position == 0 else "",
                escape(repr(segment.text)),
                str(segment.expandable),
            )
    console.print(table)


@click.command(
    cls=RichCommand,
    short_help="Print resolved arguments",
    help=rich_help(
        command="expand",
        description="Tokenize a command line and expand its variables.",
        usage="shline expand [OPTIONS] <line>",
        args={"<line>": "The shell-like command line to expand."},
    ),
)
@click.argument("command_line", type=str)
@expansion_options
@click.pass_context
def expand(
    ctx: click.Context,
    command_line: str,
    overrides: dict[str, str],
    no_env: bool,
    strict: bool,
    disabled: bool,
) -> None:
    """
    Print each resolved argument on its own line.

    :param command_line: The raw command line.
    """
    resolver: Resolver = resolver_build(overrides, no_env, strict, disabled)
    try:
        args: list[str] = Sh().line(command_line).expand(resolver).args_expand()
    except UnresolvedVariableFault as e:
        LOG(f"Expansion aborted: {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")
        ctx.exit(2)
    for arg in args:
        click.echo(arg)


@click.command(
    cls=RichCommand,
    short_help="Run a command line",
    help=rich_help(
        command="run",
        description="Tokenize, expand and execute a command line.",
        usage="shline run [OPTIONS] <line>",
        args={"<line>": "The shell-like command line to execute."},
    ),
)
@click.argument("command_line", type=str)
@expansion_options
@click.option("--dir", "cwd", type=str, default=None, help="Working directory.")
@click.option("--dry-run", is_flag=True, help="Print the command without running it.")
@click.option("--log/--no-log", "log_command", default=True, help="Echo the command to stderr.")
@click.pass_context
def run(
    ctx: click.Context,
    command_line: str,
    overrides: dict[str, str],
    no_env: bool,
    strict: bool,
    disabled: bool,
    cwd: str | None,
    dry_run: bool,
    log_command: bool,
) -> None:
    """
    Execute the command line and exit with the child's return code.

    :param command_line: The raw command line.
    """
    sh: Sh = (
        Sh()
        .line(command_line)
        .expand(resolver_build(overrides, no_env, strict, disabled))
        .cwd_set(cwd)
        .commandLogPrefix_set(appsettings.commandLogPrefix)
    )
    if log_command:
        sh = sh.commandLog_set(click.get_text_stream("stderr"))

    try:
        if dry_run:
            click.echo(args_format(sh.args_expand()))
            return
        result: ExecResult = sh.exec()
    except UnresolvedVariableFault as e:
        LOG(f"Expansion aborted: {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")
        ctx.exit(2)

    if result.error and result.exit_code != 0:
        console.print(f"[bold red]{escape(str(sh))}: {escape(result.error)}[/bold red]")
    ctx.exit(result.exit_code if result.exit_code >= 0 else 128 - result.exit_code)
