"""
Rich help rendering for the shline command line.

`rich_help` builds the markup each command carries as its help text;
`RichGroup` and `RichCommand` print that markup through a shared Rich
console instead of Click's plain formatter. A rendering failure is logged
and reported, never raised, so `--help` always exits cleanly.
"""

from collections.abc import Iterable
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
import click
from shline.lib.log import LOG

console: Console = Console()

PANEL_WIDTH_MAX: int = 80


def rich_help(command: str, description: str, usage: str, args: dict) -> str:
    """
    Build the help markup for one shline command.

    :param command: The command name, shown in the panel title line.
    :param description: One-line summary of what the command does.
    :param usage: Usage synopsis, e.g. `shline expand [OPTIONS] <line>`.
    :param args: Positional argument names mapped to their descriptions.
    :return: Rich markup for `click.command(help=...)`.
    """
    lines: list[str] = [
        f"[bold cyan]{command}[/bold cyan]: {description}",
        "",
        f"[bold yellow]Usage:[/bold yellow] [green]{usage}[/green]",
    ]
    if args:
        lines += ["", "[bold yellow]Arguments:[/bold yellow]"]
        lines += [f"    [green]{name}[/green]: {text}" for name, text in args.items()]
    return "\n".join(lines) + "\n"


def options_print(options: Iterable[click.Option]) -> None:
    """Print one line per option with all of its flag spellings."""
    options = list(options)
    if not options:
        return
    console.print("[bold yellow]Options:[/bold yellow]")
    for option in options:
        flags: str = ", ".join(option.opts + option.secondary_opts)
        console.print(f"- [cyan]{flags}[/cyan]: {option.help or ''}")


class RichGroup(click.Group):
    """Click group listing its subcommands with their short help."""

    def summary(self, ctx: click.Context, name: str) -> str:
        """Return the short help of a subcommand, or the first line of its help."""
        command: click.Command | None = self.get_command(ctx, name)
        if command is None:
            return ""
        if command.short_help:
            return command.short_help
        return Text.from_markup(command.help or "").plain.strip().split("\n")[0]

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        try:
            console.print(
                f"[bold yellow]Usage:[/bold yellow] [cyan]{ctx.command_path}[/cyan] "
                "[magenta][OPTIONS] COMMAND [ARGS]...[/magenta]\n"
            )
            if self.help:
                console.print(f"[bold cyan]{self.help.strip()}[/bold cyan]\n")
            console.print("[bold green]Commands:[/bold green]")
            for name in self.list_commands(ctx):
                console.print(f"- [cyan]{name}[/cyan]: {escape(self.summary(ctx, name))}")
            console.print()
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {e}")


class RichCommand(click.Command):
    """Click command showing its help markup in a panel, followed by its options."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        try:
            help_text: str = self.help or self.name or ""
            width: int = max((len(line) for line in help_text.splitlines()), default=0)
            console.print(
                Panel(
                    help_text,
                    expand=False,
                    width=min(width + 10, PANEL_WIDTH_MAX),
                    border_style="cyan",
                )
            )
            options_print(
                p for p in self.get_params(ctx) if isinstance(p, click.Option)
            )
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {e}")
