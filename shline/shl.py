"""
shline Main Module.

This module serves as the main entry point for shline, a helper that turns
shell-like command lines into process arguments without invoking a shell.

Features:
- Tokenizes command lines with single/double quote grouping
- Expands ${name} and $name references from overrides, stored variables
  and the process environment
- Runs the resulting command and propagates its exit code
- Handles graceful termination on user interruption

Examples:
    Show the tokens of a line:
        $ shline parse "go ab'c def 'ghi"

    Expand against an override:
        $ shline expand --var hello=world 'echo "${hello} there"'

    Run, failing on unknown variables:
        $ shline run --strict 'ls -la ${HOME}'
"""

import signal
import sys
from types import FrameType
from typing import Final, Optional, Sequence
from rich.console import Console
from shline.commands.app import cli
from shline.lib.log import LOG

__version__: Final[str] = "0.1.0"

console: Final[Console] = Console()


def signal_handle(sig: int, frame: Optional[FrameType]) -> None:
    """Signal handler for graceful interruption.

    Args:
        sig: Signal number
        frame: Current stack frame
    """
    console.print("\n[bold cyan]Interrupted by user. Exiting.[/bold cyan]")
    sys.exit(130)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the shline CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    signal.signal(signal.SIGINT, signal_handle)
    args: list[str] = list(argv) if argv is not None else sys.argv[1:]

    try:
        cli.main(args=args, prog_name="shline", standalone_mode=True)
    except SystemExit as e:
        code = e.code
        if code is None:
            return 0
        return code if isinstance(code, int) else 1
    except Exception as e:
        LOG(f"Unhandled exception in main: {e}")
        console.print(f"[bold red]An unexpected error occurred: {e}[/bold red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
