"""
Command builder for shline.

`Sh` collects everything needed to run a process: the command line, how to
expand variables in it, extra environment variables, the working directory
and where to log the executed command. It is immutable; every setter
returns a new `Sh`, so a base configuration can be shared and specialised
freely:

    base = Sh().env_set({"GOOS": "linux"}).commandLog_set(sys.stderr)
    base.line("go build ./...").must_exec()
    base.line("go test ./...").must_exec()

Features:
- Shell-like command lines with single/double quote grouping
- Variable expansion through a composable Resolver
- Display formatting of the resolved command
- Process execution with exit-code translation
"""

import os
import re
import subprocess
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Final, Optional, Self, TextIO
from shline.lib.log import LOG
from shline.lib.parser import (
    Resolver,
    expand_env,
    expand_map,
    expansion_isDisabled,
    line_fromArgs,
    line_parse,
    line_resolve,
    resolvers_chain,
)
from shline.models.dataModel import CommandSpec, ExecResult, Line

NEEDS_QUOTE: Final[re.Pattern[str]] = re.compile(r"['\" \t\r\n]")

ESCAPES: Final[tuple[tuple[str, str], ...]] = (
    ("\\", "\\\\"),  # must run first
    ("\r", "\\r"),
    ("\n", "\\n"),
    ("\t", "\\t"),
    ('"', '\\"'),
)


class CommandFailed(RuntimeError):
    """Raised by Sh.must_exec when the process does not exit cleanly.

    Attributes:
        result: The ExecResult of the failed run
    """

    def __init__(self: Self, command: str, result: ExecResult) -> None:
        super().__init__(
            f"<{command}> failed: return code={result.exit_code}, error: {result.error}"
        )
        self.result: ExecResult = result


def arg_quote(arg: str) -> str:
    """Quote one resolved argument for display.

    Arguments containing whitespace or quote characters are escaped and
    wrapped in double quotes; empty arguments render as `""`.
    """
    if arg and not NEEDS_QUOTE.search(arg):
        return arg
    for plain, escaped in ESCAPES:
        arg = arg.replace(plain, escaped)
    return f'"{arg}"'


def args_format(args: Iterable[str]) -> str:
    """Render resolved arguments as a single display string."""
    return " ".join(arg_quote(arg) for arg in args)


@dataclass(frozen=True)
class Sh:
    """Immutable process execution settings.

    Attributes:
        args: Tokenized command line
        resolver: Variable source used when expanding `args`
        env: Extra environment variables for the process; also consulted
             first when expanding
        cwd: Working directory for the process
        commandLog: Stream that receives each executed command
        commandLogPrefix: Prefix written before a logged command
    """

    args: Line = ()
    resolver: Resolver = field(default_factory=expand_env)
    env: Optional[Mapping[str, str]] = None
    cwd: Optional[str] = None
    commandLog: Optional[TextIO] = None
    commandLogPrefix: str = ""

    def line(self: Self, command_line: str) -> "Sh":
        """Return a new Sh running `command_line`.

        The line is tokenized like a shell would: single and double quotes
        group arguments, single-quoted text is not expanded.
        """
        return replace(self, args=line_parse(command_line))

    def line_args(self: Self, *args: str) -> "Sh":
        """Return a new Sh running the given, already split, arguments."""
        return replace(self, args=line_fromArgs(*args))

    def expand(self: Self, resolver: Resolver) -> "Sh":
        """Return a new Sh using `resolver` for variable expansion.

        Use expand(expand_disabled()) to turn expansion off.
        """
        return replace(self, resolver=resolver)

    def env_set(self: Self, env: Optional[Mapping[str, str]]) -> "Sh":
        """Return a new Sh passing `env` to the process in addition to os.environ."""
        frozen = MappingProxyType(dict(env)) if env is not None else None
        return replace(self, env=frozen)

    def cwd_set(self: Self, cwd: Optional[str]) -> "Sh":
        """Return a new Sh running the process in `cwd`."""
        return replace(self, cwd=cwd)

    def commandLog_set(self: Self, commandLog: Optional[TextIO]) -> "Sh":
        """Return a new Sh writing each executed command to `commandLog`."""
        return replace(self, commandLog=commandLog)

    def commandLogPrefix_set(self: Self, prefix: str) -> "Sh":
        """Return a new Sh using `prefix` when logging commands."""
        return replace(self, commandLogPrefix=prefix)

    def args_expand(self: Self) -> list[str]:
        """Resolve the command line into plain argument strings.

        When extra env variables are set they take precedence over the
        configured resolver.

        Raises:
            UnresolvedVariableFault: if the resolver aborts a lookup
        """
        resolver: Resolver = self.resolver
        if self.env is not None and not expansion_isDisabled(resolver):
            resolver = resolvers_chain(expand_map(self.env), resolver)
        return line_resolve(self.args, resolver)

    def cmd(self: Self) -> CommandSpec:
        """Collect argv, working directory and environment for the process."""
        environ: dict[str, str] = dict(os.environ)
        if self.env is not None:
            environ.update(self.env)
        return CommandSpec(argv=self.args_expand(), cwd=self.cwd, env=environ)

    def __str__(self: Self) -> str:
        return args_format(self.args_expand())

    def __hash__(self: Self) -> int:
        env = frozenset(self.env.items()) if self.env is not None else None
        return hash(
            (self.args, self.resolver, env, self.cwd, self.commandLog, self.commandLogPrefix)
        )

    def exec(self: Self) -> ExecResult:
        """Run the command with inherited stdio and wait for it.

        Returns:
            ExecResult with the process return code. A command that cannot
            be launched (missing executable, or an argument holding a NUL
            byte) reports exit code 1 and the launch error.
        """
        spec: CommandSpec = self.cmd()
        rendered: str = args_format(spec.argv)
        if self.commandLog is not None:
            print(self.commandLogPrefix, rendered, file=self.commandLog)
        LOG(f"Executing: {rendered}")

        if not spec.argv:
            return ExecResult(exit_code=1, error="no command to execute")

        try:
            completed = subprocess.run(
                spec.argv, cwd=spec.cwd, env=spec.env, check=False
            )
        except (OSError, ValueError) as e:
            LOG(f"Could not launch {spec.argv[0]}: {e}")
            return ExecResult(exit_code=1, error=str(e))

        if completed.returncode != 0:
            return ExecResult(
                exit_code=completed.returncode,
                error=f"exit status {completed.returncode}",
            )
        return ExecResult(exit_code=0)

    def must_exec(self: Self) -> None:
        """Run the command, raising if it does not exit with code 0.

        Raises:
            CommandFailed: on a non-zero exit code or launch failure
        """
        result: ExecResult = self.exec()
        if result.exit_code != 0:
            raise CommandFailed(str(self), result)
