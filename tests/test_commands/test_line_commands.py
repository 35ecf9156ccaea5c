"""
Tests for the parse, expand and run commands.
"""

from typing import Generator
import io
import sys
import pytest
from click.testing import CliRunner
from rich.console import Console
from unittest.mock import patch
from shline.commands import line
from shline.commands.app import cli
from shline.config import settings
from shline.config.settings import config_varsSave
from shline.lib.parser import (
    ChainResolver,
    DisabledResolver,
    EnvResolver,
    PanicResolver,
)
from shline.models.dataModel import ExecResult


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def captured_output() -> Generator[io.StringIO, None, None]:
    output = io.StringIO()
    console = Console(file=output, width=200)
    with patch("shline.commands.line.console", console):
        yield output


def test_cli_registers_commands(runner: CliRunner) -> None:
    for cmd in ["parse", "expand", "run", "var"]:
        assert cmd in cli.commands
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "shline Command Palette" in result.output


def test_parse_table(runner: CliRunner, captured_output: io.StringIO) -> None:
    result = runner.invoke(cli, ["parse", "go ab'c def 'ghi"])
    assert result.exit_code == 0
    output = captured_output.getvalue()
    assert "'c def '" in output
    assert "False" in output
    assert "True" in output


def test_expand_with_overrides(runner: CliRunner) -> None:
    result = runner.invoke(
        cli, ["expand", "--var", "hello=world", "--no-env", 'go "${hello} world" $hello']
    )
    assert result.exit_code == 0
    assert result.output.splitlines() == ["go", "world world", "world"]


def test_expand_unknown_is_empty(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["expand", "--no-env", "a${nope}b"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["ab"]


def test_expand_strict_fails(runner: CliRunner, captured_output: io.StringIO) -> None:
    result = runner.invoke(cli, ["expand", "--no-env", "--strict", "echo ${nope}"])
    assert result.exit_code == 2
    assert "${nope}" in captured_output.getvalue()


def test_expand_disabled(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["expand", "--disabled", "--var", "a=1", "echo $a '${b}'"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["echo", "$a", "${b}"]


def test_expand_uses_stored_vars(runner: CliRunner) -> None:
    config_varsSave({"hello": "stored", "other": "stored-other"})
    result = runner.invoke(
        cli, ["expand", "--no-env", "--var", "hello=override", "$hello $other"]
    )
    assert result.exit_code == 0
    assert result.output.splitlines() == ["override", "stored-other"]


def test_expand_reads_environment(runner: CliRunner, monkeypatch) -> None:
    monkeypatch.setenv("SHLINE_CLI_VAR", "from-env")
    result = runner.invoke(cli, ["expand", "echo $SHLINE_CLI_VAR"])
    assert result.output.splitlines() == ["echo", "from-env"]


def test_bad_var_option(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["expand", "--var", "novalue", "echo"])
    assert result.exit_code != 0
    assert "expected NAME=VALUE" in result.output


def test_resolver_build_variants(monkeypatch) -> None:
    assert isinstance(line.resolver_build({}, disabled=True), DisabledResolver)

    chain = line.resolver_build({"a": "1"})
    assert isinstance(chain, ChainResolver)
    assert isinstance(chain.resolvers[-1], EnvResolver)

    chain = line.resolver_build({}, no_env=True, strict=True)
    assert not any(isinstance(r, EnvResolver) for r in chain.resolvers)
    assert isinstance(chain.resolvers[-1], PanicResolver)

    monkeypatch.setattr(settings.appsettings, "strict", True)
    chain = line.resolver_build({})
    assert isinstance(chain.resolvers[-1], PanicResolver)


def test_run_dry_run(runner: CliRunner) -> None:
    result = runner.invoke(
        cli, ["run", "--dry-run", "--no-env", "--var", "x=a b", "echo ${x} plain"]
    )
    assert result.exit_code == 0
    assert result.output.strip() == 'echo "a b" plain'


def test_run_propagates_exit_code(runner: CliRunner) -> None:
    result = runner.invoke(
        cli,
        ["run", "--no-log", f"'{sys.executable}' -c 'import sys; sys.exit(7)'"],
    )
    assert result.exit_code == 7


def test_run_success(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["run", "--no-log", f"'{sys.executable}' -c pass"])
    assert result.exit_code == 0


def test_run_launch_failure(runner: CliRunner, captured_output: io.StringIO) -> None:
    with patch(
        "shline.commands.line.Sh.exec",
        return_value=ExecResult(exit_code=1, error="No such file or directory"),
    ):
        result = runner.invoke(cli, ["run", "--no-log", "missing-tool"])
    assert result.exit_code == 1
    assert "No such file or directory" in captured_output.getvalue()


def test_run_strict_aborts_before_exec(runner: CliRunner) -> None:
    with patch("shline.lib.sh.subprocess.run") as mock_run:
        result = runner.invoke(cli, ["run", "--no-env", "--strict", "echo ${nope}"])
    assert result.exit_code == 2
    mock_run.assert_not_called()
