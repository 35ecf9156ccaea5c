"""
Tests for the Rich help rendering of groups and commands.
"""

from typing import Generator
import io
import pytest
from click.testing import CliRunner
from rich.console import Console
from unittest.mock import patch
from shline.commands import var
from shline.commands.app import cli
from shline.commands.base import rich_help


@pytest.fixture
def help_output() -> Generator[io.StringIO, None, None]:
    output = io.StringIO()
    with patch("shline.commands.base.console", Console(file=output, width=200)):
        yield output


def test_rich_help_layout() -> None:
    text = rich_help(
        command="expand",
        description="Expand a line.",
        usage="shline expand <line>",
        args={"<line>": "The line."},
    )
    assert text.splitlines()[0] == "[bold cyan]expand[/bold cyan]: Expand a line."
    assert "[green]shline expand <line>[/green]" in text
    assert "[green]<line>[/green]: The line." in text


def test_rich_help_without_arguments() -> None:
    text = rich_help(command="showall", description="List.", usage="shline var showall", args={})
    assert "Arguments" not in text


def test_group_help_lists_commands(help_output: io.StringIO) -> None:
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    output = help_output.getvalue()
    assert "shline Command Palette" in output
    for name in ["parse", "expand", "run", "var"]:
        assert f"- {name}: " in output
    assert "Manage variables" in output


def test_group_help_falls_back_to_help_first_line(help_output: io.StringIO) -> None:
    result = CliRunner().invoke(var.var, ["--help"])
    assert result.exit_code == 0
    output = help_output.getvalue()
    assert "- set: set: " in output
    assert "[bold cyan]" not in output


def test_command_help_lists_options(help_output: io.StringIO) -> None:
    result = CliRunner().invoke(cli, ["run", "--help"])
    assert result.exit_code == 0
    output = help_output.getvalue()
    assert "shline run" in output
    assert "--no-env" in output
    assert "--log, --no-log" in output
    assert "--var" in output


def test_help_rendering_error_is_reported(help_output: io.StringIO) -> None:
    with patch("shline.commands.base.Panel", side_effect=RuntimeError("boom")):
        result = CliRunner().invoke(cli, ["expand", "--help"])
    assert result.exit_code == 0
    assert "Help rendering error: boom" in help_output.getvalue()
