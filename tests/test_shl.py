"""Tests for the shline entry point."""

import pytest
from unittest.mock import patch
from shline.shl import __version__, main


@pytest.fixture(autouse=True)
def keep_sigint():
    """main() installs a SIGINT handler; keep pytest's own."""
    with patch("shline.shl.signal.signal") as mock_signal:
        yield mock_signal


def test_main_installs_signal_handler(keep_sigint):
    main(["--help"])
    keep_sigint.assert_called_once()


def test_main_expand(capsys):
    assert main(["expand", "--no-env", "--var", "a=1", "x$a '$a'"]) == 0
    assert capsys.readouterr().out.splitlines() == ["x1", "$a"]


def test_main_strict_exit_code():
    assert main(["expand", "--no-env", "--strict", "${missing}"]) == 2


def test_main_usage_error():
    assert main(["no-such-command"]) == 2


def test_main_version(capsys):
    assert main(["--version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_main_unexpected_error(capsys):
    with patch("shline.shl.cli.main", side_effect=RuntimeError("kaboom")):
        assert main(["expand", "x"]) == 1
    assert "kaboom" in capsys.readouterr().out
