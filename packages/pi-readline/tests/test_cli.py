"""Tests for the pi-readline command line entry point."""

from __future__ import annotations

from click.testing import CliRunner

from pi.readline.cli import main


def test_help() -> None:
    result = CliRunner().invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "--history" in result.output
    assert "--no-history" in result.output


def test_refuses_non_terminal_stdin() -> None:
    result = CliRunner().invoke(main, ["--no-history"], input="hello\r")
    assert result.exit_code == 1
    assert "not a terminal" in result.output
