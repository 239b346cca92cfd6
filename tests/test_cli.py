"""Tests for vtline.cli"""
import contextlib
import os

import pytest
from typer.testing import CliRunner

from vtline import cli
from vtline.terminal import Terminal

runner = CliRunner()


@pytest.fixture
def stdio(monkeypatch, channel):
    """Route the CLI's terminal onto the scripted channel."""

    def from_stdio(cls, prompt=None, echo=None, options=None):
        return Terminal(channel, prompt, echo, options)

    monkeypatch.setattr(cli.Terminal, "from_stdio", classmethod(from_stdio))
    monkeypatch.setattr(cli, "raw_mode", lambda fd: contextlib.nullcontext())
    return channel


class TestRepl:
    def test_echoes_lines_until_eof(self, stdio):
        stdio.feed(b"hi\r", b"\x03", b"\x04")
        result = runner.invoke(cli.app, ["repl", "--prompt", "$ "])
        assert result.exit_code == 0, result.output
        out = stdio.output
        assert b"you typed: 'hi'" in out
        assert b"$ ^C\r\n" in out

    def test_no_args_shows_help(self):
        result = runner.invoke(cli.app, [])
        assert "repl" in result.output
        assert "password" in result.output


class TestPassword:
    def test_reports_length_only(self, stdio):
        stdio.feed(b"hunter2\r")
        result = runner.invoke(cli.app, ["password"])
        assert result.exit_code == 0, result.output
        assert b"hunter2" not in stdio.output
        assert b"read 7 characters" in stdio.output

    def test_interrupt_aborts(self, stdio):
        stdio.feed(b"\x03")
        result = runner.invoke(cli.app, ["password"])
        assert result.exit_code == 1
        assert b"aborted" in stdio.output


class TestRawMode:
    def test_noop_on_non_tty(self):
        r, w = os.pipe()
        try:
            with cli.raw_mode(r):
                pass
        finally:
            os.close(r)
            os.close(w)
