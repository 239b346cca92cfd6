"""
Demo CLI — example callers of the line editor on the local terminal.

    vtline repl --prompt "> " --ticker 2
    vtline password
"""
from __future__ import annotations

import contextlib
import logging
import os
import threading
import time
from typing import Iterator, Optional

import typer

from .config import TerminalOptions
from .errors import LineInterrupted
from .terminal import Terminal

logger = logging.getLogger(__name__)

STDIN_FD = 0
STDOUT_FD = 1

app = typer.Typer(
    name="vtline",
    help="Line editing on a raw VT100 terminal",
    no_args_is_help=True,
)


@contextlib.contextmanager
def raw_mode(fd: int) -> Iterator[None]:
    """Put *fd* in raw mode for the duration; no-op when it is not a tty."""
    if not os.isatty(fd):
        yield
        return

    import termios
    import tty

    old = termios.tcgetattr(fd)
    tty.setraw(fd)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _configure_logging(log_file: Optional[str]) -> None:
    # Log records written to the raw terminal would corrupt the display.
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def _options() -> TerminalOptions:
    opts = TerminalOptions.from_env()
    with contextlib.suppress(OSError):
        size = os.get_terminal_size(STDOUT_FD)
        opts.width, opts.height = size.columns, size.lines
    return opts


def _start_ticker(term: Terminal, interval: float, stop: threading.Event) -> threading.Thread:
    def _tick() -> None:
        while not stop.wait(interval):
            stamp = term.escape.colorize(time.strftime("%H:%M:%S").encode(), "cyan")
            term.write(b"[" + stamp + b"] tick\r\n")

    t = threading.Thread(target=_tick, daemon=True)
    t.start()
    return t


@app.command()
def repl(
    prompt: str = typer.Option("> ", "--prompt", "-p", help="Prompt shown before each line"),
    ticker: float = typer.Option(0.0, "--ticker", help="Write a timestamp every N seconds while editing"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write debug logs to this file"),
) -> None:
    """Echo each entered line until Ctrl-D."""
    _configure_logging(log_file)
    term = Terminal.from_stdio(prompt=prompt, options=_options())
    stop = threading.Event()

    with raw_mode(STDIN_FD):
        if ticker > 0:
            _start_ticker(term, ticker, stop)
        try:
            while True:
                try:
                    line = term.read_line()
                except LineInterrupted:
                    continue
                except EOFError:
                    break
                term.write(f"you typed: {line!r}\r\n")
        finally:
            stop.set()
    logger.debug("History at exit: %s", term.get_history())


@app.command()
def password(
    prompt: str = typer.Option("Password: ", "--prompt", "-p", help="Prompt shown before the password"),
) -> None:
    """Read one password without echo and report its length."""
    term = Terminal.from_stdio(options=_options())
    with raw_mode(STDIN_FD):
        try:
            secret = term.read_password(prompt)
        except (EOFError, LineInterrupted):
            term.write("aborted\r\n")
            raise typer.Exit(code=1)
        term.write(f"read {len(secret)} characters\r\n")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
