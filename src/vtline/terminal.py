"""
Terminal — readline-style line editing over a raw duplex byte channel.

The Terminal owns the line being edited, the history, the render state and
the undecoded input remainder, all guarded by one lock. Two kinds of callers
compete for it:

- read_line / read_password, which decode keys and edit the line
- write, which injects output from other threads while a read is pending

The lock is released only while blocked on channel.read and while the
autocomplete callback runs, so write never waits on the user typing.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Callable

from .channel import Channel, ProcessChannel, WriteLog
from .config import INPUT_BUFFER_SIZE, TerminalOptions
from .errors import BREAK_TEXT, LineInterrupted
from .escape_codes import VT100_ESCAPE_CODES, EscapeCodes
from .history import History
from .keybindings import EditorKeybindingsManager, get_editor_keybindings
from .keys import Key, bytes_to_key, is_printable, parse_key
from .line import EditableLine
from .render import CRLF, ERASE_UNDER_CURSOR, CursorRenderer

logger = logging.getLogger(__name__)

# Called with (line, cursor offset, key). Returning (new_line, new_pos)
# replaces the line; returning None lets the key be handled normally.
AutocompleteCallback = Callable[[bytes, int, int], "tuple[bytes, int] | None"]

_EXIT_TEXT = b"exit"


def _to_bytes(text: str | bytes) -> bytes:
    return text.encode("utf-8") if isinstance(text, str) else bytes(text)


class Terminal:
    """
    VT100 line editor running on *channel*.

    If the channel is a local tty it must already be in raw mode. The prompt
    is written at the start of each input line (e.g. ``"> "``).
    """

    def __init__(
        self,
        channel: Channel,
        prompt: str | bytes | None = None,
        echo: bool | None = None,
        options: TerminalOptions | None = None,
    ) -> None:
        opts = options or TerminalOptions()

        self.autocomplete_callback: AutocompleteCallback | None = None
        self.escape: EscapeCodes = VT100_ESCAPE_CODES
        self.keybindings = (
            EditorKeybindingsManager(opts.keybindings) if opts.keybindings else get_editor_keybindings()
        )

        self._lock = threading.Lock()
        self._channel = channel
        self._write_log = WriteLog(opts.write_log)

        self._prompt = _to_bytes(opts.prompt if prompt is None else prompt)
        self._echo = opts.echo if echo is None else echo

        self._line = EditableLine(opts.max_line_length)
        self._history = History(opts.history_limit)
        self._render = CursorRenderer(opts.width, opts.height)
        # Partial key sequence left over from the previous read.
        self._remainder = b""

    @classmethod
    def from_stdio(
        cls,
        prompt: str | bytes | None = None,
        echo: bool | None = None,
        options: TerminalOptions | None = None,
    ) -> "Terminal":
        """Terminal on the process's stdin/stdout file descriptors."""
        return cls(ProcessChannel(), prompt, echo, options)

    # ─── Public operations ──────────────────────────────────────────────────

    def read_line(self) -> str:
        """
        Block until the user submits a line and return it.

        Raises EOFError on Ctrl-D with an empty line or when the channel
        reaches end-of-stream, and LineInterrupted on Ctrl-C. Errors from the
        channel propagate unchanged.
        """
        with self._lock:
            return self._read_line()

    def read_password(self, prompt: str | bytes) -> str:
        """Read a line without echo, using *prompt* for this line only."""
        with self._lock:
            old_prompt, old_echo = self._prompt, self._echo
            self._prompt = _to_bytes(prompt)
            self._echo = False
            try:
                return self._read_line()
            finally:
                self._prompt, self._echo = old_prompt, old_echo

    def write(self, data: str | bytes) -> int:
        """Write *data* to the peer, redrawing any prompt and partial line below it."""
        data = _to_bytes(data)
        with self._lock:
            st = self._render.state
            if st.at_origin:
                # Nothing on screen to move out of the way.
                self._flush()
                return self._channel_write(data)

            self._render.erase_rows()
            self._flush()
            n = self._channel_write(data)

            self._render.write_line(self._prompt)
            if self._echo:
                self._render.write_line(self._line.value)
            self._move_cursor(self._line.pos)
            self._flush()
            return n

    def set_prompt(self, prompt: str | bytes) -> None:
        """Set the prompt used when reading subsequent lines."""
        with self._lock:
            self._prompt = _to_bytes(prompt)

    def set_size(self, width: int, height: int) -> None:
        with self._lock:
            self._render.set_size(width, height)

    def set_history(self, lines: Iterable[str | bytes]) -> None:
        """Replace the history, e.g. with lines saved from an earlier session."""
        with self._lock:
            self._history.load(_to_bytes(line) for line in lines)

    def get_history(self) -> list[str]:
        with self._lock:
            return [entry.decode("utf-8", errors="replace") for entry in self._history.entries()]

    @property
    def prompt(self) -> str:
        return self._prompt.decode("utf-8", errors="replace")

    @property
    def echo(self) -> bool:
        return self._echo

    # ─── Read loop ──────────────────────────────────────────────────────────

    def _read_line(self) -> str:
        # self._lock must be held
        if self._render.state.at_origin:
            self._render.write_line(self._prompt)
            self._flush()

        while True:
            action: str | None = None
            submitted: bytes | None = None
            try:
                while submitted is None:
                    key, rest = bytes_to_key(self._remainder)
                    if key is None:
                        break
                    # Consumed before handling: the autocomplete callback
                    # releases the lock and may raise.
                    self._remainder = rest
                    action = self.keybindings.action_for(key)
                    submitted = self._handle_key(key, action)
            finally:
                self._flush()

            if submitted is not None:
                if action == "endOfInput":
                    raise EOFError("end of input")
                if action == "interrupt":
                    self._remainder = b""
                    raise LineInterrupted(BREAK_TEXT)
                if self._echo:
                    # Passwords never go into history.
                    self._history.record_submission(submitted)
                return submitted.decode("utf-8", errors="replace")

            if len(self._remainder) >= INPUT_BUFFER_SIZE:
                logger.debug("Dropping %d bytes of unterminated escape sequence", len(self._remainder))
                self._remainder = b""

            self._lock.release()
            try:
                data = self._channel.read(INPUT_BUFFER_SIZE - len(self._remainder))
            finally:
                self._lock.acquire()

            if not data:
                raise EOFError("channel closed")
            self._remainder += data

    # ─── Key handling ───────────────────────────────────────────────────────

    def _handle_key(self, key: int, action: str | None) -> bytes | None:
        """Apply one key to the line; returns the line when it was submitted."""
        line = self._line

        if action == "deleteCharBackward":
            if not line.delete_before():
                return None
            self._move_cursor(line.pos)
            if self._echo:
                self._render.write_line(line.tail())
                self._render.queue(ERASE_UNDER_CURSOR)
            self._move_cursor(line.pos)
        elif action == "cursorLeft":
            if line.move_left():
                self._move_cursor(line.pos)
        elif action == "cursorRight":
            if line.move_right():
                self._move_cursor(line.pos)
        elif action == "cursorWordLeft":
            if line.word_left():
                self._move_cursor(line.pos)
        elif action == "cursorWordRight":
            if line.word_right():
                self._move_cursor(line.pos)
        elif action == "cursorLineStart":
            if line.move_to(0):
                self._move_cursor(line.pos)
        elif action == "cursorLineEnd":
            if line.move_to(len(line)):
                self._move_cursor(line.pos)
        elif action == "historyPrevious":
            entry = self._history.recall_up()
            if entry is not None:
                self._set_line(entry, len(entry))
        elif action == "historyNext":
            entry = self._history.recall_down()
            if entry is not None:
                self._set_line(entry, len(entry))
        elif action == "submit":
            self._move_cursor(len(line))
            return self._finish_entry()
        elif action == "endOfInput":
            if len(line) > 0:
                return None
            line.insert_bytes(_EXIT_TEXT)
            if self._echo:
                self._render.write_line(_EXIT_TEXT)
            self._move_cursor(line.pos)
            return self._finish_entry()
        elif action == "interrupt":
            line.move_to(len(line))
            self._move_cursor(line.pos)
            if line.insert_bytes(BREAK_TEXT.encode()) and self._echo:
                self._render.write_line(BREAK_TEXT.encode())
            self._move_cursor(line.pos)
            return self._finish_entry()
        else:
            self._insert_key(key)
        return None

    def _insert_key(self, key: int) -> None:
        callback = self.autocomplete_callback
        if callback is not None:
            replacement = self._run_autocomplete(callback, key)
            if replacement is not None:
                new_line, new_pos = replacement
                self._set_line(new_line, new_pos)
                return

        if not is_printable(key):
            if key == Key.UNKNOWN:
                logger.debug("Ignoring unrecognised escape sequence")
            else:
                logger.debug("Ignoring unbound key %s", parse_key(key))
            return

        line = self._line
        if not line.insert(key):
            return
        if self._echo:
            self._render.write_line(line.value[line.pos - 1:])
        self._move_cursor(line.pos)

    def _run_autocomplete(self, callback: AutocompleteCallback, key: int) -> tuple[bytes, int] | None:
        snapshot = (self._line.value, self._line.pos)

        # The callback may call write(); it must not run under the lock.
        self._flush()
        self._lock.release()
        try:
            result = callback(snapshot[0], snapshot[1], int(key))
        finally:
            self._lock.acquire()

        if result is None:
            return None
        if (self._line.value, self._line.pos) != snapshot:
            logger.debug("Line changed while autocomplete ran, discarding its replacement")
            return None
        new_line, new_pos = result
        return _to_bytes(new_line), new_pos

    def _finish_entry(self) -> bytes:
        """End the current entry: newline, empty line, render state back at the origin."""
        self._render.queue(CRLF)
        value = self._line.value
        self._line.clear()
        self._render.state.reset()
        self._history.reset_cursor()
        return value

    # ─── Rendering helpers ──────────────────────────────────────────────────

    def _set_line(self, new_line: bytes, new_pos: int) -> None:
        """Replace the whole line, overwriting what was drawn before."""
        old_len = len(self._line)
        self._line.replace(new_line, new_pos)
        if self._echo:
            self._move_cursor(0)
            self._render.write_line(self._line.value)
            excess = old_len - len(self._line)
            if excess > 0:
                self._render.write_line(b" " * excess)
            self._move_cursor(self._line.pos)

    def _move_cursor(self, pos: int) -> None:
        self._render.move_cursor_to_pos(len(self._prompt), pos, self._echo)

    def _channel_write(self, data: bytes) -> int:
        n = self._channel.write(data)
        self._write_log.append(data)
        return len(data) if n is None else n

    def _flush(self) -> None:
        data = self._render.take()
        if data:
            self._channel_write(data)
