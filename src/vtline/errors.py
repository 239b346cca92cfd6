"""Exceptions raised while reading a line."""
from __future__ import annotations

BREAK_TEXT = "^C"


class LineInterrupted(Exception):
    """
    The user pressed the break key (Ctrl-C) while editing.

    ``text`` holds what the break echoed on screen, always ``"^C"``.
    End-of-input is reported with the builtin EOFError instead.
    """

    def __init__(self, text: str = BREAK_TEXT) -> None:
        super().__init__("control-c break")
        self.text = text
