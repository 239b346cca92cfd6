"""
Colour escape codes.

Callers write these into their output (for example through Terminal.write)
to style text. The table is built once and shared read-only by every
terminal session.
"""
from __future__ import annotations

from dataclasses import dataclass

ESC = b"\x1b"


@dataclass(frozen=True)
class EscapeCodes:
    """Foreground colours plus the attribute reset sequence."""

    black: bytes = b""
    red: bytes = b""
    green: bytes = b""
    yellow: bytes = b""
    blue: bytes = b""
    magenta: bytes = b""
    cyan: bytes = b""
    white: bytes = b""

    reset: bytes = b""

    def colorize(self, text: bytes, color: str) -> bytes:
        """Wrap *text* in the named colour and a trailing reset."""
        try:
            code = getattr(self, color)
        except AttributeError:
            raise ValueError(f"Unknown colour: {color!r}") from None
        if color == "reset" or not isinstance(code, bytes):
            raise ValueError(f"Unknown colour: {color!r}")
        return code + text + self.reset


VT100_ESCAPE_CODES = EscapeCodes(
    black=ESC + b"[30m",
    red=ESC + b"[31m",
    green=ESC + b"[32m",
    yellow=ESC + b"[33m",
    blue=ESC + b"[34m",
    magenta=ESC + b"[35m",
    cyan=ESC + b"[36m",
    white=ESC + b"[37m",
    reset=ESC + b"[0m",
)

# Terminals without colour support can be given this instead.
NO_ESCAPE_CODES = EscapeCodes()
