"""
Session configuration.

TerminalOptions collects the knobs a Terminal is built from. Values can be
given directly or picked up from the environment:

    VTLINE_WIDTH, VTLINE_HEIGHT   initial wrapping size
    VTLINE_HISTORY_LIMIT          keep at most this many history entries
    VTLINE_WRITE_LOG              append every byte written to this file
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field

from .keybindings import EditorKeybindingsConfig
from .line import MAX_LINE_LENGTH
from .render import DEFAULT_HEIGHT, DEFAULT_WIDTH

APP_NAME: str = "vtline"
VERSION: str = "0.1.0"

ENV_PREFIX: str = APP_NAME.upper()
ENV_WIDTH: str = f"{ENV_PREFIX}_WIDTH"
ENV_HEIGHT: str = f"{ENV_PREFIX}_HEIGHT"
ENV_HISTORY_LIMIT: str = f"{ENV_PREFIX}_HISTORY_LIMIT"
ENV_WRITE_LOG: str = f"{ENV_PREFIX}_WRITE_LOG"

# Capacity of the buffer holding undecoded input between reads.
INPUT_BUFFER_SIZE = 256


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class TerminalOptions:
    prompt: str = ""
    echo: bool = True
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    max_line_length: int = MAX_LINE_LENGTH
    # None keeps every entry for the lifetime of the session.
    history_limit: int | None = None
    write_log: str = ""
    keybindings: EditorKeybindingsConfig = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Terminal size must be positive, got {self.width}x{self.height}")
        if self.max_line_length < 1:
            raise ValueError(f"max_line_length must be positive, got {self.max_line_length}")
        if self.history_limit is not None and self.history_limit < 1:
            raise ValueError(f"history_limit must be positive, got {self.history_limit}")

    @classmethod
    def from_env(cls, **overrides) -> "TerminalOptions":
        """Build options from VTLINE_* variables; keyword arguments win."""
        values: dict = {
            "width": _env_int(ENV_WIDTH, DEFAULT_WIDTH),
            "height": _env_int(ENV_HEIGHT, DEFAULT_HEIGHT),
            "history_limit": _env_int(ENV_HISTORY_LIMIT, None),
            "write_log": os.environ.get(ENV_WRITE_LOG, ""),
        }
        values.update(overrides)
        return cls(**values)
