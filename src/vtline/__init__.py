"""
vtline — readline-style line editing for raw VT100 byte channels.

Renders a prompt, edits a single line in place, recalls history, reads
passwords without echo, and lets other threads write output without
corrupting the line being typed.
"""
from .channel import Channel, ProcessChannel, StreamChannel, WriteLog
from .config import INPUT_BUFFER_SIZE, VERSION, TerminalOptions
from .errors import BREAK_TEXT, LineInterrupted
from .escape_codes import NO_ESCAPE_CODES, VT100_ESCAPE_CODES, EscapeCodes
from .history import History
from .keybindings import (
    DEFAULT_EDITOR_KEYBINDINGS,
    EditorAction,
    EditorKeybindingsManager,
    get_editor_keybindings,
    set_editor_keybindings,
)
from .keys import Key, bytes_to_key, is_printable, key_id_to_code, matches_key, parse_key
from .line import MAX_LINE_LENGTH, EditableLine
from .render import CursorRenderer, RenderState, cursor_position, movement
from .terminal import AutocompleteCallback, Terminal

__version__ = VERSION

__all__ = [
    # channel
    "Channel",
    "ProcessChannel",
    "StreamChannel",
    "WriteLog",
    # config
    "INPUT_BUFFER_SIZE",
    "TerminalOptions",
    # errors
    "BREAK_TEXT",
    "LineInterrupted",
    # escape codes
    "EscapeCodes",
    "NO_ESCAPE_CODES",
    "VT100_ESCAPE_CODES",
    # history
    "History",
    # keybindings
    "DEFAULT_EDITOR_KEYBINDINGS",
    "EditorAction",
    "EditorKeybindingsManager",
    "get_editor_keybindings",
    "set_editor_keybindings",
    # keys
    "Key",
    "bytes_to_key",
    "is_printable",
    "key_id_to_code",
    "matches_key",
    "parse_key",
    # line
    "EditableLine",
    "MAX_LINE_LENGTH",
    # render
    "CursorRenderer",
    "RenderState",
    "cursor_position",
    "movement",
    # terminal
    "AutocompleteCallback",
    "Terminal",
]
