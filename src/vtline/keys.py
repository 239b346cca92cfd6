"""
Keyboard input decoding for VT100-compatible peers.

Turns a window of raw input bytes into one logical key at a time. Partial
escape sequences are reported as incomplete so the caller can keep them in a
remainder buffer and retry once more bytes arrive.

API:
- bytes_to_key(data) — decode one key, returning (key, rest)
- parse_key(key) — readable identifier for a key code ("enter", "up", ...)
- key_id_to_code(key_id) — inverse of parse_key
- matches_key(key, key_id) — check if a key code matches an identifier
- is_printable(key) — whether a key inserts itself into the line
- Key — codes for the control and special keys
"""
from __future__ import annotations

from enum import IntEnum

KeyId = str


class Key(IntEnum):
    """Key codes. Plain bytes decode to their own value (0-255)."""

    CTRL_C = 3
    CTRL_D = 4
    TAB = 9
    ENTER = 13
    ESCAPE = 27
    BACKSPACE = 127

    # Special keys live above the byte range
    UNKNOWN = 256
    LEFT = 257
    UP = 258
    RIGHT = 259
    DOWN = 260
    ALT_LEFT = 261
    ALT_RIGHT = 262


_ESC = Key.ESCAPE

_ARROW_KEYS: dict[int, Key] = {
    ord("A"): Key.UP,
    ord("B"): Key.DOWN,
    ord("C"): Key.RIGHT,
    ord("D"): Key.LEFT,
}

_ALT_ARROW_PREFIX = b"\x1b[1;3"
_ALT_ARROW_KEYS: dict[int, Key] = {
    ord("C"): Key.ALT_RIGHT,
    ord("D"): Key.ALT_LEFT,
}


def _is_ascii_letter(b: int) -> bool:
    return ord("a") <= b <= ord("z") or ord("A") <= b <= ord("Z")


def bytes_to_key(data: bytes) -> tuple[int | None, bytes]:
    """
    Decode a single key from the front of *data*.

    Returns ``(key, rest)`` when a key was recognised, ``(None, data)`` when
    *data* starts with an escape sequence that is not finished yet, and
    ``(None, b"")`` for empty input.
    """
    if not data:
        return None, b""

    if data[0] != _ESC:
        return data[0], data[1:]

    if len(data) >= 3 and data[1] == ord("["):
        key = _ARROW_KEYS.get(data[2])
        if key is not None:
            return key, data[3:]

    if len(data) >= 6 and data.startswith(_ALT_ARROW_PREFIX):
        key = _ALT_ARROW_KEYS.get(data[5])
        if key is not None:
            return key, data[6:]

    # Unrecognised or partial sequence. Without a full table of sequences the
    # best available terminator is the first ASCII letter.
    for i, b in enumerate(data):
        if _is_ascii_letter(b):
            return Key.UNKNOWN, data[i + 1:]

    return None, data


def is_printable(key: int) -> bool:
    return 32 <= key < 127


# ─────────────────────────────────────────────────────────────────────────────
# Key identifiers
# ─────────────────────────────────────────────────────────────────────────────

_NAMED_KEYS: dict[KeyId, int] = {
    "enter": Key.ENTER,
    "tab": Key.TAB,
    "escape": Key.ESCAPE,
    "backspace": Key.BACKSPACE,
    "space": 32,
    "up": Key.UP,
    "down": Key.DOWN,
    "left": Key.LEFT,
    "right": Key.RIGHT,
    "alt+left": Key.ALT_LEFT,
    "alt+right": Key.ALT_RIGHT,
    "unknown": Key.UNKNOWN,
}

_NAMES_BY_CODE: dict[int, KeyId] = {code: name for name, code in _NAMED_KEYS.items()}


def key_id_to_code(key_id: KeyId) -> int:
    """
    Resolve a key identifier such as ``"ctrl+c"``, ``"up"`` or ``"x"``.

    Raises ValueError for identifiers that do not name a decodable key.
    """
    normalized = key_id if len(key_id) == 1 else key_id.lower()
    if normalized in _NAMED_KEYS:
        return _NAMED_KEYS[normalized]
    if len(normalized) == 1:
        return ord(normalized)
    if normalized.startswith("ctrl+") and len(normalized) == 6:
        letter = normalized[5]
        if "a" <= letter <= "z":
            return ord(letter) & 0x1F
    raise ValueError(f"Unknown key identifier: {key_id!r}")


def parse_key(key: int) -> KeyId:
    """Return a readable identifier for a decoded key code."""
    name = _NAMES_BY_CODE.get(key)
    if name is not None:
        return name
    if 1 <= key <= 26:
        return f"ctrl+{chr(key + ord('a') - 1)}"
    if is_printable(key):
        return chr(key)
    return f"0x{key:02x}"


def matches_key(key: int, key_id: KeyId) -> bool:
    """Check if a decoded key code matches *key_id*."""
    try:
        return key == key_id_to_code(key_id)
    except ValueError:
        return False
