"""EditableLine — the byte buffer being edited and its logical cursor."""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

MAX_LINE_LENGTH = 4096


class EditableLine:
    """
    Single-line byte buffer with a cursor offset in ``[0, len(line)]``.

    Offsets are byte offsets; no attempt is made to keep multi-byte
    characters together. Operations that would move past a boundary or grow
    the line beyond ``max_length`` do nothing and return False.
    """

    def __init__(self, max_length: int = MAX_LINE_LENGTH) -> None:
        self.max_length = max_length
        self._buf = bytearray()
        self._pos = 0

    @property
    def value(self) -> bytes:
        return bytes(self._buf)

    @property
    def pos(self) -> int:
        return self._pos

    def __len__(self) -> int:
        return len(self._buf)

    def tail(self) -> bytes:
        """Bytes from the cursor to the end of the line."""
        return bytes(self._buf[self._pos:])

    def insert(self, byte: int) -> bool:
        if len(self._buf) >= self.max_length:
            logger.debug("Line is at its %d byte limit, dropping input", self.max_length)
            return False
        self._buf.insert(self._pos, byte)
        self._pos += 1
        return True

    def insert_bytes(self, data: bytes) -> bool:
        """Insert *data* at the cursor; all or nothing with respect to the length limit."""
        if len(self._buf) + len(data) > self.max_length:
            logger.debug("Line is at its %d byte limit, dropping input", self.max_length)
            return False
        self._buf[self._pos:self._pos] = data
        self._pos += len(data)
        return True

    def delete_before(self) -> bool:
        if self._pos == 0:
            return False
        self._pos -= 1
        del self._buf[self._pos]
        return True

    def move_left(self) -> bool:
        if self._pos == 0:
            return False
        self._pos -= 1
        return True

    def move_right(self) -> bool:
        if self._pos == len(self._buf):
            return False
        self._pos += 1
        return True

    def move_to(self, pos: int) -> bool:
        pos = max(0, min(pos, len(self._buf)))
        if pos == self._pos:
            return False
        self._pos = pos
        return True

    def word_left(self) -> bool:
        """Move to the start of the previous space-delimited word."""
        if self._pos == 0:
            return False
        buf = self._buf
        pos = self._pos - 1
        while pos > 0 and buf[pos] == 0x20:
            pos -= 1
        while pos > 0:
            if buf[pos] == 0x20:
                pos += 1
                break
            pos -= 1
        self._pos = pos
        return True

    def word_right(self) -> bool:
        """Move past the current word and the spaces after it."""
        buf = self._buf
        pos = self._pos
        while pos < len(buf) and buf[pos] != 0x20:
            pos += 1
        while pos < len(buf) and buf[pos] == 0x20:
            pos += 1
        if pos == self._pos:
            return False
        self._pos = pos
        return True

    def replace(self, data: bytes, pos: int) -> None:
        """Swap in a whole new line and cursor; *pos* is clamped into range."""
        self._buf = bytearray(data[:self.max_length])
        self._pos = max(0, min(pos, len(self._buf)))

    def clear(self) -> None:
        self._buf = bytearray()
        self._pos = 0
