"""
Cursor rendering.

Translates logical cursor offsets into screen rows and columns and produces
the relative movement escapes needed to get there from the current screen
position. All positions are relative to the first cell of the prompt.

Provides:
- cursor_position: (x, y) of an offset for a given prompt length and width
- movement: the escape bytes for a relative move
- RenderState: what the renderer believes is on screen
- CursorRenderer: output queue plus the stateful drawing helpers
"""
from __future__ import annotations

from dataclasses import dataclass

CURSOR_UP = b"\x1b[A"
CURSOR_DOWN = b"\x1b[B"
CURSOR_RIGHT = b"\x1b[C"
CURSOR_LEFT = b"\x1b[D"
CLEAR_LINE_RIGHT = b"\x1b[K"
ERASE_UNDER_CURSOR = b" " + CURSOR_LEFT
CRLF = b"\r\n"

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24


def cursor_position(prompt_len: int, pos: int, width: int) -> tuple[int, int]:
    """Screen (x, y) of logical offset *pos* after a prompt of *prompt_len* bytes."""
    cells = prompt_len + pos
    return cells % width, cells // width


def movement(up: int = 0, down: int = 0, left: int = 0, right: int = 0) -> bytes:
    """One single-cell escape per step: vertical moves first, then horizontal."""
    return (
        CURSOR_UP * up
        + CURSOR_DOWN * down
        + CURSOR_LEFT * left
        + CURSOR_RIGHT * right
    )


@dataclass
class RenderState:
    # Screen cell of the cursor; row 0 is the row the prompt starts on.
    cursor_x: int = 0
    cursor_y: int = 0
    # Highest row drawn for the current entry.
    max_line: int = 0
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    @property
    def at_origin(self) -> bool:
        return self.cursor_x == 0 and self.cursor_y == 0

    def reset(self) -> None:
        self.cursor_x = 0
        self.cursor_y = 0
        self.max_line = 0


class CursorRenderer:
    """
    Accumulates output for one terminal session.

    Nothing here touches the channel: callers drain the queue with take()
    and write it themselves.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> None:
        self.state = RenderState(width=width, height=height)
        self._out = bytearray()

    @property
    def pending(self) -> bytes:
        return bytes(self._out)

    def queue(self, data: bytes) -> None:
        self._out += data

    def take(self) -> bytes:
        """Return and clear everything queued so far."""
        data = bytes(self._out)
        self._out.clear()
        return data

    def move(self, up: int = 0, down: int = 0, left: int = 0, right: int = 0) -> None:
        self.queue(movement(up, down, left, right))

    def move_cursor_to_pos(self, prompt_len: int, pos: int, echo: bool = True) -> None:
        """Queue the moves that put the screen cursor on logical offset *pos*."""
        if not echo:
            return
        st = self.state
        x, y = cursor_position(prompt_len, pos, st.width)
        up = max(0, st.cursor_y - y)
        down = max(0, y - st.cursor_y)
        left = max(0, st.cursor_x - x)
        right = max(0, x - st.cursor_x)
        st.cursor_x = x
        st.cursor_y = y
        self.move(up, down, left, right)

    def write_line(self, data: bytes) -> None:
        """Queue *data* row by row, tracking where the cursor ends up."""
        st = self.state
        while data:
            todo = min(len(data), st.width - st.cursor_x)
            self.queue(data[:todo])
            st.cursor_x += todo
            data = data[todo:]

            if st.cursor_x == st.width:
                # A VT100 holds the cursor on the last column until the next
                # printable byte; move to the next row explicitly.
                self.queue(CRLF)
                st.cursor_x = 0
                st.cursor_y += 1
                if st.cursor_y > st.max_line:
                    st.max_line = st.cursor_y

    def clear_line_to_right(self) -> None:
        self.queue(CLEAR_LINE_RIGHT)

    def erase_rows(self) -> None:
        """Clear every row drawn for the current entry, leaving the cursor at (0, 0)."""
        st = self.state
        # The cursor may sit above the last drawn row after moving left
        # across a wrap; start from the bottom row.
        down = max(0, st.max_line - st.cursor_y)
        self.move(down=down, left=st.cursor_x)
        st.cursor_y += down
        st.cursor_x = 0
        self.clear_line_to_right()

        while st.cursor_y > 0:
            self.move(up=1)
            st.cursor_y -= 1
            self.clear_line_to_right()
        st.max_line = 0

    def set_size(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Terminal size must be positive, got {width}x{height}")
        self.state.width = width
        self.state.height = height
