"""
Command history for Up/Down recall.

Entries are stored in submission order and never edited. The traversal index
runs from 0 (oldest entry) to ``len(history)`` (a fresh, empty line).
"""
from __future__ import annotations

from collections.abc import Iterable


class History:
    """Append-only list of submitted lines with a clamped recall cursor."""

    def __init__(self, limit: int | None = None) -> None:
        if limit is not None and limit < 1:
            raise ValueError(f"History limit must be positive, got {limit}")
        self.limit = limit
        self._entries: list[bytes] = []
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, idx: int) -> bytes:
        return self._entries[idx]

    def entries(self) -> list[bytes]:
        return list(self._entries)

    def record_submission(self, line: bytes) -> None:
        """Append a copy of *line* and move the recall cursor past the end."""
        self._entries.append(bytes(line))
        if self.limit is not None and len(self._entries) > self.limit:
            del self._entries[: len(self._entries) - self.limit]
        self.reset_cursor()

    def reset_cursor(self) -> None:
        self._index = len(self._entries)

    def load(self, lines: Iterable[bytes]) -> None:
        """Replace all entries, e.g. with history a caller persisted earlier."""
        self._entries = [bytes(line) for line in lines]
        if self.limit is not None:
            self._entries = self._entries[-self.limit:]
        self.reset_cursor()

    def recall_up(self) -> bytes | None:
        """
        Step towards older entries and return the entry now selected.

        Returns None when there is no history at all. Stepping above the
        oldest entry keeps returning the oldest one.
        """
        if not self._entries:
            return None
        self._index = max(0, min(self._index - 1, len(self._entries) - 1))
        return self._entries[self._index]

    def recall_down(self) -> bytes | None:
        """
        Step towards newer entries.

        Returns None when there is no history at all, and the empty line once
        the cursor moves past the newest entry.
        """
        if not self._entries:
            return None
        self._index = min(self._index + 1, len(self._entries))
        if self._index == len(self._entries):
            return b""
        return self._entries[self._index]
