"""Tests for vtline.history"""
import pytest

from vtline.history import History


def history_of(*lines: bytes, limit=None) -> History:
    h = History(limit)
    for line in lines:
        h.record_submission(line)
    return h


class TestRecord:
    def test_record_appends_copy(self):
        src = bytearray(b"ls")
        h = History()
        h.record_submission(src)
        src[0] = ord("x")
        assert h.entries() == [b"ls"]

    def test_record_moves_cursor_to_end(self):
        h = history_of(b"a", b"b")
        assert h.index == 2

    def test_unbounded_by_default(self):
        h = history_of(*[str(i).encode() for i in range(500)])
        assert len(h) == 500

    def test_limit_drops_oldest(self):
        h = history_of(b"1", b"2", b"3", limit=2)
        assert h.entries() == [b"2", b"3"]
        assert h.index == 2

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            History(0)

    def test_load_replaces_entries(self):
        h = history_of(b"old")
        h.load([b"x", b"y"])
        assert h.entries() == [b"x", b"y"]
        assert h.index == 2
        assert h.recall_up() == b"y"


class TestRecall:
    def test_empty_history(self):
        h = History()
        assert h.recall_up() is None
        assert h.recall_down() is None
        assert h.index == 0

    def test_up_walks_to_oldest_then_clamps(self):
        h = history_of(b"one", b"two", b"three")
        assert h.recall_up() == b"three"
        assert h.recall_up() == b"two"
        assert h.recall_up() == b"one"
        assert h.recall_up() == b"one"
        assert h.index == 0

    def test_down_past_newest_yields_empty_line(self):
        h = history_of(b"one", b"two")
        h.recall_up()
        h.recall_up()
        assert h.recall_down() == b"two"
        assert h.recall_down() == b""
        assert h.recall_down() == b""
        assert h.index == 2

    def test_index_always_in_range(self):
        h = history_of(b"a", b"b", b"c")
        for step in "uuuuudddddduudddd":
            if step == "u":
                h.recall_up()
            else:
                h.recall_down()
            assert 0 <= h.index <= len(h)

    def test_recall_does_not_mutate(self):
        h = history_of(b"a", b"b")
        h.recall_up()
        h.recall_down()
        assert h.entries() == [b"a", b"b"]
