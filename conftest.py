"""
Root conftest.py — shared fixtures for driving a Terminal in tests.

Fixtures:
  channel      — ScriptedChannel: scripted input chunks, captured output
  make_channel — the ScriptedChannel class, for tests needing several
  screen       — render captured output on a pyte VT100 screen

Markers:
  @pytest.mark.threaded — test drives the terminal from more than one thread
"""
from __future__ import annotations

import threading
from collections import deque

import pyte
import pytest


# ---------------------------------------------------------------------------
# Scripted duplex channel
# ---------------------------------------------------------------------------

class ScriptedChannel:
    """
    In-memory channel. Reads hand out queued chunks (blocking until one is
    fed); None marks end-of-stream and an exception instance is raised.
    """

    def __init__(self, read_timeout: float = 5.0) -> None:
        self._cond = threading.Condition()
        self._pending: deque = deque()
        self._output = bytearray()
        self._read_timeout = read_timeout
        self.read_calls = 0
        self.read_sizes: list[int] = []

    def feed(self, *chunks: bytes) -> None:
        with self._cond:
            self._pending.extend(chunks)
            self._cond.notify_all()

    def close(self) -> None:
        self.feed(None)

    def fail(self, exc: BaseException) -> None:
        self.feed(exc)

    def read(self, size: int) -> bytes:
        with self._cond:
            self.read_calls += 1
            self.read_sizes.append(size)
            self._cond.notify_all()
            if not self._cond.wait_for(lambda: self._pending, timeout=self._read_timeout):
                raise TimeoutError("test channel has no more input")
            item = self._pending[0]
            if item is None:
                return b""
            if isinstance(item, BaseException):
                self._pending.popleft()
                raise item
            chunk = item[:size]
            if len(item) > size:
                self._pending[0] = item[size:]
            else:
                self._pending.popleft()
            return chunk

    def write(self, data: bytes) -> int:
        with self._cond:
            self._output += data
            self._cond.notify_all()
        return len(data)

    def wait_for_reads(self, count: int, timeout: float = 5.0) -> bool:
        """Wait until read() has been entered at least *count* times."""
        with self._cond:
            return self._cond.wait_for(lambda: self.read_calls >= count, timeout=timeout)

    @property
    def output(self) -> bytes:
        with self._cond:
            return bytes(self._output)

    def take_output(self) -> bytes:
        with self._cond:
            data = bytes(self._output)
            self._output.clear()
            return data


def render_screen(data: bytes, width: int = 80, height: int = 24) -> pyte.Screen:
    """Feed *data* through a VT100 emulator and return the resulting screen."""
    screen = pyte.Screen(width, height)
    stream = pyte.ByteStream(screen)
    stream.feed(data)
    return screen


@pytest.fixture
def channel() -> ScriptedChannel:
    return ScriptedChannel()


@pytest.fixture
def make_channel():
    return ScriptedChannel


@pytest.fixture
def screen():
    return render_screen


# ---------------------------------------------------------------------------
# Custom markers
# ---------------------------------------------------------------------------

def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "threaded: test drives the terminal from more than one thread",
    )
