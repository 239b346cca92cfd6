"""
Byte channels a Terminal can run on.

Provides:
- Channel: protocol for any duplex byte stream
- StreamChannel: joins a separate binary reader and writer
- ProcessChannel: unbuffered reads and writes on raw file descriptors
- WriteLog: appends everything written to a file, for debugging

None of these change terminal modes. A channel backed by a real tty must
already be in raw mode (no line buffering, no local echo).
"""
from __future__ import annotations

import logging
import os
from typing import BinaryIO, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Channel(Protocol):
    """
    Minimal duplex byte stream.

    ``read`` blocks until at least one byte is available and returns at most
    *size* bytes; an empty result means the stream has ended. Errors are
    raised as exceptions.
    """

    def read(self, size: int) -> bytes:
        ...

    def write(self, data: bytes) -> int | None:
        ...


class StreamChannel:
    """Channel built from a binary reader and a binary writer."""

    def __init__(self, reader: BinaryIO, writer: BinaryIO) -> None:
        self._reader = reader
        self._writer = writer

    def read(self, size: int) -> bytes:
        read1 = getattr(self._reader, "read1", None)
        if read1 is not None:
            return read1(size)
        return self._reader.read(size)

    def write(self, data: bytes) -> int:
        n = self._writer.write(data)
        self._writer.flush()
        return len(data) if n is None else n


class ProcessChannel:
    """
    Channel over file descriptors, by default the process's stdin/stdout.

    Reads go straight to os.read so nothing is held back in a Python-level
    buffer.
    """

    def __init__(self, stdin_fd: int = 0, stdout_fd: int = 1) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd

    def read(self, size: int) -> bytes:
        return os.read(self.stdin_fd, size)

    def write(self, data: bytes) -> int:
        view = memoryview(data)
        while view:
            n = os.write(self.stdout_fd, view)
            view = view[n:]
        return len(data)


class WriteLog:
    """Appends written bytes to *path*; a falsy path disables it."""

    def __init__(self, path: str = "") -> None:
        self.path = path

    def append(self, data: bytes) -> None:
        if not self.path or not data:
            return
        try:
            with open(self.path, "ab") as f:
                f.write(data)
        except OSError as exc:
            logger.warning("Cannot append to write log %s: %s", self.path, exc)
