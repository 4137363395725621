"""Terminal plumbing: output sink, raw mode, and an async stdin byte source.

Output goes to ``sys.stderr`` so that a program reading lines can still
redirect its standard output. Input is read from stdin through the running
event loop, one chunk at a time, and handed out byte by byte.
"""

from __future__ import annotations

import asyncio
import os
import sys
import termios
import tty
from contextlib import contextmanager
from typing import IO, Iterator, Protocol

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal output."""

    def write(self, data: str) -> None: ...


class ProcessTerminal:
    """Terminal output backed by a text stream, ``sys.stderr`` by default.

    Every write is flushed immediately. If ``PI_READLINE_WRITE_LOG`` names a
    file, everything written is also appended there for debugging.
    """

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._stream = stream
        self._write_log_path: str = os.environ.get("PI_READLINE_WRITE_LOG", "")

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stderr

    def write(self, data: str) -> None:
        stream = self.stream
        stream.write(data)
        stream.flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                pass


# ---------------------------------------------------------------------------
# Raw mode
# ---------------------------------------------------------------------------

_original_termios: list | None = None


def enable_raw_mode(fd: int | None = None) -> None:
    """Put the terminal in raw mode, remembering the previous settings."""
    global _original_termios
    fd = sys.stdin.fileno() if fd is None else fd
    attrs = termios.tcgetattr(fd)
    if _original_termios is None:
        _original_termios = attrs
    tty.setraw(fd)


def disable_raw_mode(fd: int | None = None) -> None:
    """Restore the settings saved by :func:`enable_raw_mode`."""
    global _original_termios
    if _original_termios is None:
        return
    fd = sys.stdin.fileno() if fd is None else fd
    termios.tcsetattr(fd, termios.TCSADRAIN, _original_termios)
    _original_termios = None


@contextmanager
def raw_mode(fd: int | None = None) -> Iterator[None]:
    enable_raw_mode(fd)
    try:
        yield
    finally:
        disable_raw_mode(fd)


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


class StdinReader:
    """Async byte source fed from a file descriptor by the event loop.

    Satisfies :class:`pi.readline.keys.ByteSource`. Call :meth:`start` from
    inside a running loop and :meth:`close` when done.
    """

    def __init__(self, fd: int | None = None, *, chunk_size: int = 4096) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._chunk_size = chunk_size
        self._reader = asyncio.StreamReader()
        self._loop: asyncio.AbstractEventLoop | None = None

    def start(self) -> None:
        if self._loop is not None:
            return
        self._loop = asyncio.get_running_loop()
        self._loop.add_reader(self._fd, self._on_readable)

    def close(self) -> None:
        if self._loop is None:
            return
        self._loop.remove_reader(self._fd)
        self._loop = None

    async def readexactly(self, n: int) -> bytes:
        return await self._reader.readexactly(n)

    def _on_readable(self) -> None:
        try:
            data = os.read(self._fd, self._chunk_size)
        except OSError as exc:
            self.close()
            self._reader.set_exception(exc)
            return

        if not data:
            self.close()
            self._reader.feed_eof()
            return

        self._reader.feed_data(data)
