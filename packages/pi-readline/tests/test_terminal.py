"""Tests for pi.readline.terminal -- output sink and stdin byte source."""

from __future__ import annotations

import asyncio
import io
import os
from pathlib import Path

import pytest

from pi.readline.errors import ReadError
from pi.readline.keys import KeyDecoder, KeyEvent, read_key
from pi.readline.terminal import ProcessTerminal, StdinReader, disable_raw_mode


class TestProcessTerminal:
    def test_writes_to_given_stream(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PI_READLINE_WRITE_LOG", raising=False)
        stream = io.StringIO()
        ProcessTerminal(stream).write("\r> ")
        assert stream.getvalue() == "\r> "

    def test_defaults_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        ProcessTerminal().write("to stderr")
        captured = capsys.readouterr()
        assert captured.err == "to stderr"
        assert captured.out == ""

    def test_write_log(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        log = tmp_path / "writes.log"
        monkeypatch.setenv("PI_READLINE_WRITE_LOG", str(log))
        ProcessTerminal(io.StringIO()).write("abc")
        assert log.read_text() == "abc"


class TestStdinReader:
    @pytest.mark.asyncio
    async def test_reads_bytes_from_fd(self) -> None:
        read_fd, write_fd = os.pipe()
        reader = StdinReader(read_fd)
        reader.start()
        try:
            os.write(write_fd, b"a\x1b[A")
            decoder = KeyDecoder()
            assert await read_key(reader, decoder) == KeyEvent("char", "a")
            assert await read_key(reader, decoder) == KeyEvent("up")
        finally:
            reader.close()
            os.close(read_fd)
            os.close(write_fd)

    @pytest.mark.asyncio
    async def test_closed_input_raises_read_error(self) -> None:
        read_fd, write_fd = os.pipe()
        reader = StdinReader(read_fd)
        reader.start()
        try:
            os.write(write_fd, b"x")
            os.close(write_fd)
            decoder = KeyDecoder()
            assert await read_key(reader, decoder) == KeyEvent("char", "x")
            with pytest.raises(ReadError):
                await asyncio.wait_for(read_key(reader, decoder), timeout=5)
        finally:
            reader.close()
            os.close(read_fd)


def test_disable_raw_mode_without_enable_is_noop() -> None:
    disable_raw_mode()
