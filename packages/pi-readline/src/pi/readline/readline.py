"""The read loop tying key decoding, editing, history and rendering together."""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pi.readline import terminal as _terminal
from pi.readline.config import DEFAULT_PROMPT, ReadlineConfig
from pi.readline.history import HistoryStore
from pi.readline.keys import ByteSource, KeyDecoder, KeyEvent, read_key
from pi.readline.line_buffer import LineBuffer
from pi.readline.renderer import Renderer
from pi.readline.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Results of run()
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LineEvent:
    text: str
    type: Literal["line"] = "line"


@dataclass(frozen=True)
class InterruptEvent:
    type: Literal["interrupt"] = "interrupt"


ReadlineEvent = LineEvent | InterruptEvent


# ---------------------------------------------------------------------------
# Readline
# ---------------------------------------------------------------------------


class Readline:
    """Interactive line reader over an async byte source.

    Each call to :meth:`run` edits one line and returns a
    :class:`LineEvent` on Enter or an :class:`InterruptEvent` on Ctrl-C.
    Read failures raise :class:`~pi.readline.errors.ReadError` and history
    file failures raise :class:`~pi.readline.errors.HistoryError`.

    The prompt may be read and replaced from other tasks or threads while
    :meth:`run` is waiting for input; the new prompt shows on the next
    redraw. Everything else belongs to the read loop.
    """

    def __init__(
        self,
        reader: ByteSource,
        prompt: str = DEFAULT_PROMPT,
        history_file: str | Path | None = None,
        *,
        terminal: Terminal | None = None,
    ) -> None:
        self._prompt = prompt
        self._prompt_lock = threading.Lock()

        self._reader = reader
        self._reader_lock = asyncio.Lock()
        self._decoder = KeyDecoder()

        self._buffer = LineBuffer()
        self._history = HistoryStore(history_file)
        self._renderer = Renderer(terminal if terminal is not None else ProcessTerminal())

    @classmethod
    def from_config(
        cls,
        reader: ByteSource,
        config: ReadlineConfig,
        *,
        terminal: Terminal | None = None,
    ) -> Readline:
        return cls(reader, config.prompt, config.history_file, terminal=terminal)

    # -- raw mode -----------------------------------------------------------

    @staticmethod
    def enable_raw_mode() -> None:
        _terminal.enable_raw_mode()

    @staticmethod
    def disable_raw_mode() -> None:
        _terminal.disable_raw_mode()

    # -- prompt -------------------------------------------------------------

    def get_prompt(self) -> str:
        with self._prompt_lock:
            return self._prompt

    def set_prompt(self, prompt: str) -> None:
        with self._prompt_lock:
            self._prompt = prompt

    # -- state --------------------------------------------------------------

    @property
    def history(self) -> HistoryStore:
        return self._history

    @property
    def buffer(self) -> LineBuffer:
        return self._buffer

    def close(self) -> None:
        """Release the history file."""
        self._history.close()

    def __enter__(self) -> Readline:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- read loop ----------------------------------------------------------

    async def run(self) -> ReadlineEvent:
        """Read keys until a line is submitted or Ctrl-C is pressed."""
        async with self._reader_lock:
            self._renderer.show(self.get_prompt(), self._buffer)

            while True:
                key = await read_key(self._reader, self._decoder)
                event = self._handle_key(key)
                if event is not None:
                    return event

    def _handle_key(self, key: KeyEvent) -> ReadlineEvent | None:
        if key.name == "interrupt":
            logger.debug("Interrupted")
            return InterruptEvent()

        if key.name == "enter":
            return self._submit()

        if key.name == "char":
            self._buffer.insert(key.char)
            self._renderer.echo_insert(self.get_prompt(), self._buffer, key.char)
            return None

        if key.name == "backspace":
            changed = self._buffer.delete_left()
        elif key.name == "delete":
            changed = self._buffer.delete_right()
        elif key.name == "left":
            changed = self._buffer.move_left()
        elif key.name == "right":
            changed = self._buffer.move_right()
        elif key.name == "up":
            changed = self._recall(self._history.navigate_up())
        elif key.name == "down":
            changed = self._recall(self._history.navigate_down())
        else:
            changed = False

        if changed:
            self._renderer.redraw(self.get_prompt(), self._buffer)
        return None

    def _recall(self, entry: str | None) -> bool:
        if entry is None:
            return False
        self._buffer.replace(entry)
        return True

    def _submit(self) -> LineEvent:
        self._renderer.newline()
        text = self._buffer.take_and_clear()
        self._history.push(text)
        logger.debug("Submitted line of %d characters", len(text))
        return LineEvent(text)
