"""Byte-level key decoding for raw terminal input.

Raw mode delivers one byte per key for printable characters and a handful
of control keys, and three bytes (``ESC``, an introducer, a final byte) for
the arrow keys. :class:`KeyDecoder` turns that stream into
:class:`KeyEvent` values one byte at a time, and :func:`read_key` drives it
from an asynchronous byte source.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Literal, Protocol

from pi.readline.errors import ReadError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Byte values
# ---------------------------------------------------------------------------

CTRL_C = 3
ENTER = 13
ESC = 27
DELETE = 126
BACKSPACE = 127

ARROW_UP = 65
ARROW_DOWN = 66
ARROW_RIGHT = 67
ARROW_LEFT = 68

# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

KeyName = Literal[
    "char",
    "interrupt",
    "enter",
    "backspace",
    "delete",
    "up",
    "down",
    "left",
    "right",
    "unrecognized",
]

DecoderState = Literal["idle", "esc_start", "esc_final"]


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key press. ``char`` is only set for ``"char"`` events."""

    name: KeyName
    char: str = ""

    @classmethod
    def from_byte(cls, byte: int) -> KeyEvent:
        return cls("char", chr(byte))


INTERRUPT = KeyEvent("interrupt")
SUBMIT = KeyEvent("enter")
ERASE_LEFT = KeyEvent("backspace")
ERASE_RIGHT = KeyEvent("delete")
UNRECOGNIZED = KeyEvent("unrecognized")

_SINGLE_BYTE_KEYS: dict[int, KeyEvent] = {
    CTRL_C: INTERRUPT,
    ENTER: SUBMIT,
    BACKSPACE: ERASE_LEFT,
    DELETE: ERASE_RIGHT,
}

_ARROW_KEYS: dict[int, KeyEvent] = {
    ARROW_UP: KeyEvent("up"),
    ARROW_DOWN: KeyEvent("down"),
    ARROW_RIGHT: KeyEvent("right"),
    ARROW_LEFT: KeyEvent("left"),
}


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------


class KeyDecoder:
    """Three-state decoder: ``idle -> esc_start -> esc_final -> idle``.

    ``feed`` returns ``None`` while an escape sequence is still being
    collected. The byte right after ``ESC`` is consumed without being
    inspected; the one after that selects the arrow direction.
    """

    def __init__(self) -> None:
        self._state: DecoderState = "idle"

    @property
    def state(self) -> DecoderState:
        return self._state

    @property
    def pending(self) -> bool:
        """True while in the middle of an escape sequence."""
        return self._state != "idle"

    def reset(self) -> None:
        self._state = "idle"

    def feed(self, byte: int) -> KeyEvent | None:
        if self._state == "idle":
            if byte == ESC:
                self._state = "esc_start"
                return None
            return _SINGLE_BYTE_KEYS.get(byte) or KeyEvent.from_byte(byte)

        if self._state == "esc_start":
            self._state = "esc_final"
            return None

        self._state = "idle"
        event = _ARROW_KEYS.get(byte)
        if event is None:
            logger.debug("Ignoring unrecognized escape sequence tail %d", byte)
            return UNRECOGNIZED
        return event


def decode(data: bytes) -> list[KeyEvent]:
    """Decode a complete byte string into key events.

    A trailing, unfinished escape sequence produces no event.
    """
    decoder = KeyDecoder()
    events: list[KeyEvent] = []
    for byte in data:
        event = decoder.feed(byte)
        if event is not None:
            events.append(event)
    return events


# ---------------------------------------------------------------------------
# Reading from a byte source
# ---------------------------------------------------------------------------


class ByteSource(Protocol):
    """Anything that can hand out bytes asynchronously.

    :class:`asyncio.StreamReader` satisfies this protocol. Implementations
    raise :class:`asyncio.IncompleteReadError` when the stream ends early.
    """

    async def readexactly(self, n: int) -> bytes: ...


async def read_key(source: ByteSource, decoder: KeyDecoder) -> KeyEvent:
    """Read bytes from *source* until *decoder* yields a complete event.

    Raises :class:`ReadError` if the source fails or ends, including in
    the middle of an escape sequence. The decoder is reset whenever this
    raises.
    """
    try:
        while True:
            try:
                data = await source.readexactly(1)
            except asyncio.IncompleteReadError as exc:
                where = "in escape sequence" if decoder.pending else "waiting for key"
                raise ReadError(
                    f"Input closed {where}",
                    expected=exc.expected,
                    received=len(exc.partial),
                ) from exc
            except OSError as exc:
                raise ReadError(f"Failed to read input: {exc}") from exc

            event = decoder.feed(data[0])
            if event is not None:
                return event
    except BaseException:
        # also on cancellation: no half-read sequence survives into the next read
        decoder.reset()
        raise
