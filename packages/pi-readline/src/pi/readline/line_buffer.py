"""The line being edited and its cursor."""

from __future__ import annotations


class LineBuffer:
    """Single-line text buffer with a cursor in ``[0, len(text)]``.

    Mutators that can be no-ops return ``True`` only when something
    changed, so callers know whether the line needs redrawing.
    """

    def __init__(self) -> None:
        self._value: str = ""
        self._cursor: int = 0

    def __len__(self) -> int:
        return len(self._value)

    @property
    def text(self) -> str:
        return self._value

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def at_end(self) -> bool:
        return self._cursor == len(self._value)

    # -- editing ------------------------------------------------------------

    def insert(self, char: str) -> None:
        """Insert *char* at the cursor and step past it."""
        self._value = self._value[: self._cursor] + char + self._value[self._cursor :]
        self._cursor += len(char)

    def delete_left(self) -> bool:
        if self._cursor == 0:
            return False
        self._value = self._value[: self._cursor - 1] + self._value[self._cursor :]
        self._cursor -= 1
        return True

    def delete_right(self) -> bool:
        if self._cursor >= len(self._value):
            return False
        self._value = self._value[: self._cursor] + self._value[self._cursor + 1 :]
        return True

    # -- cursor movement ----------------------------------------------------

    def move_left(self) -> bool:
        if self._cursor == 0:
            return False
        self._cursor -= 1
        return True

    def move_right(self) -> bool:
        if self._cursor >= len(self._value):
            return False
        self._cursor += 1
        return True

    # -- whole-line operations ---------------------------------------------

    def replace(self, text: str) -> None:
        """Swap in recalled text with the cursor at its end."""
        self._value = text
        self._cursor = len(text)

    def take_and_clear(self) -> str:
        value = self._value
        self._value = ""
        self._cursor = 0
        return value
