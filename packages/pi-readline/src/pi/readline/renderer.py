"""Keeps the terminal's current line in sync with the prompt and buffer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pi.readline.utils import visible_width

if TYPE_CHECKING:
    from pi.readline.line_buffer import LineBuffer
    from pi.readline.terminal import Terminal

CLEAR_LINE = "\x1b[2K\r"
CURSOR_COLUMN_FMT = "\x1b[{}G"
NEWLINE = "\r\n"


def cursor_column(prompt: str, buffer: LineBuffer) -> int:
    """1-based terminal column of the edit cursor."""
    return visible_width(prompt) + buffer.cursor + 1


class Renderer:
    """Writes prompt and buffer state to a :class:`Terminal`.

    Each operation issues a single ``write`` so a redraw never reaches the
    terminal half-done.
    """

    def __init__(self, terminal: Terminal) -> None:
        self._terminal = terminal
        self._drawn_prompt: str | None = None

    def show(self, prompt: str, buffer: LineBuffer) -> None:
        """Print the prompt line without clearing first."""
        self._terminal.write(self._line(prompt, buffer))
        self._drawn_prompt = prompt

    def redraw(self, prompt: str, buffer: LineBuffer) -> None:
        self._terminal.write(CLEAR_LINE + self._line(prompt, buffer))
        self._drawn_prompt = prompt

    def echo_insert(self, prompt: str, buffer: LineBuffer, char: str) -> None:
        """Show a just-inserted character.

        Appending at the end only needs the character itself, since the
        terminal cursor advances with it. Anything else redraws the line,
        including an append after the prompt was changed.
        """
        if buffer.at_end and prompt == self._drawn_prompt:
            self._terminal.write(char)
        else:
            self.redraw(prompt, buffer)

    def newline(self) -> None:
        self._terminal.write(NEWLINE)

    @staticmethod
    def _line(prompt: str, buffer: LineBuffer) -> str:
        column = cursor_column(prompt, buffer)
        return f"\r{prompt}{buffer.text}{CURSOR_COLUMN_FMT.format(column)}"
