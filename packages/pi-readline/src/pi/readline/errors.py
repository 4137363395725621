"""Exceptions raised at the I/O boundaries of the line editor."""

from __future__ import annotations

from pathlib import Path


class ReadlineError(Exception):
    """Base class for all pi-readline errors."""


class ReadError(ReadlineError):
    """The byte source failed or closed while a key was being read.

    ``expected`` and ``received`` are byte counts for short reads and are
    ``None`` when the failure was a plain I/O error.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: int | None = None,
        received: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.received = received


class HistoryError(ReadlineError):
    """Opening, reading or appending to the history file failed."""

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = Path(path)
