"""Submitted-line history with up/down navigation and an optional file log.

The file format is plain text, one entry per line. Backslashes and line
feeds inside an entry are written as ``\\\\`` and ``\\n``, so an entry
never spans two lines. The file is opened once for the lifetime of the
store, never truncated, and every new entry is flushed and fsynced before
:meth:`HistoryStore.push` returns, so a store opened later on the same
path sees it.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import IO

from pi.readline.errors import HistoryError

logger = logging.getLogger(__name__)

_ESCAPED_RE = re.compile(r"\\([\\n])")


def escape_entry(line: str) -> str:
    return line.replace("\\", "\\\\").replace("\n", "\\n")


def unescape_entry(text: str) -> str:
    return _ESCAPED_RE.sub(lambda m: "\n" if m.group(1) == "n" else "\\", text)


class HistoryStore:
    """Append-only list of submitted lines plus a navigation position.

    ``position == len(entries)`` means the user is on the live line rather
    than viewing a past entry. The navigation position is independent of
    the line buffer's cursor.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._entries: list[str] = []
        self._position: int = 0
        self._path: Path | None = Path(path).expanduser() if path is not None else None
        self._file: IO[str] | None = None

        if self._path is not None:
            self._file = self._open(self._path)
        try:
            self.load()
        except HistoryError:
            self.close()
            raise

    @staticmethod
    def _open(path: Path) -> IO[str]:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # newline="" keeps stray control bytes inside entries intact
            return open(path, "a+", encoding="utf-8", newline="")
        except OSError as exc:
            raise HistoryError(f"Cannot open history file ({exc.strerror or exc})", path) from exc

    # -- properties ---------------------------------------------------------

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def position(self) -> int:
        return self._position

    def __len__(self) -> int:
        return len(self._entries)

    # -- persistence --------------------------------------------------------

    def load(self) -> None:
        """Replace the in-memory entries with the contents of the file."""
        file, path = self._file, self._path
        if file is not None and path is not None:
            try:
                file.seek(0)
                content = file.read()
            except (OSError, UnicodeDecodeError) as exc:
                raise HistoryError(f"Cannot read history file ({exc})", path) from exc
            self._entries = [unescape_entry(line) for line in content.split("\n") if line]
            logger.debug("Loaded %d history entries from %s", len(self._entries), path)
        self.reset_navigation()

    def push(self, line: str) -> bool:
        """Record a submitted line. Empty lines are not recorded.

        Returns ``True`` if the line was added. Navigation is reset to the
        live line either way.
        """
        try:
            if not line:
                return False
            self._entries.append(line)
            if self._file is not None and self._path is not None:
                self._append(self._file, self._path, line)
            return True
        finally:
            self.reset_navigation()

    def _append(self, file: IO[str], path: Path, line: str) -> None:
        try:
            file.write(escape_entry(line) + "\n")
            file.flush()
            os.fsync(file.fileno())
        except OSError as exc:
            raise HistoryError(f"Cannot append to history file ({exc.strerror or exc})", path) from exc
        logger.debug("Appended history entry %d to %s", len(self._entries), path)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> HistoryStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- navigation ---------------------------------------------------------

    def reset_navigation(self) -> None:
        self._position = len(self._entries)

    def navigate_up(self) -> str | None:
        """Step to the previous entry. ``None`` when already at the oldest."""
        if self._position == 0:
            return None
        self._position -= 1
        return self._entries[self._position]

    def navigate_down(self) -> str | None:
        """Step to the next entry, or ``""`` when reaching the live line.

        ``None`` when already on the live line.
        """
        if self._position >= len(self._entries):
            return None
        self._position += 1
        if self._position < len(self._entries):
            return self._entries[self._position]
        return ""
