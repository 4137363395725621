"""Settings for an interactive readline session."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PROMPT = "> "


@dataclass
class ReadlineConfig:
    prompt: str = DEFAULT_PROMPT
    history_file: Path | None = None


def load_config() -> ReadlineConfig:
    """Build a config from ``PI_READLINE_PROMPT`` and ``PI_READLINE_HISTORY``.

    An empty ``PI_READLINE_HISTORY`` is the same as leaving it unset: no
    history file.
    """
    config = ReadlineConfig()
    prompt = os.environ.get("PI_READLINE_PROMPT")
    if prompt is not None:
        config.prompt = prompt
    history = os.environ.get("PI_READLINE_HISTORY", "")
    if history:
        config.history_file = Path(history).expanduser()
    return config
