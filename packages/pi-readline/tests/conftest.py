from __future__ import annotations

from pathlib import Path

import pytest
from fake_stdin import FakeStdin
from virtual_terminal import VirtualTerminal

from pi.readline import Readline


@pytest.fixture
def terminal() -> VirtualTerminal:
    return VirtualTerminal()


@pytest.fixture
def history_path(tmp_path: Path) -> Path:
    return tmp_path / "history"


@pytest.fixture
def make_readline(terminal: VirtualTerminal):
    """Factory building a Readline over scripted input; closes them afterwards."""
    created: list[Readline] = []

    def factory(
        data: bytes,
        prompt: str = "> ",
        history_file: Path | None = None,
    ) -> Readline:
        rl = Readline(FakeStdin(data), prompt, history_file, terminal=terminal)
        created.append(rl)
        return rl

    yield factory

    for rl in created:
        rl.close()
