"""Shared fixtures: an in-memory console and ready-made editor contexts."""
from __future__ import annotations

from contextlib import contextmanager

import pytest

from krill import logger
from krill.editor import EditorContext
from krill.ui.input import send_input


class FakeConsole:
    """Console double that records writes into a character grid."""

    def __init__(self, rows: int = 24, cols: int = 80):
        self.rows = rows
        self.cols = cols
        self.inputs: list[str] = []
        self.cursor = (0, 0)
        self.refreshes = 0
        self.clear()

    def winsize(self):
        return self.rows, self.cols

    def input_available(self) -> bool:
        return bool(self.inputs)

    def read_char(self) -> str:
        return self.inputs.pop(0) if self.inputs else ""

    def move(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def write(self, text: str, color=None, background=None, bold=False) -> None:
        row, col = self.cursor
        for ch in text:
            if 0 <= row < self.rows and 0 <= col < self.cols:
                self.cells[row][col] = ch
                self.styles[row][col] = (color, background, bold)
            col += 1
        self.cursor = (row, col)

    def clear(self) -> None:
        self.cells = [[" "] * self.cols for _ in range(self.rows)]
        self.styles = [[(None, None, False)] * self.cols for _ in range(self.rows)]

    def refresh(self) -> None:
        self.refreshes += 1

    @contextmanager
    def saved_cursor(self):
        saved = self.cursor
        try:
            yield
        finally:
            self.cursor = saved

    def line(self, row: int) -> str:
        return "".join(self.cells[row])


@pytest.fixture(autouse=True)
def log_path(tmp_path, monkeypatch):
    path = tmp_path / "krill.log"
    monkeypatch.setattr(logger, "LOG_FILE_PATH", str(path))
    return path


@pytest.fixture
def console():
    return FakeConsole()


@pytest.fixture
def editor(console):
    return EditorContext(console)


@pytest.fixture
def make_editor():
    def _make(rows=24, cols=80, **kwargs):
        return EditorContext(FakeConsole(rows, cols), **kwargs)
    return _make


@pytest.fixture
def press():
    def _press(context, keys):
        for ch in keys:
            send_input(context, ch)
    return _press
