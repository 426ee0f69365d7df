"""
Buffer module for the krill text editor.

Defines the Buffer class that owns the text lines of one document (or one
directory listing) together with its cursor, viewport offset and buffer-local
key bindings. `insert` and `backspace` are the only operations that change the
content of a line; out-of-range positions are never errors, they leave the
buffer untouched and hand the position back.
"""
from __future__ import annotations

import os
from typing import NamedTuple

from krill.keymaps import Binding

class EditorError(Exception):
    """A failure caused by a user command, shown to the user instead of crashing."""

class Position(NamedTuple):
    row: int
    col: int

NEWLINES = ("\n", "\r")

# Undecodable bytes survive a load/save cycle as lone surrogates
FILE_ERRORS = "surrogateescape"

def split_lines(text: str) -> list:
    """
    Split file text on "\\n" only. A final terminator does not start a new line
    and a "\\r" left over from "\\r\\n" endings is dropped.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]

class Buffer:
    """Represents a text buffer (file content, directory listing or scratch text)."""
    def __init__(self, path: str = None, lines=None, name: str = None, read_only: bool = False):
        self.path = path            # Backing file or directory, None for a scratch buffer
        self.name = name            # Display label (popups)
        self.lines = list(lines) if lines is not None else []
        self.read_only = read_only
        self.is_directory = False
        self.cursor = Position(0, 0)
        # First line shown in any window bound to this buffer
        self.starting_row = 0
        # Buffer-local bindings, consulted before the global keymaps
        self.keymaps = {}
        if self.path:
            self.load()

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return self.path or "scratch buffer"

    @property
    def current_line(self):
        return self.nth_line(self.cursor.row)

    def nth_line(self, n: int):
        """Return line `n`, or None when `n` is outside the buffer."""
        if 0 <= n < len(self.lines):
            return self.lines[n]
        return None

    def load(self) -> None:
        """(Re)load lines from the backing path, creating an empty file if needed."""
        self.path = os.path.abspath(os.path.expanduser(self.path))
        if os.path.isdir(self.path):
            self.is_directory = True
            self.read_only = True
            self.lines = sorted(os.listdir(self.path))
            for key in NEWLINES:
                self.keymaps[key] = Binding(key, self._open_entry, "open entry")
            return
        if not os.path.exists(self.path):
            with open(self.path, 'w', encoding='utf-8'):
                pass
        with open(self.path, 'r', encoding='utf-8', errors=FILE_ERRORS, newline='') as f:
            self.lines = split_lines(f.read())
        self.is_directory = False
        self.read_only = False

    def _open_entry(self, context, _count: int) -> None:
        entry = self.current_line
        if entry:
            context.open_buffer(os.path.join(self.path, entry))

    def save(self) -> None:
        """Write the lines back to the backing path, joined by single newlines."""
        if self.read_only:
            raise EditorError("Cannot save a readonly buffer")
        if not self.path:
            raise EditorError("Cannot save a buffer without a file path")
        if self.is_directory:
            raise EditorError("Cannot save changes to a directory buffer")
        with open(self.path, 'w', encoding='utf-8', errors=FILE_ERRORS, newline='') as f:
            f.write("\n".join(self.lines))

    def insert(self, char: str, pos: Position) -> Position:
        """Insert `char` at `pos` and return the position just after it."""
        row, col = pos
        if row < 0 or row > len(self.lines) or col < 0:
            return pos
        line = self.nth_line(row)
        if line is None:
            line = ""
        if col > len(line):
            return pos
        if row == len(self.lines):
            self.lines.append(line)

        if char in NEWLINES:
            self.lines[row] = line[:col]
            self.lines.insert(row + 1, line[col:])
            return Position(row + 1, 0)

        self.lines[row] = line[:col] + char + line[col:]
        return Position(row, col + 1)

    def backspace(self, pos: Position) -> Position:
        """Delete the character before `pos` (joining lines at column 0)."""
        row, col = pos
        if row < 0 or row > len(self.lines) or col < 0:
            return pos

        if col == 0:
            if row == 0:
                return pos
            previous = self.lines[row - 1]
            if row < len(self.lines):
                self.lines[row - 1] = previous + self.lines.pop(row)
            return Position(row - 1, len(previous))

        line = self.nth_line(row)
        if line is None or col > len(line):
            return pos
        self.lines[row] = line[:col - 1] + line[col:]
        return Position(row, col - 1)

    def leading_spaces(self, row: int) -> int:
        """Count of leading spaces on line `row` (0 for a missing line)."""
        line = self.nth_line(row) or ""
        return len(line) - len(line.lstrip(" "))
