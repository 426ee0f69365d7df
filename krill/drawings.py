"""
Decorative glyph blocks for the krill text editor.

A Drawing is anchored to a screen edge on each axis and is painted over the
composed screen after all windows; spaces inside a drawing are transparent.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass

KRILL = [
    "█  █ ███  ███ █    █   ",
    "█ █  █  █  █  █    █   ",
    "██   ███   █  █    █   ",
    "█ █  █ █   █  █    █   ",
    "█  █ █  █ ███ ████ ████",
]

CIRCLE = [
    "      ██████████      ",
    "   ████████████████   ",
    " ████████████████████ ",
    "██████████████████████",
    "██████████████████████",
    "██████████████████████",
    "██████████████████████",
    "██████████████████████",
    " ████████████████████ ",
    "   ████████████████   ",
    "      ██████████      ",
]

@dataclass
class Drawing:
    glyphs : list
    color  : str = "blue"
    top    : int = None
    bottom : int = None
    left   : int = None
    right  : int = None

    @property
    def height(self) -> int:
        return len(self.glyphs)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.glyphs), default=0)

    def origin(self, rows: int, cols: int) -> tuple:
        """Resolve the anchors against a `rows` x `cols` screen."""
        row = 0
        if self.top is not None:
            row = self.top
        elif self.bottom is not None:
            row = rows - self.bottom - self.height
        col = 0
        if self.left is not None:
            col = self.left
        elif self.right is not None:
            col = cols - self.right - self.width
        return row, col

    def segments(self):
        """Yield (row_offset, col_offset, text) for every run of non-space glyphs."""
        for r, line in enumerate(self.glyphs):
            c = 0
            for is_space, run in itertools.groupby(line, key=lambda ch: ch == " "):
                text = "".join(run)
                if not is_space:
                    yield r, c, text
                c += len(text)

def fun_drawings() -> list:
    """The pair toggled by the `fun` command: logo top-right, circle bottom-right."""
    return [
        Drawing(KRILL, color="blue", right=0, top=0),
        Drawing(CIRCLE, color="red", right=0, bottom=3),
    ]
