"""
Normal-mode key bindings for the krill text editor.

Every binding maps an immutable key sequence to an action called as
`action(context, count)`, where `count` is the numeric prefix typed before the
sequence (1 when absent). Buffers may carry their own table of the same shape,
which the dispatcher in krill.ui.input consults first.
"""
from __future__ import annotations

import os
import typing as _t
from dataclasses import dataclass

@dataclass(frozen=True)
class Binding:
    key    : str
    action : _t.Callable[[_t.Any, int], None]
    title  : str = ""

    def __call__(self, context, count: int) -> None:
        self.action(context, count)

# ───────────────────────── motions ─────────────────────────
def move_down(ctx, n):
    ctx.cursor = (ctx.cursor.row + n, ctx.cursor.col)

def move_up(ctx, n):
    ctx.cursor = (ctx.cursor.row - n, ctx.cursor.col)

def move_left(ctx, n):
    ctx.cursor = (ctx.cursor.row, ctx.cursor.col - n)

def move_right(ctx, n):
    ctx.cursor = (ctx.cursor.row, ctx.cursor.col + n)

def line_start(ctx, _n):
    ctx.cursor = (ctx.cursor.row, 0)

def line_end(ctx, _n):
    line = ctx.current_buffer.current_line or ""
    ctx.cursor = (ctx.cursor.row, len(line))

def first_line(ctx, _n):
    ctx.cursor = (0, ctx.cursor.col)

def last_line(ctx, _n):
    ctx.cursor = (ctx.current_buffer.line_count - 1, ctx.cursor.col)

# ───────────────────────── mode changes ─────────────────────
def insert_mode(ctx, _n):
    ctx.mode = "insert"

def append_mode(ctx, _n):
    ctx.cursor = (ctx.cursor.row, ctx.cursor.col + 1)
    ctx.mode = "insert"

def _open_line(ctx, index):
    buf = ctx.current_buffer
    indent = buf.leading_spaces(ctx.cursor.row)
    index = min(index, buf.line_count)
    buf.lines.insert(index, " " * indent)
    ctx.cursor = (index, indent)
    ctx.mode = "insert"

def open_line_below(ctx, _n):
    _open_line(ctx, ctx.cursor.row + 1)

def open_line_above(ctx, _n):
    _open_line(ctx, ctx.cursor.row)

# ───────────────────────── editing ──────────────────────────
def delete_lines(ctx, n):
    row = ctx.cursor.row
    del ctx.current_buffer.lines[row:row + n]
    ctx.cursor = ctx.cursor

# ───────────────────────── scrolling ────────────────────────
def _scroll(ctx, amount):
    ctx.current_buffer.starting_row += amount
    ctx.cursor = (ctx.cursor.row + amount, ctx.cursor.col)

def half_page_down(ctx, _n):
    _scroll(ctx, ctx.window_size()[0] // 2)

def half_page_up(ctx, _n):
    _scroll(ctx, -(ctx.window_size()[0] // 2))

def page_down(ctx, _n):
    _scroll(ctx, ctx.window_size()[0])

def page_up(ctx, _n):
    _scroll(ctx, -ctx.window_size()[0])

def center_cursor(ctx, _n):
    ctx.center_buffer_around_cursor()

# ───────────────────────── navigation ───────────────────────
def parent_directory(ctx, _n):
    path = ctx.current_buffer.path
    if not path:
        return
    ctx.open_buffer(os.path.dirname(os.path.abspath(path)))

def _table(*binds):
    return {b.key: b for b in binds}

NORMAL_KEYMAPS = _table(
    Binding("j", move_down, "down"),
    Binding("k", move_up, "up"),
    Binding("h", move_left, "left"),
    Binding("l", move_right, "right"),
    Binding("0", line_start, "start of line"),
    Binding("$", line_end, "end of line"),
    Binding("gg", first_line, "first line"),
    Binding("G", last_line, "last line"),
    Binding("i", insert_mode, "insert"),
    Binding("a", append_mode, "append"),
    Binding("o", open_line_below, "open line below"),
    Binding("O", open_line_above, "open line above"),
    Binding("zz", center_cursor, "center cursor"),
    Binding("dd", delete_lines, "delete line"),
    Binding("\x04", half_page_down, "half page down"),   # Ctrl-D
    Binding("\x15", half_page_up, "half page up"),       # Ctrl-U
    Binding("\x06", page_down, "page down"),             # Ctrl-F
    Binding("\x02", page_up, "page up"),                 # Ctrl-B
    Binding("-", parent_directory, "parent directory"),
)
