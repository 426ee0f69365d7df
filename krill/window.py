"""
Windows for the krill text editor.

A Window is a rectangle of the terminal showing one buffer. It refers to its
buffer by index into EditorContext.buffers; the context owns both registries.
"""
from dataclasses import dataclass

# Rows kept free at the bottom of the screen: status bar + command line
RESERVED_ROWS = 2

@dataclass
class Window:
    row          : int
    col          : int
    rows         : int
    cols         : int
    buffer_index : int
    is_floating  : bool = False
    active       : bool = False

def main_geometry(screen_rows: int, screen_cols: int) -> tuple:
    """(row, col, rows, cols) of the full-screen main window."""
    return 0, 0, max(1, screen_rows - RESERVED_ROWS), max(1, screen_cols)

def popup_geometry(screen_rows: int, screen_cols: int, floating_count: int) -> tuple:
    """
    (row, col, rows, cols) for a new popup: a quarter of the screen, placed a
    quarter of the way in and staggered by the number of popups already open.
    The one-cell border must stay on screen, above the reserved rows.
    """
    usable_rows = max(1, screen_rows - RESERVED_ROWS)
    rows = max(1, screen_rows // 2)
    cols = max(1, screen_cols // 2)
    row = screen_rows // 4 + floating_count
    col = screen_cols // 4 + 2 * floating_count

    row = max(1, min(row, usable_rows - rows - 1))
    col = max(1, min(col, screen_cols - cols - 1))
    rows = max(1, min(rows, usable_rows - row - 1))
    cols = max(1, min(cols, screen_cols - col - 1))
    return row, col, rows, cols
