"""
krill/ui/screen.py

Draws a full frame: every window in stacking order (popups get a border),
then the decorative drawings, the status bar and the command line, and finally
puts the terminal cursor where the user is typing. A second, lighter pass lets
plugins draw debug overlays on every tick without moving that cursor.
"""
from wcwidth import wcswidth, wcwidth

from krill.editor import left_margin

BORDER_TOP_LEFT     = "┌"
BORDER_TOP_RIGHT    = "┐"
BORDER_BOTTOM_LEFT  = "└"
BORDER_BOTTOM_RIGHT = "┘"
BORDER_HORIZONTAL   = "─"
BORDER_VERTICAL     = "│"

EMPTY_LINE_MARKER = "~"
READ_ONLY_MARKER  = " [RO]"

def display_width(text: str) -> int:
    """Number of terminal cells `text` occupies."""
    width = wcswidth(text)
    return len(text) if width < 0 else width

def pad_line(text: str, width: int) -> str:
    """Pad or trim a string to exactly `width` terminal cells."""
    out = []
    used = 0
    for ch in text:
        w = wcwidth(ch)
        if w < 0:
            w = 1
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(out) + " " * (width - used)

def printable_key(char: str) -> str:
    """Render a pending key for the status bar (control keys as ^X)."""
    if len(char) == 1 and ord(char) < 32:
        return "^" + chr(ord(char) + 64)
    return char

def display(context):
    """Re-draw the entire screen."""
    context.update_layout()
    console = context.console
    console.clear()

    for win in context.windows:
        draw_window(context, win)
    for drawing in context.drawings:
        draw_drawing(context, drawing)

    draw_status_bar(context)
    if context.mode == "command":
        draw_command_line(context)
    else:
        place_cursor(context)
    console.refresh()

def display_debug(context, delta: float):
    """Per-tick plugin overlay; the cursor is restored afterwards."""
    with context.console.saved_cursor():
        context.plugin_manager.debug_render(delta)
    context.console.refresh()

def draw_window(context, win):
    console = context.console
    buf = context.buffer_for(win)
    margin = left_margin(buf.line_count)
    text_width = max(0, win.cols - margin)

    for i in range(win.rows):
        line_index = buf.starting_row + i
        line = buf.nth_line(line_index)
        console.move(win.row + i, win.col)
        if line is None:
            console.write(pad_line(EMPTY_LINE_MARKER, win.cols), color="grey")
            continue
        console.write(str(line_index).rjust(margin - 1), color="grey")
        console.write(" " + pad_line(line, text_width))

    if win.is_floating:
        draw_border(context, win, buf.display_name)

def border_top(label: str, inner: int) -> str:
    """Top edge of a box `inner` cells wide with `label` centered in it."""
    title = f" {label} "
    if display_width(title) > inner:
        title = pad_line(title, inner)
    width = display_width(title)
    start = (inner - width) // 2
    return (BORDER_TOP_LEFT + BORDER_HORIZONTAL * start + title +
            BORDER_HORIZONTAL * (inner - start - width) + BORDER_TOP_RIGHT)

def draw_border(context, win, label: str):
    """One-cell box just outside the window, with `label` centered on top."""
    console = context.console
    inner = win.cols
    top_line = border_top(label, inner)
    bottom_line = BORDER_BOTTOM_LEFT + BORDER_HORIZONTAL * inner + BORDER_BOTTOM_RIGHT

    console.move(win.row - 1, win.col - 1)
    console.write(top_line, color="cyan", bold=True)
    for r in range(win.rows):
        console.move(win.row + r, win.col - 1)
        console.write(BORDER_VERTICAL, color="cyan", bold=True)
        console.move(win.row + r, win.col + win.cols)
        console.write(BORDER_VERTICAL, color="cyan", bold=True)
    console.move(win.row + win.rows, win.col - 1)
    console.write(bottom_line, color="cyan", bold=True)

def draw_drawing(context, drawing):
    """Blit the non-space runs of `drawing`; spaces leave the frame untouched."""
    console = context.console
    origin_row, origin_col = drawing.origin(context.height, context.width)
    for r, c, text in drawing.segments():
        y = origin_row + r
        x = origin_col + c
        if not (0 <= y < context.height) or x >= context.width:
            continue
        if x < 0:
            text = text[-x:]
            x = 0
        console.move(y, x)
        console.write(text[:context.width - x], color=drawing.color)

def draw_status_bar(context):
    console = context.console
    y = context.height - 2
    color = context.config.mode_colors.get(context.mode, "white")
    buf = context.current_buffer

    mode_text = f" {context.mode.upper()} "
    console.move(y, 0)
    console.write(mode_text, color="black", background=color, bold=True)
    name = " " + buf.display_name
    if buf.read_only:
        name += READ_ONLY_MARKER
    room = max(0, context.width - display_width(mode_text) - 1)
    console.write(pad_line(name, min(display_width(name), room)))

    right = f"{context.cursor.row}:{context.cursor.col}"
    if context.key_stack:
        right += " " + "".join(printable_key(k) for k in context.key_stack)
    console.move(y, max(0, context.width - 1 - display_width(right)))
    console.write(right, color="black", background=color, bold=True)

def draw_command_line(context):
    """Draw ':' and the typed command on the last row; the cursor stays after it."""
    console = context.console
    console.move(context.height - 1, 0)
    console.write(":" + context.command_buffer)

def place_cursor(context):
    win = context.current_window
    buf = context.buffer_for(win)
    margin = left_margin(buf.line_count)
    line = buf.current_line or ""
    row = win.row + buf.cursor.row - buf.starting_row
    col = win.col + margin + display_width(line[:buf.cursor.col])
    context.console.move(row, col)
