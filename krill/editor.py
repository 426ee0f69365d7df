"""
Editor context for the krill text editor.

Holds the whole editor state: mode, pending keys, command line, the buffer and
window registries, drawings and the exit flag. All cursor changes go through the
`cursor` property so the cursor is clamped into the buffer and the active window
scrolls to keep it visible.
"""
import os

from krill import buffer, commands, logger
from krill.config import Config
from krill.plugins import PluginManager
from krill.window import Window, main_geometry, popup_geometry

def left_margin(line_count: int) -> int:
    """Width of the line-number gutter, including the separating space."""
    return max(2, len(str(line_count)) + 1)

class EditorContext:
    def __init__(self, console, config: Config = None, plugin_manager: PluginManager = None):
        self.console = console
        self.config = config or Config()
        self.height, self.width = console.winsize()

        self.plugin_manager = plugin_manager or PluginManager()
        self.plugin_manager.attach(self)

        # "normal", "insert" or "command"
        self.mode = "normal"
        self.key_stack = []
        self.command_buffer = ""

        # Registries; windows are ordered bottom to top
        self.buffers = []
        self.windows = []

        self.drawings = []
        self.yank_register = None
        self.exit_flag = False
        self.command_log = []

        self.evaluator = commands.python_evaluator if self.config.expressions else None

        scratch = self.add_buffer(buffer.Buffer())
        row, col, rows, cols = main_geometry(self.height, self.width)
        self.windows.append(Window(row, col, rows, cols, scratch, active=True))

    # ── windows ──────────────────────────────────────────
    @property
    def current_window(self) -> Window:
        for win in self.windows:
            if win.active:
                return win
        return self.windows[-1]

    @property
    def main_window(self) -> Window:
        return self.windows[0]

    def buffer_for(self, win: Window) -> buffer.Buffer:
        return self.buffers[win.buffer_index]

    @property
    def current_buffer(self) -> buffer.Buffer:
        return self.buffer_for(self.current_window)

    def window_size(self, win: Window = None) -> tuple:
        """(rows, cols) available for text in `win`, gutter excluded."""
        win = win or self.current_window
        margin = left_margin(self.buffer_for(win).line_count)
        return win.rows, max(0, win.cols - margin)

    def update_layout(self):
        """Follow terminal resizes: the main window always fills the screen."""
        self.height, self.width = self.console.winsize()
        main = self.main_window
        main.row, main.col, main.rows, main.cols = main_geometry(self.height, self.width)

    def open_popup(self, buf: buffer.Buffer) -> Window:
        """Show `buf` in a new floating window on top of all others and focus it."""
        index = self.add_buffer(buf)
        floating = sum(1 for w in self.windows if w.is_floating)
        row, col, rows, cols = popup_geometry(self.height, self.width, floating)
        for win in self.windows:
            win.active = False
        popup = Window(row, col, rows, cols, index, is_floating=True, active=True)
        self.windows.append(popup)
        return popup

    def close_active_window(self) -> bool:
        """
        Close the active popup and focus the most recently created remaining window.
        The main window is never closed; returns False when nothing was closed.
        """
        win = self.current_window
        if len(self.windows) <= 1 or not win.is_floating:
            return False
        self.windows.remove(win)
        for other in self.windows:
            other.active = False
        self.windows[-1].active = True
        self.log_command(f"closed window: {self.buffer_for(win).display_name}")
        return True

    # ── buffers ──────────────────────────────────────────
    def add_buffer(self, buf: buffer.Buffer) -> int:
        """Register a new buffer and return its index."""
        self.buffers.append(buf)
        self.plugin_manager.buffer_opened(buf)
        return len(self.buffers) - 1

    def find_buffer(self, path: str):
        for index, buf in enumerate(self.buffers):
            if buf.path and buf.path == path:
                return index
        return None

    def open_buffer(self, path: str) -> buffer.Buffer:
        """Show the buffer for `path` in the active window, loading it if not open yet."""
        resolved = os.path.abspath(os.path.expanduser(path))
        index = self.find_buffer(resolved)
        if index is None:
            index = self.add_buffer(buffer.Buffer(resolved))
            self.log_command(f"opened: {resolved}")
        self.current_window.buffer_index = index
        self.cursor = self.cursor
        return self.buffers[index]

    def reload_buffer(self):
        buf = self.current_buffer
        if not buf.path:
            raise buffer.EditorError("Cannot reopen buffer that is not backed by a file")
        buf.load()
        self.cursor = self.cursor
        self.log_command(f"e: reloaded {buf.path}")

    def save_buffer(self):
        buf = self.current_buffer
        buf.save()
        num_bytes = sum(len(line) for line in buf.lines) + max(0, len(buf.lines) - 1)
        self.log_command(f"w: write ({num_bytes} bytes)")

    # ── cursor ───────────────────────────────────────────
    @property
    def cursor(self) -> buffer.Position:
        return self.current_buffer.cursor

    @cursor.setter
    def cursor(self, pos):
        buf = self.current_buffer
        buf.cursor = self.constrain_cursor_pos(buf, pos)
        self.scroll_to_contain_cursor()

    @staticmethod
    def constrain_cursor_pos(buf: buffer.Buffer, pos) -> buffer.Position:
        row = max(0, min(pos[0], buf.line_count))
        line = buf.nth_line(row) or ""
        return buffer.Position(row, max(0, min(pos[1], len(line))))

    def scroll_to_contain_cursor(self, win: Window = None):
        win = win or self.current_window
        buf = self.buffer_for(win)
        view_start = buf.starting_row
        view_end = view_start + win.rows - 1
        if buf.cursor.row > view_end:
            buf.starting_row += buf.cursor.row - view_end
        if buf.cursor.row < view_start:
            buf.starting_row = buf.cursor.row
        buf.starting_row = max(0, min(buf.starting_row, buf.line_count))

    def goto_line(self, line_num: int):
        self.cursor = (line_num, self.cursor.col)

    def center_buffer_around_cursor(self):
        buf = self.current_buffer
        buf.starting_row = max(0, self.cursor.row - self.current_window.rows // 2)

    # ── misc ─────────────────────────────────────────────
    def log_command(self, msg: str):
        """Log a command or action to the short history (and debug log file)."""
        self.command_log.append(msg)
        if len(self.command_log) > 5:
            self.command_log = self.command_log[-5:]
        logger.log(msg)

    def graceful_exit(self):
        logger.log("Editor exited.")
        self.exit_flag = True

    def dump_state(self) -> list:
        """Human-readable snapshot of the editor state, one entry per line."""
        lines = [
            f"mode: {self.mode}",
            f"screen: {self.height}x{self.width}",
            f"key stack: {''.join(self.key_stack)!r}",
            f"drawings: {len(self.drawings)}",
            "windows:",
        ]
        for i, win in enumerate(self.windows):
            kind = "popup" if win.is_floating else "main"
            mark = " *" if win.active else ""
            lines.append(f"  [{i}] {kind} at {win.row},{win.col} size {win.rows}x{win.cols}"
                         f" buffer {win.buffer_index}{mark}")
        lines.append("buffers:")
        for i, buf in enumerate(self.buffers):
            flags = []
            if buf.read_only:
                flags.append("ro")
            if buf.is_directory:
                flags.append("dir")
            lines.append(f"  [{i}] {buf.display_name} lines={buf.line_count}"
                         f" cursor={buf.cursor.row}:{buf.cursor.col} {' '.join(flags)}".rstrip())
        if self.command_log:
            lines.append("recent:")
            lines.extend(f"  {msg}" for msg in self.command_log)
        return lines
