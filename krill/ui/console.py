"""
krill/ui/console.py

Thin curses adapter giving the editor the terminal primitives it needs:
non-blocking single-character input, screen size, cursor placement, styled
text output and clearing. Colors are named ("red", "grey", ...) and turned into
curses color pairs on first use.
"""
import curses
from contextlib import contextmanager

from krill import logger

COLOR_NAMES = {
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
    "grey": curses.COLOR_WHITE,
}

def printable(text: str) -> str:
    """Replace what addstr cannot take: lone surrogates from undecodable bytes and NULs."""
    return text.encode("utf-8", "replace").decode("utf-8").replace("\0", " ")

class CursesConsole:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self._pairs = {}
        self._pending = None

        curses.raw()
        curses.noecho()
        stdscr.keypad(False)
        stdscr.nodelay(True)
        try:
            curses.start_color()
            curses.use_default_colors()
            self.has_colors = curses.has_colors()
        except curses.error:
            self.has_colors = False

    # ── input ────────────────────────────────────────────
    def input_available(self) -> bool:
        if self._pending is None:
            try:
                key = self.stdscr.get_wch()
            except curses.error:
                # nodelay: nothing typed yet
                return False
            if not isinstance(key, str):
                # function keys and KEY_RESIZE; the layout follows the size anyway
                return False
            self._pending = key
        return True

    def read_char(self) -> str:
        """Consume one pending input character ("" when there is none)."""
        if not self.input_available():
            return ""
        char, self._pending = self._pending, None
        return char

    # ── output ───────────────────────────────────────────
    def winsize(self) -> tuple:
        return self.stdscr.getmaxyx()

    def move(self, row: int, col: int):
        try:
            self.stdscr.move(row, col)
        except curses.error:
            logger.log(f"curses.error in move to ({row},{col})")

    def write(self, text: str, color: str = None, background: str = None, bold: bool = False):
        """Write `text` at the cursor; the cursor ends up after it."""
        y, x = self.stdscr.getyx()
        logger.safe_addstr(self.stdscr, y, x, printable(text), self._attr(color, background, bold))

    def clear(self):
        self.stdscr.erase()

    def refresh(self):
        self.stdscr.refresh()

    @contextmanager
    def saved_cursor(self):
        """Restore the cursor position after the block, whatever it drew."""
        y, x = self.stdscr.getyx()
        try:
            yield
        finally:
            self.move(y, x)

    def _attr(self, color, background, bold) -> int:
        attr = curses.A_BOLD if bold else 0
        if color == "grey":
            attr |= curses.A_DIM
        if self.has_colors and (color or background):
            attr |= curses.color_pair(self._pair(color, background))
        return attr

    def _pair(self, color, background) -> int:
        key = (color, background)
        if key not in self._pairs:
            number = len(self._pairs) + 1
            fg = COLOR_NAMES.get(color, -1)
            bg = COLOR_NAMES.get(background, -1)
            try:
                curses.init_pair(number, fg, bg)
            except curses.error:
                logger.log(f"curses.error in init_pair({number}, {fg}, {bg})")
                return 0
            self._pairs[key] = number
        return self._pairs[key]
