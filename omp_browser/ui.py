"""
Curses rendering for the server browser.
"""

import curses
from dataclasses import dataclass
from typing import List, Optional

from .keys import KeyEvent, translate_key


# Rows below the list: status line, footer, spare line
FOOTER_ROWS = 3

FAVORITE_PAIR = 1
STATUS_PAIR = 2
HEADER_PAIR = 3


@dataclass
class Row:
    text: str
    selected: bool = False
    favorite: bool = False


class CursesScreen:
    """Draws frames on a curses window and reads keys from it."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.favorite_attr = curses.A_BOLD
        self.status_attr = curses.A_BOLD
        self.header_attr = curses.A_BOLD
        self._init_colors()

        try:
            curses.curs_set(0)
        except curses.error:
            pass
        self.stdscr.keypad(True)

    def _init_colors(self):
        if not curses.has_colors():
            return
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(FAVORITE_PAIR, curses.COLOR_YELLOW, -1)
            curses.init_pair(STATUS_PAIR, curses.COLOR_RED, -1)
            curses.init_pair(HEADER_PAIR, curses.COLOR_CYAN, -1)
        except curses.error:
            return
        self.favorite_attr = curses.color_pair(FAVORITE_PAIR)
        self.status_attr = curses.color_pair(STATUS_PAIR) | curses.A_BOLD
        self.header_attr = curses.color_pair(HEADER_PAIR) | curses.A_BOLD

    def page_size(self) -> int:
        height, _ = self.stdscr.getmaxyx()
        return max(1, height - FOOTER_ROWS)

    def _put(self, y: int, text: str, attr: int = curses.A_NORMAL):
        height, width = self.stdscr.getmaxyx()
        if y < 0 or y >= height or width <= 1:
            return
        try:
            # never write the last column; curses errors on the bottom-right cell
            self.stdscr.addstr(y, 0, text[:width - 1], attr)
        except curses.error:
            pass

    def render(self, rows: List[Row], search_term: str, status: Optional[str] = None):
        height, _ = self.stdscr.getmaxyx()
        self.stdscr.erase()

        for y, row in enumerate(rows):
            marker = ">" if row.selected else " "
            attr = self.favorite_attr if row.favorite else curses.A_NORMAL
            if row.selected:
                attr |= curses.A_REVERSE
            self._put(y, f"{marker} {row.text}", attr)

        if status:
            self._put(height - 2, status, self.status_attr)
        self._put(height - 1, f"Search Term: {search_term}")
        self.stdscr.refresh()

    def show_message(self, text: str):
        self.stdscr.erase()
        self._put(0, text)
        self.stdscr.refresh()

    def show_help(self, lines: List[str]):
        self.stdscr.erase()
        for y, line in enumerate(lines):
            self._put(y, line, self.header_attr if y == 0 else curses.A_NORMAL)
        self.stdscr.refresh()

    def read_key(self) -> KeyEvent:
        """Block for one key press."""
        while True:
            # KEY_RESIZE comes back as Key.OTHER, which triggers a redraw
            code = self.stdscr.getch()
            if code != -1:
                return translate_key(code)
