"""
Translation of raw curses key codes into browser key events.
"""

import curses
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Key(Enum):
    HELP = "help"
    REFRESH = "refresh"
    FAVORITE_ADD = "favorite_add"
    FAVORITE_REMOVE = "favorite_remove"
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    CHAR = "char"
    OTHER = "other"


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    char: Optional[str] = None


ESC = 27

KEY_MAP = {
    curses.KEY_F1: Key.HELP,
    curses.KEY_F2: Key.REFRESH,
    curses.KEY_RIGHT: Key.FAVORITE_ADD,
    curses.KEY_LEFT: Key.FAVORITE_REMOVE,
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_ENTER: Key.ENTER,
    10: Key.ENTER,
    13: Key.ENTER,
    ESC: Key.ESCAPE,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    127: Key.BACKSPACE,
    8: Key.BACKSPACE,
}


def translate_key(code: int) -> KeyEvent:
    """Map a curses getch() code to a KeyEvent."""
    key = KEY_MAP.get(code)
    if key is not None:
        return KeyEvent(key)

    # printable ASCII only
    if 32 <= code <= 126:
        return KeyEvent(Key.CHAR, chr(code))

    return KeyEvent(Key.OTHER)
