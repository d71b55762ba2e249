from __future__ import annotations

import curses
from enum import Enum

from termsnake.types import Direction


class Command(str, Enum):
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"
    QUIT = "quit"
    RESTART = "restart"

    @property
    def direction(self) -> Direction | None:
        return _DIRECTIONS.get(self)


_DIRECTIONS = {
    Command.UP: Direction.UP,
    Command.RIGHT: Direction.RIGHT,
    Command.DOWN: Direction.DOWN,
    Command.LEFT: Direction.LEFT,
}

KEY_ESCAPE = 27

_KEYMAP: dict[int | str, Command] = {
    curses.KEY_UP: Command.UP,
    curses.KEY_RIGHT: Command.RIGHT,
    curses.KEY_DOWN: Command.DOWN,
    curses.KEY_LEFT: Command.LEFT,
    KEY_ESCAPE: Command.QUIT,
    "\x1b": Command.QUIT,
    "q": Command.QUIT,
    "Q": Command.QUIT,
    "r": Command.RESTART,
    "R": Command.RESTART,
}


def map_key(key: int | str) -> Command | None:
    """Translate a curses key code or character; unknown keys map to None."""
    if isinstance(key, int) and 32 <= key < 127:
        key = chr(key)
    return _KEYMAP.get(key)
