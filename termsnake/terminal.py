from __future__ import annotations

import curses
import os
import selectors
import sys
import threading
from typing import Any, Protocol

from termsnake.errors import TerminalInitError
from termsnake.render import Frame

_COLOR_NAMES = ("white", "green", "red", "yellow", "dark_gray")


class Surface(Protocol):
    def paint(self, frame: Frame) -> None: ...

    def read_keys(self) -> list[int | str]:
        """Blocking; raises EOFError when no more input will arrive."""
        ...


class CursesSurface:
    """Terminal collaborator backed by curses.

    `paint` runs on the game loop thread and `read_keys` on the input thread;
    curses is not thread-safe, so both take `_lock`. `read_keys` waits for
    stdin to become readable before taking the lock so a blocked reader never
    holds up a frame.
    """

    def __init__(self, *, stdin: Any = None) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._lock = threading.Lock()
        self._screen: Any = None
        self._selector: selectors.BaseSelector | None = None
        self._pairs: dict[str, int] = {}
        self._dim_gray = True

    def __enter__(self) -> "CursesSurface":
        self.open()
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def open(self) -> None:
        # Make a lone Escape arrive quickly instead of after the default 1s.
        os.environ.setdefault("ESCDELAY", "25")
        try:
            screen = curses.initscr()
        except curses.error as e:
            raise TerminalInitError(f"cannot initialize terminal: {e}") from e
        self._screen = screen
        try:
            curses.noecho()
            curses.cbreak()
            screen.keypad(True)
            screen.nodelay(True)
            try:
                curses.curs_set(0)
            except curses.error:
                pass  # not every terminal can hide the cursor
            self._init_colors()
            self._selector = selectors.DefaultSelector()
            self._selector.register(self._stdin, selectors.EVENT_READ)
        except (curses.error, OSError, ValueError) as e:
            self.close()
            raise TerminalInitError(f"cannot configure terminal: {e}") from e

    def close(self) -> None:
        if self._selector is not None:
            self._selector.close()
            self._selector = None
        if self._screen is None:
            return
        screen, self._screen = self._screen, None
        with self._lock:
            try:
                screen.keypad(False)
                curses.nocbreak()
                curses.echo()
            finally:
                curses.endwin()

    def _init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        try:
            curses.use_default_colors()
            bg = -1
        except curses.error:
            bg = curses.COLOR_BLACK
        self._dim_gray = curses.COLORS <= 8
        dark_gray = curses.COLOR_WHITE if self._dim_gray else 8
        fgs = {
            "white": curses.COLOR_WHITE,
            "green": curses.COLOR_GREEN,
            "red": curses.COLOR_RED,
            "yellow": curses.COLOR_YELLOW,
            "dark_gray": dark_gray,
        }
        for i, name in enumerate(_COLOR_NAMES, start=1):
            curses.init_pair(i, fgs[name], bg)
            self._pairs[name] = i

    def _attr(self, fg: str, attrs: frozenset[str]) -> int:
        a = curses.color_pair(self._pairs[fg]) if fg in self._pairs else 0
        if fg == "dark_gray" and self._dim_gray:
            a |= curses.A_DIM
        if "bold" in attrs:
            a |= curses.A_BOLD
        if "blink" in attrs:
            a |= curses.A_BLINK
        return a

    def paint(self, frame: Frame) -> None:
        if self._screen is None:
            return
        with self._lock:
            screen = self._screen
            max_y, max_x = screen.getmaxyx()
            screen.erase()
            for cell in frame.cells:
                if not (0 <= cell.y < max_y and 0 <= cell.x < max_x):
                    continue
                try:
                    screen.addstr(cell.y, cell.x, cell.glyph, self._attr(cell.fg, cell.attrs))
                except curses.error:
                    # Writing the bottom-right cell moves the cursor off-screen.
                    pass
            screen.refresh()

    def read_keys(self) -> list[int | str]:
        """Block until input is available, then return every pending key.

        Raises EOFError once the surface has been closed.
        """
        selector = self._selector
        if selector is None or self._screen is None:
            raise EOFError("terminal closed")
        try:
            selector.select()
        except (OSError, ValueError) as e:
            raise EOFError("terminal closed") from e
        keys: list[int | str] = []
        with self._lock:
            if self._screen is None:
                raise EOFError("terminal closed")
            while True:
                try:
                    key = self._screen.get_wch()
                except curses.error:
                    break  # nodelay: nothing left to read
                keys.append(key)
        return keys
