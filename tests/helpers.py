from __future__ import annotations

import threading

from termsnake.render import Cell, Frame


class FakeSurface:
    """Records painted frames; hands out scripted key batches, then idles."""

    def __init__(self, keys: list[list[int | str]] | None = None) -> None:
        self.frames: list[Frame] = []
        self._keys = list(keys or [])
        self._idle = threading.Event()

    def paint(self, frame: Frame) -> None:
        self.frames.append(frame)

    def read_keys(self) -> list[int | str]:
        if self._keys:
            return self._keys.pop(0)
        self._idle.wait(0.05)
        return []


def cell_at(frame: Frame, x: int, y: int) -> Cell | None:
    """Topmost cell painted at (x, y), if any."""
    found = None
    for c in frame.cells:
        if c.x == x and c.y == y:
            found = c
    return found
