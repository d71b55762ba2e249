from __future__ import annotations

from dataclasses import dataclass, field

from termsnake.config import GameSettings
from termsnake.types import FoodKind, GameState, StateSnapshot

BORDER_HORIZONTAL = "━"
BORDER_VERTICAL = "┃"
BORDER_TOP_LEFT = "┏"
BORDER_TOP_RIGHT = "┓"
BORDER_BOTTOM_LEFT = "┗"
BORDER_BOTTOM_RIGHT = "┛"
SIDEBAR_SEPARATOR = "│"
SNAKE_HEAD = "▣"
SNAKE_BODY = "◼"
EMPTY_CELL = "⬚"

GAME_OVER_LINES = ("Game Over!", "Press 'q' to quit or 'r' to restart.")


@dataclass(frozen=True, slots=True)
class Cell:
    x: int
    y: int
    glyph: str
    fg: str = "default"
    attrs: frozenset[str] = frozenset()


@dataclass(slots=True)
class Frame:
    width: int
    height: int
    cells: list[Cell] = field(default_factory=list)

    def put(self, x: int, y: int, glyph: str, fg: str = "default", *attrs: str) -> None:
        self.cells.append(Cell(x=x, y=y, glyph=glyph, fg=fg, attrs=frozenset(attrs)))

    def text(self, x: int, y: int, text: str, fg: str = "default", *attrs: str) -> None:
        for i, ch in enumerate(text):
            self.put(x + i, y, ch, fg, *attrs)


def _food_attrs(timer: int, settings: GameSettings) -> tuple[str, ...]:
    # Purely cosmetic warning that the food is about to vanish.
    if not settings.timed_food:
        return ()
    if timer < settings.min_food_time // 3:
        return ("blink",)
    if timer < settings.min_food_time // 2:
        return ("bold",)
    return ()


def _draw_sidebar(frame: Frame, state: GameState, settings: GameSettings) -> None:
    sw = settings.sidebar_width
    for y in range(state.height + 2):
        frame.put(sw - 1, y, SIDEBAR_SEPARATOR, "white")

    frame.text(2, 2, f"SCORE: {state.score}", "yellow", "bold")
    frame.text(2, 3, f"HIGH: {state.high_score}", "yellow")

    for i, kind in enumerate(FoodKind):
        frame.put(4, 7 + i, kind.symbol, "red")
        frame.put(6, 7 + i, "=", "white")
        frame.text(8, 7 + i, str(kind.points), "yellow")


def _draw_border(frame: Frame, state: GameState, left: int) -> None:
    right = left + state.width + 1
    bottom = state.height + 1
    for x in range(left, right + 1):
        frame.put(x, 0, BORDER_HORIZONTAL, "white")
        frame.put(x, bottom, BORDER_HORIZONTAL, "white")
    for y in range(bottom + 1):
        frame.put(left, y, BORDER_VERTICAL, "white")
        frame.put(right, y, BORDER_VERTICAL, "white")
    frame.put(left, 0, BORDER_TOP_LEFT, "white")
    frame.put(right, 0, BORDER_TOP_RIGHT, "white")
    frame.put(left, bottom, BORDER_BOTTOM_LEFT, "white")
    frame.put(right, bottom, BORDER_BOTTOM_RIGHT, "white")


def build_frame(state: GameState, settings: GameSettings) -> Frame:
    left = settings.sidebar_width
    frame = Frame(width=left + state.width + 2, height=state.height + 2)

    if left > 0:
        _draw_sidebar(frame, state, settings)
    _draw_border(frame, state, left)

    for y in range(state.height):
        for x in range(state.width):
            frame.put(left + 1 + x, 1 + y, EMPTY_CELL, "dark_gray")

    for i, p in enumerate(state.snake):
        frame.put(left + 1 + p.x, 1 + p.y, SNAKE_HEAD if i == 0 else SNAKE_BODY, "green")

    food = state.food
    if food is not None and food.visible:
        frame.put(
            left + 1 + food.position.x,
            1 + food.position.y,
            food.kind.symbol,
            "red",
            *_food_attrs(food.timer, settings),
        )

    if state.game_over:
        center = left + state.width // 2
        row = state.height // 2
        for i, line in enumerate(GAME_OVER_LINES):
            frame.text(center - len(line) // 2, row + i, line, "red")
        score_line = f"Final Score: {state.score}"
        frame.text(
            center - len(score_line) // 2, row + len(GAME_OVER_LINES), score_line, "yellow", "bold"
        )
    return frame


def render_ascii(state: GameState | StateSnapshot) -> str:
    snap = state.snapshot() if isinstance(state, GameState) else state
    grid = [["." for _ in range(snap.width)] for _ in range(snap.height)]
    if snap.food is not None:
        grid[snap.food.y][snap.food.x] = "*"
    for i, p in enumerate(snap.snake):
        grid[p.y][p.x] = "H" if i == 0 else "o"
    return "".join("".join(row) + "\n" for row in grid)
