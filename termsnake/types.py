from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(str, Enum):
    UP = "U"
    RIGHT = "R"
    DOWN = "D"
    LEFT = "L"

    @classmethod
    def from_str(cls, raw: str) -> "Direction":
        raw = str(raw).strip().upper()
        if raw in cls.__members__:
            return cls[raw]
        try:
            return Direction(raw)
        except ValueError as e:
            raise ValueError(f"invalid direction: {raw!r}") from e

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Screen coordinates: y grows downwards.
_DELTAS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


@dataclass(frozen=True, slots=True)
class Point:
    x: int
    y: int


class FoodKind(Enum):
    EGGPLANT = ("🍆", 1)
    DRUMSTICK = ("🍗", 3)
    CHEESE = ("🧀", 5)
    CANDY = ("🍬", 7)

    def __init__(self, symbol: str, points: int) -> None:
        self.symbol = symbol
        self.points = points


@dataclass(slots=True)
class Food:
    position: Point
    kind: FoodKind
    visible: bool = True
    timer: int = 0  # ticks left while visible (timed food only)
    respawn_counter: int = 0  # ticks left while hidden


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    width: int
    height: int
    snake: tuple[Point, ...]  # head first
    direction: Direction
    food: Point | None
    score: int
    high_score: int
    ticks: int
    alive: bool


@dataclass(slots=True)
class GameState:
    width: int
    height: int
    snake: list[Point]  # head first
    direction: Direction  # pending, applied on the next tick
    food: Food | None = None
    score: int = 0
    high_score: int = 0
    game_over: bool = False
    ticks: int = 0
    moving: Direction | None = None  # direction of the last step taken

    def __post_init__(self) -> None:
        if self.moving is None:
            self.moving = self.direction

    @property
    def head(self) -> Point:
        return self.snake[0]

    def snapshot(self) -> StateSnapshot:
        food = self.food.position if self.food is not None and self.food.visible else None
        return StateSnapshot(
            width=self.width,
            height=self.height,
            snake=tuple(self.snake),
            direction=self.direction,
            food=food,
            score=self.score,
            high_score=self.high_score,
            ticks=self.ticks,
            alive=not self.game_over,
        )
