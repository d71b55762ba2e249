from __future__ import annotations

import random
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from termsnake.config import GameSettings
from termsnake.game import SnakeGame
from termsnake.types import Direction, GameState, Point


def _point(raw: Any) -> Point:
    if isinstance(raw, Point):
        return raw
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return Point(int(raw[0]), int(raw[1]))
    if isinstance(raw, dict) and {"x", "y"} <= raw.keys():
        return Point(int(raw["x"]), int(raw["y"]))
    raise ValueError(f"invalid point: {raw!r}")


def _direction(raw: Any) -> Direction:
    if isinstance(raw, Direction):
        return raw
    return Direction.from_str(raw)


class Replay(BaseModel):
    """A scripted game: starting position, food to serve, and one move per tick."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(ge=1)
    height: int = Field(ge=1)
    snake: list[Point]
    direction: Direction
    food: Point | None = None
    food_queue: list[Point] = Field(default_factory=list)
    moves: list[Direction | None] = Field(default_factory=list)
    seed: int = 0
    timed_food: bool = False

    @field_validator("snake", "food_queue", mode="before")
    @classmethod
    def _parse_points(cls, v: Any) -> list[Point]:
        if not isinstance(v, list):
            raise ValueError("expected a list of [x, y] points")
        return [_point(p) for p in v]

    @field_validator("food", mode="before")
    @classmethod
    def _parse_food(cls, v: Any) -> Point | None:
        return None if v is None else _point(v)

    @field_validator("direction", mode="before")
    @classmethod
    def _parse_direction(cls, v: Any) -> Direction:
        return _direction(v)

    @field_validator("moves", mode="before")
    @classmethod
    def _parse_moves(cls, v: Any) -> list[Direction | None]:
        if not isinstance(v, list):
            raise ValueError("moves must be a list")
        return [None if m is None else _direction(m) for m in v]

    @model_validator(mode="after")
    def _validate_board(self) -> "Replay":
        if not self.snake:
            raise ValueError("snake must be non-empty")
        if len(set(self.snake)) != len(self.snake):
            raise ValueError("snake must not overlap itself")
        for p in [*self.snake, *([self.food] if self.food else []), *self.food_queue]:
            if not (0 <= p.x < self.width and 0 <= p.y < self.height):
                raise ValueError(f"point out of bounds: ({p.x}, {p.y})")
        try:
            self.settings()
        except ValidationError as e:
            raise ValueError(f"unsupported board: {e}") from e
        return self

    def settings(self) -> GameSettings:
        return GameSettings(
            width=self.width,
            height=self.height,
            initial_size=min(len(self.snake), self.width),
            timed_food=self.timed_food,
        )


def load_replay(path: str | Path) -> Replay:
    # YAML is a superset of JSON, so both formats load here.
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("replay must be a mapping")
    try:
        return Replay.model_validate(data)
    except ValidationError as e:
        raise ValueError(str(e)) from e


def start_game(replay: Replay) -> SnakeGame:
    """Set up the replay's board.

    Without `food` the board starts empty. Untimed food only appears once
    something is eaten, so such a replay never has food; timed food spawns
    on the first tick.
    """
    rng = random.Random(replay.seed)
    settings = replay.settings()
    state = GameState(
        width=replay.width,
        height=replay.height,
        snake=list(replay.snake),
        direction=replay.direction,
    )
    game = SnakeGame(settings=settings, rng=rng, state=state, food_queue=replay.food_queue)
    if replay.food is not None:
        game.place_food_at(replay.food)
    return game


def run_replay(
    replay: Replay, *, on_tick: Callable[[GameState], None] | None = None
) -> GameState:
    """Play every move in order, stopping at game over.

    `on_tick` sees the starting state and the state after each tick.
    """
    game = start_game(replay)
    if on_tick is not None:
        on_tick(game.state)
    for move in replay.moves:
        if game.game_over:
            break
        if move is not None:
            game.set_direction(move)
        game.update()
        if on_tick is not None:
            on_tick(game.state)
    return game.state
