from __future__ import annotations

import random
from collections import deque
from collections.abc import Iterable

from termsnake.config import GameSettings
from termsnake.types import Direction, Food, FoodKind, GameState, Point

_FOOD_KINDS = tuple(FoodKind)


def new_game(settings: GameSettings, rng: random.Random, *, high_score: int = 0) -> GameState:
    """Fresh game: a straight snake centered on the grid, heading right, with food placed."""
    cx, cy = settings.width // 2, settings.height // 2
    state = GameState(
        width=settings.width,
        height=settings.height,
        snake=[Point(cx - i, cy) for i in range(settings.initial_size)],
        direction=Direction.RIGHT,
        high_score=high_score,
    )
    place_food(state, settings, rng)
    return state


def place_food(
    state: GameState,
    settings: GameSettings,
    rng: random.Random,
    *,
    queue: deque[Point] | None = None,
) -> Food:
    kind = rng.choice(_FOOD_KINDS)
    timer = 0
    if settings.timed_food:
        timer = rng.randrange(settings.min_food_time, settings.max_food_time)

    body = set(state.snake)
    position: Point | None = None
    while queue:
        cand = queue.popleft()
        if cand not in body:
            position = cand
            break
    # Rejection sampling; the grid is never close to full in practice.
    while position is None:
        cand = Point(rng.randrange(state.width), rng.randrange(state.height))
        if cand not in body:
            position = cand

    state.food = Food(position=position, kind=kind, visible=True, timer=timer)
    return state.food


def put_food(state: GameState, settings: GameSettings, rng: random.Random, position: Point) -> Food:
    """Serve food at a fixed position, used to set up scripted games."""
    return place_food(state, settings, rng, queue=deque([position]))


def set_direction(state: GameState, requested: Direction) -> bool:
    """Queue a turn for the next tick.

    A turn back onto the direction the snake last moved in is dropped, no
    matter how many turns were queued since that step.
    """
    if requested == state.moving.opposite:
        return False
    state.direction = requested
    return True


def _advance_food_timer(
    state: GameState, settings: GameSettings, rng: random.Random, queue: deque[Point] | None
) -> None:
    food = state.food
    if food is None:
        place_food(state, settings, rng, queue=queue)
        return
    if food.visible:
        food.timer -= 1
        if food.timer <= 0:
            food.visible = False
            food.respawn_counter = settings.food_respawn_time
    else:
        food.respawn_counter -= 1
        if food.respawn_counter <= 0:
            place_food(state, settings, rng, queue=queue)


def next_head(state: GameState) -> Point:
    dx, dy = state.direction.delta
    head = state.head
    return Point((head.x + dx) % state.width, (head.y + dy) % state.height)


def update(
    state: GameState,
    settings: GameSettings,
    rng: random.Random,
    *,
    food_queue: deque[Point] | None = None,
) -> GameState:
    """Advance the game by one tick, mutating `state` in place."""
    if state.game_over:
        return state

    if settings.timed_food:
        _advance_food_timer(state, settings, rng, food_queue)

    head = next_head(state)

    # The tail still counts: moving into the cell it is about to vacate is fatal.
    if head in state.snake:
        state.game_over = True
        return state

    state.snake.insert(0, head)
    state.moving = state.direction
    state.ticks += 1

    food = state.food
    if food is not None and food.visible and head == food.position:
        state.score += food.kind.points
        state.high_score = max(state.high_score, state.score)
        place_food(state, settings, rng, queue=food_queue)
    else:
        state.snake.pop()
    return state


class SnakeGame:
    def __init__(
        self,
        *,
        settings: GameSettings,
        rng: random.Random | None = None,
        state: GameState | None = None,
        food_queue: Iterable[Point] | None = None,
        high_score: int = 0,
    ) -> None:
        self.settings = settings
        self._rng = rng if rng is not None else random.Random()
        self._food_queue: deque[Point] = deque(food_queue or ())
        if state is None:
            state = new_game(settings, self._rng, high_score=high_score)
        self._state = state

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def game_over(self) -> bool:
        return self._state.game_over

    def set_direction(self, requested: Direction) -> bool:
        return set_direction(self._state, requested)

    def place_food_at(self, position: Point) -> Food:
        return put_food(self._state, self.settings, self._rng, position)

    def update(self) -> GameState:
        return update(self._state, self.settings, self._rng, food_queue=self._food_queue)

    def fresh(self, *, high_score: int) -> "SnakeGame":
        """A new game sharing this game's settings and random source."""
        return SnakeGame(settings=self.settings, rng=self._rng, high_score=high_score)
