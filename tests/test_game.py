from __future__ import annotations

import random

from termsnake.config import GameSettings
from termsnake.game import SnakeGame, new_game, place_food, set_direction, update
from termsnake.types import Direction, Food, FoodKind, GameState, Point


def _state(snake: list[Point], direction: Direction, *, size: int = 10, food: Food | None = None) -> GameState:
    return GameState(width=size, height=size, snake=list(snake), direction=direction, food=food)


def test_new_game_centers_a_three_segment_snake(rng: random.Random) -> None:
    settings = GameSettings()
    state = new_game(settings, rng, high_score=9)
    assert state.snake == [Point(20, 7), Point(19, 7), Point(18, 7)]
    assert state.direction == Direction.RIGHT
    assert state.score == 0
    assert state.high_score == 9
    assert state.game_over is False
    assert state.food is not None and state.food.visible
    assert state.food.position not in state.snake
    assert settings.min_food_time <= state.food.timer < settings.max_food_time


def test_eating_food_grows_and_scores(rng: random.Random, small_settings: GameSettings) -> None:
    state = _state(
        [Point(5, 5), Point(4, 5), Point(3, 5)],
        Direction.RIGHT,
        food=Food(position=Point(6, 5), kind=FoodKind.CHEESE),
    )
    update(state, small_settings, rng)

    assert state.snake == [Point(6, 5), Point(5, 5), Point(4, 5), Point(3, 5)]
    assert state.score == 5
    assert state.high_score == 5
    assert state.food is not None
    assert state.food.visible
    assert state.food.position not in state.snake


def test_plain_move_translates_the_snake(rng: random.Random, small_settings: GameSettings) -> None:
    state = _state(
        [Point(5, 5), Point(4, 5), Point(3, 5)],
        Direction.RIGHT,
        food=Food(position=Point(0, 0), kind=FoodKind.EGGPLANT),
    )
    update(state, small_settings, rng)
    assert state.snake == [Point(6, 5), Point(5, 5), Point(4, 5)]
    assert state.score == 0
    assert state.ticks == 1


def test_edges_wrap_around(rng: random.Random, small_settings: GameSettings) -> None:
    state = _state([Point(9, 5), Point(8, 5)], Direction.RIGHT)
    update(state, small_settings, rng)
    assert state.head == Point(0, 5)
    assert state.game_over is False

    state = _state([Point(0, 5), Point(1, 5)], Direction.LEFT)
    update(state, small_settings, rng)
    assert state.head == Point(9, 5)

    state = _state([Point(3, 0), Point(3, 1)], Direction.UP)
    update(state, small_settings, rng)
    assert state.head == Point(3, 9)

    state = _state([Point(3, 9), Point(3, 8)], Direction.DOWN)
    update(state, small_settings, rng)
    assert state.head == Point(3, 0)


def test_self_collision_ends_game_without_moving(rng: random.Random) -> None:
    settings = GameSettings(width=5, height=5, timed_food=False)
    g = SnakeGame(
        settings=settings,
        rng=rng,
        state=GameState(
            width=5,
            height=5,
            snake=[Point(2, 2), Point(2, 3), Point(1, 3), Point(1, 2), Point(1, 1), Point(2, 1)],
            direction=Direction.UP,
        ),
    )
    before = list(g.state.snake)
    # Moving up would hit (2,1) which is body.
    s1 = g.update()
    assert s1.game_over is True
    assert s1.snake == before


def test_moving_into_the_tail_cell_is_fatal(rng: random.Random, small_settings: GameSettings) -> None:
    # A 2x2 loop: the head's right-hand neighbour is the tail.
    state = _state([Point(2, 2), Point(2, 3), Point(3, 3), Point(3, 2)], Direction.RIGHT)
    update(state, small_settings, rng)
    assert state.game_over is True
    assert state.snake == [Point(2, 2), Point(2, 3), Point(3, 3), Point(3, 2)]


def test_update_after_game_over_is_a_no_op(rng: random.Random, small_settings: GameSettings) -> None:
    state = _state([Point(5, 5), Point(4, 5)], Direction.RIGHT)
    state.game_over = True
    update(state, small_settings, rng)
    assert state.snake == [Point(5, 5), Point(4, 5)]
    assert state.ticks == 0


def test_reverse_is_ignored(rng: random.Random, small_settings: GameSettings) -> None:
    state = _state([Point(2, 1), Point(1, 1), Point(0, 1)], Direction.RIGHT)
    assert set_direction(state, Direction.LEFT) is False
    assert state.direction == Direction.RIGHT
    update(state, small_settings, rng)
    assert state.head == Point(3, 1)

    state = _state([Point(2, 5), Point(2, 6)], Direction.UP)
    assert set_direction(state, Direction.DOWN) is False
    assert state.direction == Direction.UP


def test_turn_takes_effect_on_next_tick(rng: random.Random, small_settings: GameSettings) -> None:
    state = _state([Point(2, 1), Point(1, 1), Point(0, 1)], Direction.RIGHT)
    assert set_direction(state, Direction.DOWN) is True
    assert state.head == Point(2, 1)
    update(state, small_settings, rng)
    assert state.head == Point(2, 2)


def test_hidden_food_cannot_be_eaten(rng: random.Random, small_settings: GameSettings) -> None:
    state = _state(
        [Point(5, 5), Point(4, 5)],
        Direction.RIGHT,
        food=Food(position=Point(6, 5), kind=FoodKind.CANDY, visible=False, respawn_counter=5),
    )
    update(state, small_settings, rng)
    assert len(state.snake) == 2
    assert state.score == 0


def test_food_vanishes_and_respawns(rng: random.Random) -> None:
    settings = GameSettings(
        width=20, height=20, min_food_time=2, max_food_time=3, food_respawn_time=2
    )
    state = GameState(
        width=20,
        height=20,
        snake=[Point(5, 10), Point(4, 10), Point(3, 10)],
        direction=Direction.RIGHT,
        food=Food(position=Point(0, 0), kind=FoodKind.EGGPLANT, timer=2),
    )
    update(state, settings, rng)
    assert state.food.visible and state.food.timer == 1
    update(state, settings, rng)
    assert not state.food.visible
    assert state.food.respawn_counter == 2
    update(state, settings, rng)
    assert not state.food.visible
    assert state.food.respawn_counter == 1
    update(state, settings, rng)
    assert state.food.visible
    assert state.food.timer == 2


def test_place_food_avoids_the_snake(rng: random.Random, small_settings: GameSettings) -> None:
    # 4x2 grid with a single free cell.
    snake = [Point(0, 0), Point(1, 0), Point(2, 0), Point(3, 0), Point(3, 1), Point(2, 1), Point(1, 1)]
    state = GameState(width=4, height=2, snake=snake, direction=Direction.LEFT)
    for _ in range(25):
        food = place_food(state, small_settings, rng)
        assert food.position == Point(0, 1)
        assert food.visible


def test_food_queue_serves_next_food(rng: random.Random) -> None:
    settings = GameSettings(width=6, height=4, timed_food=False)
    g = SnakeGame(
        settings=settings,
        rng=rng,
        state=GameState(
            width=6, height=4, snake=[Point(2, 1), Point(1, 1), Point(0, 1)], direction=Direction.RIGHT
        ),
        food_queue=[Point(1, 1), Point(5, 3)],
    )
    g.place_food_at(Point(3, 1))
    s1 = g.update()
    assert s1.game_over is False
    assert s1.score == g.state.score > 0
    assert len(s1.snake) == 4
    # (1, 1) is under the snake, so it is skipped.
    assert s1.food.position == Point(5, 3)


def test_random_play_keeps_invariants() -> None:
    rng = random.Random(99)
    settings = GameSettings(width=12, height=8, min_food_time=5, max_food_time=15, food_respawn_time=3)
    g = SnakeGame(settings=settings, rng=random.Random(7))
    directions = list(Direction)
    last_high = 0
    for _ in range(600):
        if g.game_over:
            g = g.fresh(high_score=g.state.high_score)
            assert g.state.high_score >= last_high
        g.set_direction(rng.choice(directions))
        before_len = len(g.state.snake)
        before_score = g.state.score
        before_body = list(g.state.snake)
        state = g.update()

        if state.game_over:
            assert state.snake == before_body
            continue
        grew = len(state.snake) - before_len
        assert grew in (0, 1)
        assert (grew == 1) == (state.score > before_score)
        assert state.score >= before_score
        assert state.high_score >= state.score
        assert len(set(state.snake)) == len(state.snake)
        for p in state.snake:
            assert 0 <= p.x < settings.width
            assert 0 <= p.y < settings.height
        if state.food is not None and state.food.visible:
            assert state.food.position not in state.snake[1:]
        last_high = state.high_score


def test_two_turns_in_one_tick_cannot_reverse(rng: random.Random, small_settings: GameSettings) -> None:
    state = _state([Point(5, 5), Point(4, 5), Point(3, 5)], Direction.RIGHT)
    assert set_direction(state, Direction.UP) is True
    # Still moving right until the next tick, so LEFT is a reversal.
    assert set_direction(state, Direction.LEFT) is False
    assert state.direction == Direction.UP

    update(state, small_settings, rng)
    assert state.game_over is False
    assert state.head == Point(5, 4)
    assert state.moving == Direction.UP

    assert set_direction(state, Direction.LEFT) is True
    update(state, small_settings, rng)
    assert state.head == Point(4, 4)
    assert state.game_over is False


def test_turn_can_be_replaced_before_the_tick(rng: random.Random, small_settings: GameSettings) -> None:
    state = _state([Point(5, 5), Point(4, 5), Point(3, 5)], Direction.RIGHT)
    set_direction(state, Direction.UP)
    assert set_direction(state, Direction.DOWN) is True
    update(state, small_settings, rng)
    assert state.head == Point(5, 6)
