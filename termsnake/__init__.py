from __future__ import annotations

from termsnake.config import GameSettings, load_settings
from termsnake.errors import ConfigError, TerminalInitError, TermsnakeError
from termsnake.game import SnakeGame, new_game, place_food, set_direction, update
from termsnake.render import Frame, build_frame, render_ascii
from termsnake.replay import Replay, load_replay, run_replay
from termsnake.session import Session
from termsnake.types import Direction, Food, FoodKind, GameState, Point, StateSnapshot

__all__ = [
    "__version__",
    # Model
    "Direction",
    "Food",
    "FoodKind",
    "GameState",
    "Point",
    "StateSnapshot",
    # Simulation
    "SnakeGame",
    "new_game",
    "place_food",
    "set_direction",
    "update",
    "Session",
    # Config
    "GameSettings",
    "load_settings",
    # Errors
    "TermsnakeError",
    "ConfigError",
    "TerminalInitError",
    # Rendering
    "Frame",
    "build_frame",
    "render_ascii",
    # Replay
    "Replay",
    "load_replay",
    "run_replay",
]

__version__ = "0.1.0"
