from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from termsnake.errors import ConfigError
from termsnake.types import Direction


def repo_root() -> Path:
    # Project root is the directory that contains the `termsnake/` package.
    return Path(__file__).resolve().parents[1]


def load_env() -> None:
    # Prefer a project-local `.env`, fall back to searching from CWD.
    root_env = repo_root() / ".env"
    env_path = str(root_env) if root_env.exists() else (find_dotenv(usecwd=True) or str(root_env))
    load_dotenv(env_path)


class GameSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    width: int = Field(default=40, ge=1, le=400)
    height: int = Field(default=15, ge=1, le=200)
    initial_size: int = Field(default=3, ge=1)

    # Horizontal tick in milliseconds; vertical ticks are stretched by
    # aspect_ratio because terminal cells are taller than they are wide.
    base_speed_ms: int = Field(default=100, ge=1, le=10_000)
    aspect_ratio: float = Field(default=1.8, gt=0)
    sidebar_width: int = Field(default=20, ge=0)

    timed_food: bool = True
    min_food_time: int = Field(default=50, ge=1)
    max_food_time: int = Field(default=150, ge=2)
    food_respawn_time: int = Field(default=20, ge=1)

    @model_validator(mode="after")
    def _validate_bounds(self) -> "GameSettings":
        if self.initial_size > self.width:
            raise ValueError("initial_size must fit within width")
        if self.max_food_time <= self.min_food_time:
            raise ValueError("max_food_time must be greater than min_food_time")
        return self

    def tick_interval(self, direction: Direction) -> float:
        """Seconds between ticks while moving in `direction`."""
        ms = float(self.base_speed_ms)
        if direction.is_vertical:
            ms *= self.aspect_ratio
        return ms / 1000.0


_ENV_PREFIX = "SNAKE_"


def _env_overrides() -> dict[str, str]:
    out: dict[str, str] = {}
    for name in GameSettings.model_fields:
        raw = os.getenv(_ENV_PREFIX + name.upper())
        if raw is not None and raw.strip():
            out[name] = raw.strip()
    return out


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"cannot read config: {e}", source=str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", source=str(path)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("config must be a YAML mapping", source=str(path))
    return data


def load_settings(path: Path | None = None) -> GameSettings:
    """Build settings from `.env`/`SNAKE_*` variables, then an optional YAML file.

    Values from the YAML file win over environment values.
    """
    load_env()
    raw: dict[str, Any] = dict(_env_overrides())
    if path is not None:
        raw.update(_read_yaml(path))
    try:
        return GameSettings.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(str(e), source=str(path) if path is not None else "environment") from e
