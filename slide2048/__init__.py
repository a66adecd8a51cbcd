"""Sliding-tile 2048 game: board engine, session state machine and a matplotlib front end."""

from .config import PRESETS, ConfigError, GameConfig, get_preset
from .core import Direction, Grid, MoveResult, Spawn, slide, spawn_many, spawn_one
from .envs import Game2048, GameStatus, Session, apply_direction, new_session

__all__ = [
    "PRESETS",
    "ConfigError",
    "GameConfig",
    "get_preset",
    "Direction",
    "Grid",
    "MoveResult",
    "Spawn",
    "slide",
    "spawn_many",
    "spawn_one",
    "Game2048",
    "GameStatus",
    "Session",
    "apply_direction",
    "new_session",
]
