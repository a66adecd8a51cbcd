# -*- coding: utf-8 -*-
"""
Pure game logic for 2048: the board model, the slide engine and the tile spawner.

Nothing in this package holds state; every function takes a grid and returns a new one.
"""

from .grid import Direction, Grid, InvalidGridError, Position, is_tile_value
from .slide import (
    MergeEvent,
    MoveEvent,
    MoveResult,
    Slot,
    accumulate,
    can_move,
    illegal_directions,
    is_stuck,
    legal_directions,
    slide,
)
from .spawn import TILE_SPAWN_PROBS, Spawn, SpawnError, apply_spawns, spawn_many, spawn_one, spawn_outcomes

__all__ = [
    "Direction",
    "Grid",
    "InvalidGridError",
    "Position",
    "is_tile_value",
    "MergeEvent",
    "MoveEvent",
    "MoveResult",
    "Slot",
    "accumulate",
    "can_move",
    "illegal_directions",
    "is_stuck",
    "legal_directions",
    "slide",
    "TILE_SPAWN_PROBS",
    "Spawn",
    "SpawnError",
    "apply_spawns",
    "spawn_many",
    "spawn_one",
    "spawn_outcomes",
]
