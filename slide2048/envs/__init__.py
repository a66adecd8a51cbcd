# -*- coding: utf-8 -*-
"""
Python implementation of the 2048 game flow.

This module provides the session state machine (`new_session`, `apply_direction`) and the `Game2048` class, which
keeps a running session for interactive hosts.
"""

from .game import Game2048
from .session import GameStatus, Session, Turn, advance, apply_direction, evaluate_status, new_session

__all__ = [
    "Game2048",
    "GameStatus",
    "Session",
    "Turn",
    "advance",
    "apply_direction",
    "evaluate_status",
    "new_session",
]
