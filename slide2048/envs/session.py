"""
Game state machine for 2048: score, status and the transition applied on each player move.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import NamedTuple

from numpy.random import Generator, default_rng

from slide2048.config import GameConfig
from slide2048.core.grid import Direction, Grid
from slide2048.core.slide import MoveResult, is_stuck, slide
from slide2048.core.spawn import Spawn, apply_spawns, spawn_many, spawn_one

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class GameStatus(str, Enum):
    """Progress of a game. WON and OVER end the game unless the configuration allows play after a win."""

    PLAYING = 'playing'
    WON = 'won'
    OVER = 'over'


@dataclass(frozen=True)
class Session:
    """
    One game in progress.

    Attributes
    ----------
    grid : Grid
        The current board.
    score : int
        Sum of every merge since the start.
    status : GameStatus
        Progress of the game.
    config : GameConfig
        Rules of the game.
    """

    grid: Grid
    score: int = 0
    status: GameStatus = GameStatus.PLAYING
    config: GameConfig = field(default_factory=GameConfig)

    @property
    def accepts_moves(self) -> bool:
        """Whether a direction can still change this session."""
        if self.status is GameStatus.PLAYING:
            return True
        return self.status is GameStatus.WON and self.config.continue_after_win


class Turn(NamedTuple):
    """
    Result of one player move.

    Attributes
    ----------
    session : Session
        The session after the move. Same object as before when nothing changed.
    move : MoveResult | None
        The slide, None when the session no longer accepted moves.
    spawn : Spawn | None
        The tile spawned after the slide, None when the slide changed nothing.
    """

    session: Session
    move: MoveResult | None
    spawn: Spawn | None


def evaluate_status(grid: Grid, config: GameConfig) -> GameStatus:
    """
    Compute the status of a board.

    Parameters
    ----------
    grid : Grid
        The board to evaluate.
    config : GameConfig
        Rules providing the winning tile.

    Returns
    -------
    GameStatus
        WON if a tile reached the winning tile, else OVER if no move is possible, else PLAYING.

    Notes
    -----
    The win is checked first so a board both winning and stuck reports WON.
    """
    if grid.max_tile >= config.winning_tile:
        return GameStatus.WON
    if is_stuck(grid):
        return GameStatus.OVER
    return GameStatus.PLAYING


def new_session(
    width: int | None = None,
    height: int | None = None,
    config: GameConfig | None = None,
    rng: Generator | None = None,
    seed: int | None = None,
) -> Session:
    """
    Start a game on an empty board with the configured number of spawned tiles.

    Parameters
    ----------
    width : int, optional
        Number of columns, overriding the configuration.
    height : int, optional
        Number of rows, overriding the configuration.
    config : GameConfig, optional
        Rules of the game, by default the classic game.
    rng : Generator, optional
        Random generator used for the start tiles.
    seed : int, optional
        Seed for a fresh generator, ignored when ``rng`` is given.

    Returns
    -------
    Session
        A fresh session, normally PLAYING.
    """
    config = config or GameConfig()
    if width is not None or height is not None:
        config = config.replace(
            width=config.width if width is None else width, height=config.height if height is None else height
        )
    if rng is None and seed is not None:
        rng = default_rng(seed)

    grid = Grid.empty(config.width, config.height)
    spawns = spawn_many(config.start_tiles, grid, rng=rng, probabilities=config.spawn_probabilities)
    grid = apply_spawns(grid, spawns)

    _logger.debug('New %dx%d session with start tiles %s', config.width, config.height, spawns)
    return Session(grid=grid, score=0, status=evaluate_status(grid, config), config=config)


def advance(session: Session, direction: Direction, rng: Generator | None = None) -> Turn:
    """
    Apply a player move and report what happened.

    Parameters
    ----------
    session : Session
        The session before the move. Not modified.
    direction : Direction
        The direction chosen by the player.
    rng : Generator, optional
        Random generator used for the spawned tile.

    Returns
    -------
    Turn
        The new session with the slide and the spawned tile.

    Notes
    -----
    - A move that changes nothing returns the same session: no score, no spawn.
    - A changed board always has an empty cell, so exactly one tile is spawned before the status is evaluated.
    """
    direction = Direction(direction)
    if not session.accepts_moves:
        _logger.debug('Ignoring %s: game is %s', direction.value, session.status.value)
        return Turn(session=session, move=None, spawn=None)

    move = slide(session.grid, direction)
    if not move.changed:
        return Turn(session=session, move=move, spawn=None)

    spawn = spawn_one(move.grid, rng=rng, probabilities=session.config.spawn_probabilities)
    grid = apply_spawns(move.grid, [spawn])
    status = evaluate_status(grid, session.config)

    if status is not session.status:
        _logger.info('Game status changed from %s to %s', session.status.value, status.value)

    updated = replace(session, grid=grid, score=session.score + move.score_delta, status=status)
    return Turn(session=updated, move=move, spawn=spawn)


def apply_direction(session: Session, direction: Direction, rng: Generator | None = None) -> Session:
    """Apply a player move and return the resulting session."""
    return advance(session, direction, rng=rng).session
