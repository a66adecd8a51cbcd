"""2048 game holder for interactive hosts such as a GUI event loop."""

import logging
from threading import Lock

from numpy.random import PCG64DXSM, Generator, default_rng

from slide2048.config import GameConfig
from slide2048.core.grid import Direction, Grid
from slide2048.core.slide import legal_directions
from slide2048.envs.session import GameStatus, Session, Turn, advance, new_session

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class Game2048:
    """
    2048 game.

    This class keeps the running session for a host that cannot thread it through its own code, and serializes
    moves so that each one completes (slide, spawn, status) before the next starts.
    """

    def __init__(self, config: GameConfig | None = None, seed: int | None = None):
        """
        Initialize the game and start a first session.

        Parameters
        ----------
        config : GameConfig, optional
            Rules of the game (default is the classic game).
        seed : int, optional
            Seed of the random generator, for reproducible games.
        """
        self.config = config or GameConfig()
        self._lock = Lock()
        self._rng: Generator = default_rng(PCG64DXSM())
        self._session: Session | None = None

        self.reset(seed=seed)

    @property
    def session(self) -> Session:
        """The current session."""
        return self._session

    @property
    def grid(self) -> Grid:
        return self._session.grid

    @property
    def score(self) -> int:
        return self._session.score

    @property
    def status(self) -> GameStatus:
        return self._session.status

    @property
    def is_finished(self) -> bool:
        """
        Check if the game is finished.

        Returns
        -------
        bool
            True once the game stopped accepting moves (won without continuation, or over).
        """
        return not self._session.accepts_moves

    @property
    def legal_directions(self) -> list[Direction]:
        """Directions that would change the current board."""
        return legal_directions(self._session.grid)

    def reset(self, seed: int | None = None) -> Session:
        """
        Replace the current session with a fresh one.

        Parameters
        ----------
        seed : int, optional
            Reseed the random generator before spawning the start tiles.

        Returns
        -------
        Session
            The new session.
        """
        with self._lock:
            if seed is not None:
                self._rng = default_rng(seed)
            self._session = new_session(config=self.config, rng=self._rng)
            _logger.info('Game reset (%dx%d, winning tile %d)', self.config.width, self.config.height,
                         self.config.winning_tile)
            return self._session

    def step(self, direction: Direction | str) -> Turn:
        """
        Apply the selected direction to the board.

        Parameters
        ----------
        direction : Direction | str
            The direction to apply, as a member or its value ('left', 'up', 'right', 'down').

        Returns
        -------
        Turn
            The new session, the slide and the spawned tile.
        """
        with self._lock:
            turn = advance(self._session, Direction(direction), rng=self._rng)
            self._session = turn.session
            if turn.move is not None and turn.move.changed:
                _logger.debug('Moved %s: +%d (score %d)', Direction(direction).value, turn.move.score_delta,
                              self._session.score)
            return turn

    def render(self) -> None:
        """
        Render the game board. This method prints the score, the status and the board to the console.
        """
        print(f'score={self._session.score} status={self._session.status.value}')
        print(self._session.grid)
