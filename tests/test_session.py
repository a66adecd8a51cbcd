"""
Tests for the game state machine: session creation, transitions and terminal statuses.
"""

from unittest import TestCase, main

from numpy.random import default_rng

from slide2048.config import ConfigError, GameConfig, get_preset
from slide2048.core.grid import Direction, Grid
from slide2048.envs.session import (
    GameStatus,
    Session,
    advance,
    apply_direction,
    evaluate_status,
    new_session,
)

CHECKERBOARD = [[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]]


class TestNewSession(TestCase):
    """Session creation."""

    def test_two_start_tiles(self):
        """A new session holds exactly two tiles of value 2 or 4."""
        session = new_session(4, 4, seed=42)

        self.assertEqual(len(session.grid), 2)
        self.assertTrue(set(session.grid.tiles.values()) <= {2, 4})
        self.assertEqual(session.score, 0)
        self.assertIs(session.status, GameStatus.PLAYING)

    def test_dimensions_override_config(self):
        """Explicit dimensions win over the configuration."""
        session = new_session(5, 3, config=get_preset('mini'), seed=1)

        self.assertEqual((session.grid.width, session.grid.height), (5, 3))
        self.assertEqual(session.config.winning_tile, 64)

    def test_zero_dimension_is_rejected(self):
        """A zero width or height is invalid, not replaced by the default."""
        with self.assertRaises(ConfigError):
            new_session(0, 4)
        with self.assertRaises(ConfigError):
            new_session(4, 0)

    def test_seed_reproducibility(self):
        """Same seed produces the same start board."""
        self.assertEqual(new_session(seed=9).grid, new_session(seed=9).grid)


class TestTransitions(TestCase):
    """Moves applied to a session."""

    def test_merge_scenario(self):
        """Two 2s on the top row slide left into a 4 and one tile spawns."""
        session = Session(grid=Grid(4, 4, {(0, 0): 2, (1, 0): 2}))
        turn = advance(session, Direction.LEFT, rng=default_rng(0))

        self.assertTrue(turn.move.changed)
        self.assertEqual(turn.move.score_delta, 4)
        self.assertEqual(turn.move.grid, Grid(4, 4, {(0, 0): 4}))

        # ##>: New board is the slid board plus exactly one spawned tile.
        self.assertNotEqual(turn.spawn.position, (0, 0))
        self.assertIn(turn.spawn.value, (2, 4))
        self.assertEqual(turn.session.grid, turn.move.grid.with_tile(turn.spawn.position, turn.spawn.value))
        self.assertEqual(turn.session.score, 4)
        self.assertIs(turn.session.status, GameStatus.PLAYING)

    def test_previous_session_untouched(self):
        """A transition returns a new session and leaves the old one as is."""
        session = Session(grid=Grid(4, 4, {(0, 0): 2, (1, 0): 2}))
        updated = apply_direction(session, Direction.LEFT, rng=default_rng(1))

        self.assertIsNot(updated, session)
        self.assertEqual(session.grid, Grid(4, 4, {(0, 0): 2, (1, 0): 2}))
        self.assertEqual(session.score, 0)

    def test_unchanged_move_is_a_no_op(self):
        """A move that changes nothing spawns nothing and keeps the score."""
        session = Session(grid=Grid(4, 4, {(0, 0): 2}), score=12)
        turn = advance(session, Direction.LEFT)

        self.assertIs(turn.session, session)
        self.assertFalse(turn.move.changed)
        self.assertIsNone(turn.spawn)

    def test_direction_given_as_string(self):
        """Directions can be passed by value."""
        session = Session(grid=Grid(4, 4, {(0, 0): 2, (1, 0): 2}))
        self.assertEqual(apply_direction(session, 'left', rng=default_rng(2)).score, 4)

    def test_score_accumulates(self):
        """Score is the running sum of score deltas."""
        session = new_session(seed=3)
        rng = default_rng(3)
        total = 0

        for _ in range(50):
            for direction in Direction:
                turn = advance(session, direction, rng=rng)
                if turn.move is not None:
                    total += turn.move.score_delta if turn.move.changed else 0
                session = turn.session

        self.assertEqual(session.score, total)


class TestTerminalStatus(TestCase):
    """Won and over detection."""

    def test_win_is_reached(self):
        """Merging into the winning tile wins the game."""
        config = get_preset('mini')
        session = Session(grid=Grid(4, 4, {(0, 0): 32, (1, 0): 32}), config=config)

        updated = apply_direction(session, Direction.LEFT, rng=default_rng(4))

        self.assertIs(updated.status, GameStatus.WON)
        self.assertEqual(updated.score, 64)

    def test_won_session_is_frozen(self):
        """By default, moves after a win change nothing."""
        config = get_preset('mini')
        session = Session(grid=Grid(4, 4, {(0, 0): 64, (3, 3): 2}), status=GameStatus.WON, config=config)

        turn = advance(session, Direction.RIGHT)

        self.assertIs(turn.session, session)
        self.assertIsNone(turn.move)

    def test_continue_after_win(self):
        """When configured, a won session keeps accepting moves."""
        config = get_preset('mini').replace(continue_after_win=True)
        session = Session(grid=Grid(4, 4, {(0, 0): 64, (3, 3): 2}), status=GameStatus.WON, config=config)

        updated = apply_direction(session, Direction.RIGHT, rng=default_rng(5))

        self.assertIsNot(updated, session)
        self.assertEqual(updated.grid.get((3, 0)), 64)
        self.assertIs(updated.status, GameStatus.WON)

    def test_game_over_after_move(self):
        """Filling the last cell without any merge left ends the game."""
        config = GameConfig(width=2, height=1, spawn_probabilities={4: 1.0})
        session = Session(grid=Grid(2, 1, {(1, 0): 2}), config=config)

        updated = apply_direction(session, Direction.LEFT, rng=default_rng(6))

        self.assertEqual(updated.grid.to_rows(), [[2, 4]])
        self.assertIs(updated.status, GameStatus.OVER)

    def test_over_session_is_frozen(self):
        """No move applies once the game is over."""
        session = Session(grid=Grid.from_rows(CHECKERBOARD), status=GameStatus.OVER)
        self.assertIs(apply_direction(session, Direction.UP), session)

    def test_checkerboard_is_over(self):
        """Full board with no equal neighbours reports OVER."""
        self.assertIs(evaluate_status(Grid.from_rows(CHECKERBOARD), GameConfig()), GameStatus.OVER)

    def test_win_takes_precedence_over_game_over(self):
        """Full, stuck board with a winning tile reports WON."""
        rows = [row[:] for row in CHECKERBOARD]
        rows[0][0] = 2048
        grid = Grid.from_rows(rows)

        self.assertIs(evaluate_status(grid, GameConfig()), GameStatus.WON)

    def test_full_board_with_merge_keeps_playing(self):
        """A full board is not over while a merge remains."""
        rows = [row[:] for row in CHECKERBOARD]
        rows[0][1] = 2
        self.assertIs(evaluate_status(Grid.from_rows(rows), GameConfig()), GameStatus.PLAYING)


if __name__ == '__main__':
    main()
