"""
Tests for random tile spawning: legality, distributions and enumeration of outcomes.
"""

from collections import Counter
from unittest import TestCase, main

from numpy.random import default_rng

from slide2048.core.grid import Grid
from slide2048.core.spawn import (
    TILE_SPAWN_PROBS,
    Spawn,
    SpawnError,
    apply_spawns,
    spawn_many,
    spawn_one,
    spawn_outcomes,
)

FULL_ROWS = [[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]]


class TestSpawnLegality(TestCase):
    """Spawns only target empty cells."""

    def test_never_spawns_on_occupied_cell(self):
        """Spawned position is always empty in the input grid."""
        grid = Grid.from_rows([[2, 4, 8, 0], [0, 16, 0, 32], [64, 0, 128, 256], [0, 512, 1024, 0]])
        rng = default_rng(0)

        for _ in range(500):
            spawn = spawn_one(grid, rng=rng)
            self.assertNotIn(spawn.position, grid)
            self.assertIn(spawn.value, (2, 4))

    def test_full_grid_fails_loudly(self):
        """Spawning on a full grid is a contract violation."""
        with self.assertRaises(SpawnError):
            spawn_one(Grid.from_rows(FULL_ROWS))

    def test_batch_larger_than_free_cells(self):
        """Cannot ask for more tiles than empty cells."""
        grid = Grid.from_rows([[2, 0], [4, 8]])
        with self.assertRaises(SpawnError):
            spawn_many(2, grid)

    def test_batch_without_replacement(self):
        """Batch positions are distinct."""
        grid = Grid.empty(4, 4)
        rng = default_rng(3)

        for _ in range(100):
            spawns = spawn_many(2, grid, rng=rng)
            self.assertEqual(len(spawns), 2)
            self.assertNotEqual(spawns[0].position, spawns[1].position)

    def test_batch_can_fill_the_board(self):
        """Asking for every empty cell fills the board."""
        grid = Grid.from_rows([[2, 0], [0, 4]])
        spawns = spawn_many(2, grid, seed=5)
        self.assertTrue(apply_spawns(grid, spawns).is_full)

    def test_seed_reproducibility(self):
        """Same seed gives the same spawn."""
        grid = Grid.empty(4, 4)
        self.assertEqual(spawn_many(2, grid, seed=42), spawn_many(2, grid, seed=42))

    def test_apply_spawn_on_occupied_cell(self):
        """Placing a spawn over a tile is rejected."""
        grid = Grid(2, 2, {(0, 0): 2})
        with self.assertRaises(SpawnError):
            apply_spawns(grid, [Spawn(position=(0, 0), value=4)])


class TestSpawnDistribution(TestCase):
    """Statistical checks on positions and values."""

    def test_position_is_uniform(self):
        """Each of four empty cells is chosen about a quarter of the time."""
        grid = Grid.from_rows([[0, 2, 0], [4, 0, 8], [0, 16, 32]])
        rng = default_rng(2024)
        samples = 4000

        counts = Counter(spawn_one(grid, rng=rng).position for _ in range(samples))

        self.assertEqual(set(counts), set(grid.empty_cells()))
        for position in grid.empty_cells():
            self.assertAlmostEqual(counts[position] / samples, 0.25, delta=0.04)

    def test_values_are_split_evenly(self):
        """Values follow the default 50/50 distribution."""
        rng = default_rng(7)
        samples = 4000
        grid = Grid.empty(4, 4)

        counts = Counter(spawn_one(grid, rng=rng).value for _ in range(samples))

        self.assertEqual(set(counts), {2, 4})
        self.assertAlmostEqual(counts[2] / samples, TILE_SPAWN_PROBS[2], delta=0.04)
        self.assertAlmostEqual(counts[4] / samples, TILE_SPAWN_PROBS[4], delta=0.04)

    def test_custom_probabilities(self):
        """A configured distribution replaces the default one."""
        rng = default_rng(11)
        grid = Grid.empty(4, 4)

        values = {spawn_one(grid, rng=rng, probabilities={4: 1.0}).value for _ in range(50)}
        self.assertEqual(values, {4})


class TestSpawnOutcomes(TestCase):
    """Enumeration of every possible spawn."""

    def test_probabilities_sum_to_one(self):
        """All outcome probabilities sum to 1.0."""
        grid = Grid.from_rows([[2, 4, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        outcomes = spawn_outcomes(grid)

        self.assertEqual(len(outcomes), 14 * 2)
        self.assertAlmostEqual(sum(probability for _, probability in outcomes), 1.0, places=10)

    def test_single_empty_cell(self):
        """One empty cell produces one outcome per tile value."""
        rows = [row[:] for row in FULL_ROWS]
        rows[1][3] = 0
        outcomes = spawn_outcomes(Grid.from_rows(rows))

        self.assertEqual(len(outcomes), 2)
        self.assertEqual(sorted(grid.get((3, 1)) for grid, _ in outcomes), [2, 4])
        for _, probability in outcomes:
            self.assertAlmostEqual(probability, 0.5, places=10)

    def test_full_grid(self):
        """A full grid has a single certain outcome: itself."""
        grid = Grid.from_rows(FULL_ROWS)
        self.assertEqual(spawn_outcomes(grid), [(grid, 1.0)])


if __name__ == '__main__':
    main()
