"""
Random tile spawning for the 2048 game.

The selector only describes what to spawn; placing the tiles is left to the caller through :func:`apply_spawns`.
"""

from typing import Mapping, NamedTuple, Sequence

from numpy.random import PCG64DXSM, Generator, default_rng

from slide2048.core.grid import Grid, Position

# ##>: Tile spawn probabilities (uniform over 2 and 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.5, 4: 0.5}

# ##>: Module-level generator, used when no generator or seed is given.
_GENERATOR = default_rng(PCG64DXSM())


class SpawnError(ValueError):
    """Raised when asked to spawn more tiles than there are empty cells."""


class Spawn(NamedTuple):
    """A tile to place on the board."""

    position: Position
    value: int


def _resolve_generator(rng: Generator | None, seed: int | None) -> Generator:
    if rng is not None:
        return rng
    return default_rng(seed) if seed is not None else _GENERATOR


def spawn_many(
    count: int,
    grid: Grid,
    rng: Generator | None = None,
    probabilities: Mapping[int, float] | None = None,
    seed: int | None = None,
) -> list[Spawn]:
    """
    Choose ``count`` distinct empty cells and a value for each.

    Parameters
    ----------
    count : int
        Number of tiles to spawn.
    grid : Grid
        Board to spawn into. Not modified.
    rng : Generator, optional
        Random generator; defaults to the module generator.
    probabilities : Mapping[int, float], optional
        Probability of each tile value, by default :data:`TILE_SPAWN_PROBS`.
    seed : int, optional
        Seed for a fresh generator, ignored when ``rng`` is given.

    Returns
    -------
    list[Spawn]
        The spawned tiles, positions drawn uniformly without replacement.

    Raises
    ------
    SpawnError
        If the grid holds fewer than ``count`` empty cells.
    """
    available = grid.empty_cells()
    if count < 0 or count > len(available):
        raise SpawnError(f'cannot spawn {count} tile(s) with {len(available)} empty cell(s)')
    if count == 0:
        return []

    generator = _resolve_generator(rng, seed)
    probabilities = TILE_SPAWN_PROBS if probabilities is None else probabilities
    tile_values = list(probabilities)

    # ##: Randomly choose cell positions, then values independently.
    chosen = generator.choice(len(available), size=count, replace=False)
    values = generator.choice(tile_values, size=count, p=[probabilities[value] for value in tile_values])

    return [Spawn(position=available[int(index)], value=int(value)) for index, value in zip(chosen, values)]


def spawn_one(
    grid: Grid,
    rng: Generator | None = None,
    probabilities: Mapping[int, float] | None = None,
    seed: int | None = None,
) -> Spawn:
    """
    Choose one empty cell uniformly and a value for it.

    Raises
    ------
    SpawnError
        If the grid is full.
    """
    return spawn_many(1, grid, rng=rng, probabilities=probabilities, seed=seed)[0]


def apply_spawns(grid: Grid, spawns: Sequence[Spawn]) -> Grid:
    """
    Place spawned tiles on the grid.

    Raises
    ------
    SpawnError
        If a spawn targets an occupied cell.
    """
    for spawn in spawns:
        if spawn.position in grid:
            raise SpawnError(f'cell {spawn.position} is already occupied')
    return grid.with_tiles({spawn.position: spawn.value for spawn in spawns})


def spawn_outcomes(grid: Grid, probabilities: Mapping[int, float] | None = None) -> list[tuple[Grid, float]]:
    """
    Generate every board reachable by spawning one tile.

    Parameters
    ----------
    grid : Grid
        The board after a move, before the spawn.
    probabilities : Mapping[int, float], optional
        Probability of each tile value, by default :data:`TILE_SPAWN_PROBS`.

    Returns
    -------
    list[tuple[Grid, float]]
        Each possible board with its probability. A full grid yields itself with probability 1.
    """
    probabilities = TILE_SPAWN_PROBS if probabilities is None else probabilities
    available = grid.empty_cells()
    if not available:
        return [(grid, 1.0)]

    return [
        (grid.with_tile(position, value), probability / len(available))
        for position in available
        for value, probability in probabilities.items()
    ]
