"""
Slide engine for the 2048 game: compaction and merging of tiles toward one edge of the board.
"""

from typing import NamedTuple, Sequence

from slide2048.core.grid import Direction, Grid, Position


class MergeEvent(NamedTuple):
    """Two tiles of equal value combined into one tile of double value."""

    sources: tuple[Position, Position]
    target: Position
    value: int


class MoveEvent(NamedTuple):
    """A tile that slid to a new cell without merging."""

    source: Position
    target: Position
    value: int


class MoveResult(NamedTuple):
    """
    Outcome of a slide.

    Attributes
    ----------
    grid : Grid
        The board after the slide (no tile spawned).
    score_delta : int
        Sum of the values produced by merges.
    changed : bool
        True if the board differs from the one given to the slide.
    merges : tuple[MergeEvent, ...]
        Every merge, in scan order.
    moves : tuple[MoveEvent, ...]
        Every tile that changed cell without merging, in scan order.
    """

    grid: Grid
    score_delta: int
    changed: bool
    merges: tuple[MergeEvent, ...] = ()
    moves: tuple[MoveEvent, ...] = ()


class Slot:
    """Tile of a compacted line: its value, the positions it came from and whether it was formed by a merge."""

    __slots__ = ('value', 'sources', 'merged')

    def __init__(self, value: int, source: Position):
        self.value = value
        self.sources = [source]
        self.merged = False


def accumulate(cells: Sequence[tuple[Position, int]]) -> tuple[int, list[Slot]]:
    """
    Compact and merge the occupied cells of one line.

    Parameters
    ----------
    cells : Sequence[tuple[Position, int]]
        Occupied cells of the line, ordered from the edge the tiles slide toward.

    Returns
    -------
    score : int
        Sum of the merged values.
    slots : list[Slot]
        The compacted line, closest to the edge first.

    Notes
    -----
    - A tile formed by a merge never merges again in the same slide: (2, 2, 2) gives (4, 2) and (2, 2, 4) gives (4, 4).
    - Equal pairs are taken from the edge outward: (2, 2, 2, 2) gives (4, 4).
    """
    slots: list[Slot] = []
    score = 0

    for position, value in cells:
        last = slots[-1] if slots else None
        if last is not None and not last.merged and last.value == value:
            last.value *= 2
            last.sources.append(position)
            last.merged = True
            score += last.value
        else:
            slots.append(Slot(value, position))

    return score, slots


def lines(width: int, height: int, direction: Direction) -> list[list[Position]]:
    """
    Positions of every line of the board, each listed from the edge the tiles slide toward.

    Parameters
    ----------
    width : int
        Number of columns.
    height : int
        Number of rows.
    direction : Direction
        Slide direction.

    Returns
    -------
    list[list[Position]]
        Rows for left and right, columns for up and down.
    """
    direction = Direction(direction)
    if direction in (Direction.LEFT, Direction.RIGHT):
        columns = range(width) if direction is Direction.LEFT else range(width - 1, -1, -1)
        return [[(column, row) for column in columns] for row in range(height)]

    rows = range(height) if direction is Direction.UP else range(height - 1, -1, -1)
    return [[(column, row) for row in rows] for column in range(width)]


def slide(grid: Grid, direction: Direction) -> MoveResult:
    """
    Slide every tile of the grid toward one edge and merge equal neighbours.

    Parameters
    ----------
    grid : Grid
        The board before the move.
    direction : Direction
        The edge the tiles move toward.

    Returns
    -------
    MoveResult
        New board, score gained, whether the board changed and the merge/move events.

    Notes
    -----
    All directions share :func:`accumulate`; they only differ by the order in which line positions are listed.
    """
    tiles: dict[Position, int] = {}
    merges: list[MergeEvent] = []
    moves: list[MoveEvent] = []
    score = 0

    for line in lines(grid.width, grid.height, direction):
        occupied = [(position, grid.get(position)) for position in line if position in grid]
        line_score, slots = accumulate(occupied)
        score += line_score

        for target, slot in zip(line, slots):
            tiles[target] = slot.value
            if slot.merged:
                merges.append(MergeEvent(sources=(slot.sources[0], slot.sources[1]), target=target, value=slot.value))
            elif slot.sources[0] != target:
                moves.append(MoveEvent(source=slot.sources[0], target=target, value=slot.value))

    updated = Grid(grid.width, grid.height, tiles)
    return MoveResult(
        grid=updated, score_delta=score, changed=updated != grid, merges=tuple(merges), moves=tuple(moves)
    )


def can_move(grid: Grid, direction: Direction) -> bool:
    """Check if sliding toward ``direction`` changes the grid."""
    return slide(grid, direction).changed


def legal_directions(grid: Grid) -> list[Direction]:
    """
    Directions whose slide changes the grid.

    Parameters
    ----------
    grid : Grid
        The current board.

    Returns
    -------
    list[Direction]
        Legal directions in (left, up, right, down) order.
    """
    return [direction for direction in Direction if can_move(grid, direction)]


def illegal_directions(grid: Grid) -> list[Direction]:
    """Directions whose slide leaves the grid unchanged."""
    return [direction for direction in Direction if not can_move(grid, direction)]


def is_stuck(grid: Grid) -> bool:
    """
    Check if no move is possible.

    Notes
    -----
    A full grid can still hold merges, so every direction is tried rather than counting occupied cells.
    """
    return grid.is_full and not legal_directions(grid)
