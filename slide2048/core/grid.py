"""
Board model for the 2048 game: an immutable sparse mapping from cell position to tile value.
"""

from enum import Enum
from numbers import Integral
from typing import Iterable, Iterator, Mapping

from numpy import int64, ndarray, zeros

# ##>: Cell coordinate as (column, row), row 0 being the top row.
Position = tuple[int, int]


class InvalidGridError(ValueError):
    """Raised when a grid would break its bounds or tile-value invariants."""


class Direction(str, Enum):
    """
    Slide direction.

    The member order (left, up, right, down) is the order used everywhere directions are enumerated.
    """

    LEFT = 'left'
    UP = 'up'
    RIGHT = 'right'
    DOWN = 'down'


def is_integer(value: object) -> bool:
    """Check that ``value`` is an integral number other than a bool."""
    return isinstance(value, Integral) and not isinstance(value, bool)


def is_tile_value(value: object) -> bool:
    """Check that ``value`` is a power of two greater or equal to 2."""
    return is_integer(value) and value >= 2 and int(value) & (int(value) - 1) == 0


class Grid:
    """
    Fixed-size 2D board where each cell is either empty or holds a power of two.

    Parameters
    ----------
    width : int
        Number of columns.
    height : int
        Number of rows.
    tiles : Mapping[Position, int], optional
        Occupied cells, keyed by (column, row).

    Raises
    ------
    InvalidGridError
        If a dimension is not positive, a tile lies out of bounds or a value is not a power of two >= 2.

    Notes
    -----
    Instances never change after construction: every transformation returns a new grid.
    """

    __slots__ = ('_width', '_height', '_tiles')

    def __init__(self, width: int, height: int, tiles: Mapping[Position, int] | None = None):
        if width <= 0 or height <= 0:
            raise InvalidGridError(f'grid dimensions must be positive, got {width}x{height}')

        cells: dict[Position, int] = {}
        for position, value in (tiles or {}).items():
            column, row = position
            if not (is_integer(column) and is_integer(row)):
                raise InvalidGridError(f'position {position} must hold integer coordinates')
            if not (0 <= column < width and 0 <= row < height):
                raise InvalidGridError(f'position {position} is outside a {width}x{height} grid')
            if not is_tile_value(value):
                raise InvalidGridError(f'tile value at {position} must be a power of two >= 2, got {value!r}')

            key = (int(column), int(row))
            if key in cells:
                raise InvalidGridError(f'several tiles given for cell {key}')
            cells[key] = int(value)

        self._width = width
        self._height = height
        self._tiles = cells

    # ##: Constructors.
    @classmethod
    def empty(cls, width: int = 4, height: int = 4) -> 'Grid':
        """Build a grid without any tile."""
        return cls(width, height)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> 'Grid':
        """
        Build a grid from dense rows, top row first, where 0 marks an empty cell.

        Parameters
        ----------
        rows : Iterable[Iterable[int]]
            Rows of equal length.

        Returns
        -------
        Grid
            The corresponding sparse grid.
        """
        dense = [list(row) for row in rows]
        if not dense or any(len(row) != len(dense[0]) for row in dense):
            raise InvalidGridError('rows must be non-empty and of equal length')

        tiles = {
            (column, row): value
            for row, values in enumerate(dense)
            for column, value in enumerate(values)
            if value != 0
        }
        return cls(len(dense[0]), len(dense), tiles)

    @classmethod
    def from_array(cls, board: ndarray) -> 'Grid':
        """Build a grid from a 2D array indexed as ``board[row, column]``."""
        if board.ndim != 2:
            raise InvalidGridError(f'expected a 2D board, got {board.ndim} dimensions')
        return cls.from_rows(board.tolist())

    # ##: Read accessors.
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def tiles(self) -> dict[Position, int]:
        """Copy of the occupied cells."""
        return dict(self._tiles)

    @property
    def is_full(self) -> bool:
        return len(self._tiles) == self._width * self._height

    @property
    def max_tile(self) -> int:
        """Highest tile value, 0 for an empty grid."""
        return max(self._tiles.values(), default=0)

    @property
    def total(self) -> int:
        """Sum of every tile value."""
        return sum(self._tiles.values())

    def get(self, position: Position) -> int | None:
        """Value at ``position`` or None when the cell is empty."""
        return self._tiles.get(position)

    def positions(self) -> Iterator[Position]:
        """Every coordinate of the grid, row-major."""
        for row in range(self._height):
            for column in range(self._width):
                yield column, row

    def empty_cells(self) -> list[Position]:
        """Unoccupied coordinates, row-major."""
        return [position for position in self.positions() if position not in self._tiles]

    # ##: Transformations.
    def with_tile(self, position: Position, value: int) -> 'Grid':
        """Return a copy with ``value`` placed at ``position``."""
        return self.with_tiles({position: value})

    def with_tiles(self, tiles: Mapping[Position, int]) -> 'Grid':
        """Return a copy with every tile of ``tiles`` placed, replacing what was there."""
        merged = dict(self._tiles)
        merged.update(tiles)
        return Grid(self._width, self._height, merged)

    def to_array(self) -> ndarray:
        """
        Dense view of the grid.

        Returns
        -------
        ndarray
            Array of shape (height, width) and dtype int64, indexed as ``board[row, column]``; 0 marks empty cells.
        """
        board = zeros((self._height, self._width), dtype=int64)
        for (column, row), value in self._tiles.items():
            board[row, column] = value
        return board

    def to_rows(self) -> list[list[int]]:
        """Dense rows, top row first, 0 for empty cells."""
        return [[self._tiles.get((column, row), 0) for column in range(self._width)] for row in range(self._height)]

    # ##: Protocols.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self._width, self._height, self._tiles) == (other._width, other._height, other._tiles)

    def __hash__(self) -> int:
        return hash((self._width, self._height, frozenset(self._tiles.items())))

    def __len__(self) -> int:
        return len(self._tiles)

    def __contains__(self, position: object) -> bool:
        return position in self._tiles

    def __repr__(self) -> str:
        return f'Grid({self._width}, {self._height}, {self._tiles!r})'

    def __str__(self) -> str:
        return '\n'.join(' \t'.join(map(str, row)) for row in self.to_rows())
