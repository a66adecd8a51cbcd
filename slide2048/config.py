"""
Game configuration and the named variants of the game.
"""

from dataclasses import dataclass, field, replace
from math import isclose
from types import MappingProxyType
from typing import Mapping

from slide2048.core.grid import is_tile_value
from slide2048.core.spawn import TILE_SPAWN_PROBS


class ConfigError(ValueError):
    """Raised when a configuration cannot describe a playable game."""


@dataclass(frozen=True)
class GameConfig:
    """
    Rules of one game variant.

    Attributes are checked on construction; an invalid combination raises :class:`ConfigError`.
    """

    # ##>: Board dimensions.
    width: int = 4
    height: int = 4

    # ##>: Winning rule.
    winning_tile: int = 2048  # Won as soon as a tile reaches this value
    continue_after_win: bool = False  # Keep accepting moves once won

    # ##>: Spawning rule.
    start_tiles: int = 2  # Tiles spawned on a fresh board
    spawn_probabilities: Mapping[int, float] = field(default_factory=lambda: dict(TILE_SPAWN_PROBS))

    def __post_init__(self):
        # ##>: Read-only copy, so shared presets cannot be altered after validation.
        object.__setattr__(self, 'spawn_probabilities', MappingProxyType(dict(self.spawn_probabilities)))
        self.validate()

    def validate(self) -> None:
        """
        Check the configuration.

        Raises
        ------
        ConfigError
            If a dimension is not positive, the winning tile is not a power of two, the start tiles do not fit on
            the board, or the spawn probabilities are not a distribution over powers of two.
        """
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f'board dimensions must be positive, got {self.width}x{self.height}')
        if not is_tile_value(self.winning_tile):
            raise ConfigError(f'winning tile must be a power of two >= 2, got {self.winning_tile}')
        if not 0 <= self.start_tiles <= self.width * self.height:
            raise ConfigError(f'{self.start_tiles} start tile(s) do not fit on a {self.width}x{self.height} board')
        if not self.spawn_probabilities:
            raise ConfigError('spawn probabilities must name at least one tile value')
        for value, probability in self.spawn_probabilities.items():
            if not is_tile_value(value):
                raise ConfigError(f'spawned tile value must be a power of two >= 2, got {value}')
            if probability < 0:
                raise ConfigError(f'spawn probability of {value} is negative')
        if not isclose(sum(self.spawn_probabilities.values()), 1.0):
            raise ConfigError('spawn probabilities must sum to 1')

    def replace(self, **changes) -> 'GameConfig':
        """Return a validated copy with ``changes`` applied."""
        return replace(self, **changes)


# ##: Known variants of the game.
PRESETS: dict[str, GameConfig] = {
    'classic': GameConfig(),
    'mini': GameConfig(winning_tile=64),
}


def get_preset(name: str) -> GameConfig:
    """
    Look up a named variant.

    Raises
    ------
    ConfigError
        If no variant has this name.
    """
    try:
        return PRESETS[name]
    except KeyError:
        raise ConfigError(f'unknown preset {name!r}, expected one of {sorted(PRESETS)}') from None
