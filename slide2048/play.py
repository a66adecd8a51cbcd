# -*- coding: utf-8 -*-
"""
Play 2048, either in a matplotlib window or in the terminal.
"""
import logging
from argparse import ArgumentParser, Namespace
from typing import Any, Callable, Sequence

from slide2048.config import PRESETS, GameConfig, get_preset
from slide2048.envs import Game2048
from slide2048.envs.session import GameStatus
from slide2048.utils.keys import key_to_direction

_logger = logging.getLogger(__name__)

# ##: Keys handled by the host rather than by the game.
QUIT_KEYS = {"escape", "q"}
RESET_KEYS = {"backspace", "r"}


def build_config(args: Namespace) -> GameConfig:
    """
    Build the game rules from the command line options.

    Parameters
    ----------
    args: Namespace
        Parsed options; unset overrides keep the preset values.

    Returns
    -------
    GameConfig
        The validated configuration.
    """
    config = get_preset(args.preset)
    changes = {
        name: value
        for name, value in (("width", args.width), ("height", args.height), ("winning_tile", args.winning_tile))
        if value is not None
    }
    if args.continue_after_win:
        changes["continue_after_win"] = True
    return config.replace(**changes) if changes else config


def handle_key(game: Game2048, key: str | None, redraw: Callable[[Game2048], None]) -> bool:
    """
    Apply one key press to the game.

    Parameters
    ----------
    game: Game2048
        The running game.
    key: str | None
        Key name; unbound keys are ignored.
    redraw: Callable[[Game2048], None]
        Called after the game changed.

    Returns
    -------
    bool
        False when the key asks to quit, True otherwise.
    """
    if key in QUIT_KEYS:
        return False

    if key in RESET_KEYS:
        game.reset()
        redraw(game)
        return True

    direction = key_to_direction(key)
    if direction is None:
        _logger.debug("Ignoring key %r", key)
        return True

    previous = game.status
    turn = game.step(direction)
    if turn.move is not None and turn.move.changed:
        redraw(game)
        if game.status is not previous and game.status is not GameStatus.PLAYING:
            _logger.info("Game ended with status %s and score %d", game.status.value, game.score)
    return True


def run_window(game: Game2048) -> None:
    """Play in a matplotlib window until it is closed."""
    from slide2048.utils.windows import WindowBoard

    window = WindowBoard(title="2048 Game", width=game.config.width, height=game.config.height)

    def redraw(current: Game2048):
        window.show_grid(current.grid, current.score, current.status)

    def key_handler(event: Any):
        if not handle_key(game, event.key, redraw):
            window.close()

    window.register_key_handler(key_handler)
    redraw(game)

    # ##: Blocking event loop.
    window.show(block=True)


def run_text(game: Game2048, read: Callable[[str], str] = input) -> None:
    """
    Play in the terminal, one command per line.

    Parameters
    ----------
    game: Game2048
        The running game.
    read: Callable[[str], str]
        Line reader, ``input`` by default. End of input stops the game.
    """
    game.render()
    while True:
        try:
            line = read("move> ").strip()
        except EOFError:
            break
        if not handle_key(game, line, lambda current: current.render()):
            break


def parse_args(argv: Sequence[str] | None = None) -> Namespace:
    parser = ArgumentParser(description="Play 2048")
    parser.add_argument("--preset", choices=sorted(PRESETS), default="classic", help="Game variant")
    parser.add_argument("--width", type=int, default=None, help="Number of columns")
    parser.add_argument("--height", type=int, default=None, help="Number of rows")
    parser.add_argument("--winning-tile", type=int, default=None, help="Tile value that wins the game")
    parser.add_argument("--continue-after-win", action="store_true", help="Keep playing once the game is won")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--text", action="store_true", help="Play in the terminal instead of a window")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    game = Game2048(config=build_config(args), seed=args.seed)
    if args.text:
        run_text(game)
    else:
        run_window(game)


if __name__ == "__main__":
    main()
