"""Keyboard bindings: translate key names into slide directions."""

from slide2048.core.grid import Direction

# ##>: Browser key codes, matplotlib key names, vim keys and WASD.
KEY_BINDINGS: dict[str, Direction] = {
    'ArrowLeft': Direction.LEFT,
    'ArrowUp': Direction.UP,
    'ArrowRight': Direction.RIGHT,
    'ArrowDown': Direction.DOWN,
    'left': Direction.LEFT,
    'up': Direction.UP,
    'right': Direction.RIGHT,
    'down': Direction.DOWN,
    'h': Direction.LEFT,
    'k': Direction.UP,
    'l': Direction.RIGHT,
    'j': Direction.DOWN,
    'a': Direction.LEFT,
    'w': Direction.UP,
    'd': Direction.RIGHT,
    's': Direction.DOWN,
}


def key_to_direction(key: str | None) -> Direction | None:
    """
    Look up the direction bound to a key.

    Parameters
    ----------
    key : str | None
        Key name as reported by the host (matplotlib passes None for some modifier keys).

    Returns
    -------
    Direction | None
        The bound direction, or None when the key is not bound and should be ignored.
    """
    if key is None:
        return None
    return KEY_BINDINGS.get(key)
