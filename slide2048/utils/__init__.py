# -*- coding: utf-8 -*-
"""
Presentation helpers for the 2048 game.

It includes the key bindings that turn key presses into directions. The matplotlib `WindowBoard` lives in
`slide2048.utils.windows` and is imported on demand so that the game logic never needs a display.
"""

from .keys import KEY_BINDINGS, key_to_direction

__all__ = ["KEY_BINDINGS", "key_to_direction"]
