# -*- coding: utf-8 -*-
"""
Matplotlib window for playing 2048.

The window only renders what it is given and forwards key presses; it never changes the game itself.
"""
from typing import Callable

from matplotlib import pyplot as plt
from matplotlib.backend_bases import Event

from slide2048.core.grid import Grid
from slide2048.envs.session import GameStatus

# ##: Messages shown once the game stops.
STATUS_MESSAGES = {
    GameStatus.PLAYING: "",
    GameStatus.WON: "You win!",
    GameStatus.OVER: "Game over!",
}


class WindowBoard:
    """
    Window drawing a board with one subplot per cell.

    Methods
    -------
    show_grid(grid, score, status)
        Update the display with the current board, score and status.
    register_key_handler(key_handler)
        Register a function to handle keyboard events.
    show(block=True)
        Display the window.
    close()
        Close the window.
    """

    # ##: Background colour per tile value; larger tiles share the last colour.
    COLORS = {
        0: "#CCC0B3",
        2: "#EEE4DA",
        4: "#ECE0C8",
        8: "#F2B179",
        16: "#F59563",
        32: "#F67C5F",
        64: "#F65E3B",
        128: "#EDCF72",
        256: "#EDCC61",
        512: "#EDC850",
        1024: "#EDC53F",
        2048: "#EDC22E",
    }
    LARGE_TILE_COLOR = "#3C3A32"

    def __init__(self, title: str, width: int, height: int):
        """
        Create the window.

        Parameters
        ----------
        title : str
            The title of the window.
        width : int
            Number of columns of the board.
        height : int
            Number of rows of the board.
        """
        self.width = width
        self.height = height
        self.fig = plt.figure()
        self.fig.canvas.manager.set_window_title(title)
        self._disconnect_default_keymap()
        self.fig.patch.set_facecolor("#BBADA0")
        self._setup_axes()
        self.closed = False
        self.fig.canvas.mpl_connect("close_event", self._close_handler)

    def _disconnect_default_keymap(self):
        """
        Drop matplotlib's own key shortcuts for this figure.

        Game keys such as ``l``, ``k``, ``h`` or ``s`` would otherwise also change axis scales, reset the view or
        open the save dialog.
        """
        handler_id = getattr(self.fig.canvas.manager, "key_press_handler_id", None)
        if handler_id is not None:
            self.fig.canvas.mpl_disconnect(handler_id)
            self.fig.canvas.manager.key_press_handler_id = None

    def _setup_axes(self):
        """Create one subplot per cell, row-major, each holding a centered label."""
        self.fig.subplots_adjust(left=0.02, bottom=0.02, right=0.98, top=0.9, wspace=0.05, hspace=0.05)

        self.texts = []
        self.axes = [
            self.fig.add_subplot(self.height, self.width, row * self.width + column + 1)
            for row in range(self.height)
            for column in range(self.width)
        ]
        for ax in self.axes:
            text = ax.text(0.5, 0.5, "", ha="center", va="center", fontsize="x-large", fontweight="demibold")
            self.texts.append(text)
            ax.set_xticks([])
            ax.set_yticks([])

    def _close_handler(self, event: Event | None = None):
        self.closed = True

    @classmethod
    def tile_color(cls, value: int) -> str:
        """Background colour for a tile value (0 for an empty cell)."""
        return cls.COLORS.get(value, cls.LARGE_TILE_COLOR)

    def show_grid(self, grid: Grid, score: int, status: GameStatus):
        """
        Show or update the board.

        Parameters
        ----------
        grid : Grid
            The board to display.
        score : int
            The current score.
        status : GameStatus
            The game status; a terminal status adds its message to the title.
        """
        values = [value for row in grid.to_rows() for value in row]
        for ax, text, value in zip(self.axes, self.texts, values):
            text.set_text(str(value) if value != 0 else "")
            text.set_color("#776E65" if value in (2, 4) else "#F9F6F2")
            ax.set_facecolor(self.tile_color(value))

        title = f"Score: {score}"
        message = STATUS_MESSAGES[status]
        if message:
            title = f"{title}    {message}"
        self.fig.suptitle(title, fontweight="demibold")

        self.fig.canvas.draw_idle()
        self.fig.canvas.flush_events()
        plt.pause(0.001)

    def register_key_handler(self, key_handler: Callable):
        """
        Register a keyboard event handler.

        Parameters
        ----------
        key_handler : Callable
            Called with the matplotlib key event whenever a key is pressed in the window.
        """
        self.fig.canvas.mpl_connect("key_press_event", key_handler)

    @classmethod
    def show(cls, block: bool = True):
        """
        Show the window and start the Matplotlib event loop.

        Parameters
        ----------
        block : bool, optional
            If True, the event loop is blocking; otherwise, it's non-blocking (default is True).
        """
        if not block:
            plt.ion()
        plt.show()

    def close(self):
        """Close the window."""
        plt.close(self.fig)
        self.closed = True
