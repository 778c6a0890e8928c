from __future__ import annotations

import numpy as np


def is_valid(shape: np.ndarray, origin_x: int, origin_y: int, board: np.ndarray) -> bool:
    """Check whether `shape` fits on `board` with its top-left corner at (origin_x, origin_y).

    Occupied cells above the board (negative rows) only have to respect the
    side walls; every other cell must be inside the board and on an empty cell.
    """
    height, width = board.shape
    for r, c in np.argwhere(shape != 0):
        x = origin_x + int(c)
        y = origin_y + int(r)
        if x < 0 or x >= width or y >= height:
            return False
        if y >= 0 and board[y, x] != 0:
            return False
    return True
