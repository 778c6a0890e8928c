from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .collision import is_valid


Coordinate = Tuple[int, int]


class GameGrid:
    """Fixed-size playfield of settled cells.

    Row 0 is the top. The grid uses 0 for empty cells and the tetromino kind
    id (1..7) for settled cells so renderers can color them.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def can_place(self, shape: np.ndarray, x: int, y: int) -> bool:
        return is_valid(shape, x, y, self.grid)

    def write_cells(self, cells: Iterable[Coordinate], value: int) -> int:
        """Settle `cells` with `value`; cells above the top edge are dropped.

        Returns the number of cells written.
        """
        written = 0
        for x, y in cells:
            if y < 0:
                continue
            self.grid[y, x] = value
            written += 1
        return written

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row] != 0))

    def remove_row(self, row: int) -> None:
        """Delete `row` and push an empty row in at the top."""
        rest = np.delete(self.grid, row, axis=0)
        empty = np.zeros((1, self.width), dtype=self.grid.dtype)
        self.grid = np.vstack((empty, rest))

    def clear_full_lines(self) -> int:
        cleared = 0
        row = self.height - 1
        while row >= 0:
            if self.is_row_full(row):
                self.remove_row(row)
                cleared += 1
                # rows above shifted down into `row`; look at it again
                continue
            row -= 1
        return cleared

    def count_filled(self) -> int:
        return int(np.count_nonzero(self.grid))

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
