from __future__ import annotations

import numpy as np

from falling_blocks_rl.game import GameGrid


def test_new_grid_is_empty() -> None:
    grid = GameGrid(10, 20)
    assert grid.grid.shape == (20, 10)
    assert grid.count_filled() == 0
    assert grid.get_max_height() == 0


def test_write_cells_skips_rows_above_board() -> None:
    grid = GameGrid(10, 20)
    written = grid.write_cells([(4, -1), (5, -1), (4, 0), (5, 0)], 4)
    assert written == 2
    assert grid.grid[0, 4] == 4 and grid.grid[0, 5] == 4
    assert grid.count_filled() == 2


def test_remove_row_inserts_empty_row_on_top() -> None:
    grid = GameGrid(4, 5)
    grid.grid[4, :] = 1
    grid.grid[3, 0] = 2
    grid.remove_row(4)
    assert grid.grid.shape == (5, 4)
    assert not grid.grid[0].any()
    assert grid.grid[4, 0] == 2
    assert grid.count_filled() == 1


def test_clear_single_row() -> None:
    grid = GameGrid(10, 20)
    grid.grid[19, :] = 2
    grid.grid[18, 3] = 5
    assert grid.is_row_full(19)
    assert grid.clear_full_lines() == 1
    assert grid.grid[19, 3] == 5
    assert grid.count_filled() == 1


def test_clear_non_contiguous_rows_rechecks_shifted_row() -> None:
    grid = GameGrid(10, 20)
    grid.grid[19, :] = 1
    grid.grid[18, :] = 1
    grid.grid[18, 7] = 0
    grid.grid[17, :] = 1
    grid.grid[16, :] = 1
    grid.grid[15, 2] = 6
    cleared = grid.clear_full_lines()
    assert cleared == 3
    assert grid.grid.shape == (20, 10)
    # the partial row ends at the bottom, the lone cell right above it
    assert grid.grid[19, 7] == 0
    assert int(np.count_nonzero(grid.grid[19])) == 9
    assert grid.grid[18, 2] == 6
    assert grid.count_filled() == 10


def test_clear_keeps_cells_outside_cleared_rows() -> None:
    rng = np.random.default_rng(7)
    grid = GameGrid(10, 20)
    grid.grid[:] = rng.integers(0, 2, size=(20, 10)) * 3
    grid.grid[10, :] = 3
    grid.grid[19, :] = 3
    full = [r for r in range(20) if grid.is_row_full(r)]
    expected = grid.count_filled() - 10 * len(full)
    assert grid.clear_full_lines() == len(full)
    assert grid.count_filled() == expected
    assert grid.grid.shape == (20, 10)


def test_holes_and_height() -> None:
    grid = GameGrid(4, 6)
    grid.grid[3, 1] = 1
    grid.grid[5, 2] = 1
    assert grid.get_max_height() == 3
    assert grid.count_holes() == 2
