from __future__ import annotations

import pygame

from falling_blocks_rl.game import GameStatus, TetrominoType
from falling_blocks_rl.visualization.human_play import handle_key

from .helpers import make_game


def test_first_game_waits_for_r() -> None:
    game = make_game(TetrominoType.O)
    assert handle_key(game, pygame.K_LEFT)
    assert game.snapshot().status is GameStatus.READY
    assert game.current_piece is None

    assert handle_key(game, pygame.K_r)
    assert game.status is GameStatus.RUNNING
    assert game.scheduler.interval_ms == 1000


def test_arrow_keys_drive_the_piece_and_escape_quits() -> None:
    game = make_game(TetrominoType.O)
    handle_key(game, pygame.K_r)
    assert handle_key(game, pygame.K_LEFT)
    assert game.current_piece is not None and game.current_piece.x == 3
    assert handle_key(game, pygame.K_SPACE)
    assert game.grid.count_filled() == 4
    assert not handle_key(game, pygame.K_ESCAPE)


def test_r_restarts_after_game_over() -> None:
    game = make_game(TetrominoType.O)
    handle_key(game, pygame.K_r)
    game.grid.grid[1:, :] = 7
    game.spawn()
    assert game.game_over
    handle_key(game, pygame.K_r)
    assert game.running
    assert game.grid.count_filled() == 0
