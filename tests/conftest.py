from __future__ import annotations

import pytest

from falling_blocks_rl.game import FallingBlockGame, TetrominoType

from .helpers import make_game


@pytest.fixture
def game() -> FallingBlockGame:
    g = make_game(TetrominoType.O)
    g.start()
    return g
