from __future__ import annotations

import itertools
from typing import Iterable, Sequence, TypeVar

from falling_blocks_rl.game import (
    FallingBlockGame,
    GameConfig,
    ManualDropTimer,
    TetrominoType,
)

T = TypeVar("T")


class SequenceRandom:
    """Stand-in for random.Random whose `choice` cycles through a fixed list of kinds."""

    def __init__(self, kinds: Iterable[TetrominoType]) -> None:
        self._kinds = itertools.cycle(list(kinds))

    def choice(self, seq: Sequence[T]) -> T:
        kind = next(self._kinds)
        assert kind in seq
        return kind  # type: ignore[return-value]


def make_game(*kinds: TetrominoType) -> FallingBlockGame:
    rng = SequenceRandom(kinds or (TetrominoType.O,))
    return FallingBlockGame(GameConfig(), scheduler=ManualDropTimer(), rng=rng)  # type: ignore[arg-type]
