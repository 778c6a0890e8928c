from __future__ import annotations

from enum import IntEnum
from typing import Dict, Sequence, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


def _frozen(rows: Sequence[Sequence[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


# Simplified hand-authored rotations: I, S and Z only toggle between two
# states and O never rotates. Cells carry the kind id for coloring.
ROTATIONS: Dict[TetrominoType, Tuple[Shape, ...]] = {
    TetrominoType.I: (
        _frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
        _frozen([[0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0]]),
    ),
    TetrominoType.J: (
        _frozen([[2, 0, 0], [2, 2, 2], [0, 0, 0]]),
        _frozen([[0, 2, 2], [0, 2, 0], [0, 2, 0]]),
        _frozen([[0, 0, 0], [2, 2, 2], [0, 0, 2]]),
        _frozen([[0, 2, 0], [0, 2, 0], [2, 2, 0]]),
    ),
    TetrominoType.L: (
        _frozen([[0, 0, 3], [3, 3, 3], [0, 0, 0]]),
        _frozen([[0, 3, 0], [0, 3, 0], [0, 3, 3]]),
        _frozen([[0, 0, 0], [3, 3, 3], [3, 0, 0]]),
        _frozen([[3, 3, 0], [0, 3, 0], [0, 3, 0]]),
    ),
    TetrominoType.O: (
        _frozen([[4, 4], [4, 4]]),
    ),
    TetrominoType.S: (
        _frozen([[0, 5, 5], [5, 5, 0], [0, 0, 0]]),
        _frozen([[0, 5, 0], [0, 5, 5], [0, 0, 5]]),
    ),
    TetrominoType.T: (
        _frozen([[0, 6, 0], [6, 6, 6], [0, 0, 0]]),
        _frozen([[0, 6, 0], [0, 6, 6], [0, 6, 0]]),
        _frozen([[0, 0, 0], [6, 6, 6], [0, 6, 0]]),
        _frozen([[0, 6, 0], [6, 6, 0], [0, 6, 0]]),
    ),
    TetrominoType.Z: (
        _frozen([[7, 7, 0], [0, 7, 7], [0, 0, 0]]),
        _frozen([[0, 0, 7], [0, 7, 7], [0, 7, 0]]),
    ),
}


def rotations(kind: TetrominoType) -> Tuple[Shape, ...]:
    """All rotation states of `kind`, in clockwise order."""
    return ROTATIONS[TetrominoType(kind)]


def next_rotation(kind: TetrominoType, current: int) -> int:
    return (current + 1) % len(rotations(kind))


def shape_for(kind: TetrominoType, rotation: int) -> Shape:
    states = rotations(kind)
    return states[rotation % len(states)]
