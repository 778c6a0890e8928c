from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

from .shapes import Shape, TetrominoType, next_rotation, shape_for


@dataclass
class ActivePiece:
    kind: TetrominoType
    rotation: int = 0
    x: int = 0  # column of the shape grid's left edge
    y: int = 0  # row of the shape grid's top edge, may be negative

    def shape(self) -> Shape:
        return shape_for(self.kind, self.rotation)

    def rotated(self) -> "ActivePiece":
        return replace(self, rotation=next_rotation(self.kind, self.rotation))

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def cells(self) -> List[Tuple[int, int]]:
        s = self.shape()
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells
