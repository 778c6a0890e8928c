from __future__ import annotations

from typing import Dict, Tuple

Color = Tuple[int, int, int]

EMPTY_COLOR: Color = (20, 20, 26)

KIND_COLORS: Dict[int, Color] = {
    1: (0, 240, 240),  # I
    2: (0, 0, 240),    # J
    3: (240, 160, 0),  # L
    4: (240, 240, 0),  # O
    5: (0, 240, 0),    # S
    6: (160, 0, 240),  # T
    7: (240, 0, 0),    # Z
}


def color_for_value(v: int) -> Color:
    """Color of a board cell; negative values (the falling piece) share the kind color."""
    if v == 0:
        return EMPTY_COLOR
    return KIND_COLORS.get(abs(v), (200, 200, 200))
