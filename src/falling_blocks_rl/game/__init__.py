"""Game module for Falling Blocks RL.

Exports the core game engine and supporting classes:
- GameGrid: Grid representation and line clearing
- ActivePiece: The falling piece and its position
- TetrominoType: Enum of available piece types
- ProgressionPolicy: Score, level and drop-speed rules
- ManualDropTimer: Simulated-time drop scheduler
- FallingBlockGame: Engine controller and state machine
"""

from .collision import is_valid
from .grid import GameGrid
from .pieces import ActivePiece
from .shapes import TetrominoType, next_rotation, rotations, shape_for
from .rules import ProgressionPolicy, ProgressionState
from .timing import DropScheduler, ManualDropTimer
from .core import Action, FallingBlockGame, GameConfig, GameSnapshot, GameStatus

__all__ = [
    "is_valid",
    "GameGrid",
    "ActivePiece",
    "TetrominoType",
    "next_rotation",
    "rotations",
    "shape_for",
    "ProgressionPolicy",
    "ProgressionState",
    "DropScheduler",
    "ManualDropTimer",
    "Action",
    "FallingBlockGame",
    "GameConfig",
    "GameSnapshot",
    "GameStatus",
]
