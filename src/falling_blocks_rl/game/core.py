from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

import numpy as np

from .grid import GameGrid
from .pieces import ActivePiece
from .rules import ProgressionPolicy, ProgressionState
from .shapes import TetrominoType, rotations
from .timing import DropScheduler, ManualDropTimer

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


class GameStatus(Enum):
    READY = "ready"
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid must be non-empty, got {self.width}x{self.height}")


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the engine handed to renderers and environments."""

    board: np.ndarray
    piece_kind: Optional[TetrominoType]
    piece_rotation: Optional[int]
    piece_x: Optional[int]
    piece_y: Optional[int]
    score: int
    level: int
    lines_cleared: int
    drop_interval_ms: int
    status: GameStatus


class FallingBlockGame:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        policy: Optional[ProgressionPolicy] = None,
        scheduler: Optional[DropScheduler] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.policy = policy or ProgressionPolicy()
        self.scheduler: DropScheduler = scheduler if scheduler is not None else ManualDropTimer()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.progression: ProgressionState = self.policy.initial_state()
        self.status = GameStatus.READY
        self.current_piece: Optional[ActivePiece] = None
        self.last_lines_cleared = 0

    @property
    def running(self) -> bool:
        return self.status is GameStatus.RUNNING

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    def start(self) -> None:
        """Reset everything and begin a new run. Safe to call at any time."""
        self.scheduler.cancel()
        self.grid.reset()
        self.progression = self.policy.initial_state()
        self.last_lines_cleared = 0
        self.status = GameStatus.RUNNING
        self.spawn()
        if self.running:
            self.scheduler.schedule(self.progression.drop_interval_ms, self.tick)

    def spawn(self) -> None:
        kind = self.rng.choice(list(TetrominoType))
        shape_w = rotations(kind)[0].shape[1]
        x = self.grid.width // 2 - (shape_w + 1) // 2
        piece = ActivePiece(kind=kind, rotation=0, x=x, y=self.config.spawn_y)
        if not self.grid.can_place(piece.shape(), piece.x, piece.y):
            self.current_piece = None
            self._end_game()
            return
        self.current_piece = piece
        logger.debug("spawned %s at x=%d y=%d", kind.name, piece.x, piece.y)

    def _end_game(self) -> None:
        self.status = GameStatus.GAME_OVER
        self.scheduler.cancel()
        p = self.progression
        logger.info("game over: score=%d level=%d lines=%d", p.score, p.level, p.lines_cleared)

    def move(self, dx: int, dy: int) -> bool:
        if not self.running or self.current_piece is None:
            return False
        moved = self.current_piece.moved(dx, dy)
        if not self.grid.can_place(moved.shape(), moved.x, moved.y):
            return False
        self.current_piece = moved
        return True

    def move_left(self) -> bool:
        return self.move(-1, 0)

    def move_right(self) -> bool:
        return self.move(1, 0)

    def soft_drop(self) -> bool:
        return self.move(0, 1)

    def rotate(self) -> bool:
        if not self.running or self.current_piece is None:
            return False
        rotated = self.current_piece.rotated()
        if not self.grid.can_place(rotated.shape(), rotated.x, rotated.y):
            return False
        self.current_piece = rotated
        return True

    def hard_drop(self) -> None:
        if not self.running or self.current_piece is None:
            return
        while self.move(0, 1):
            pass
        self.lock()

    def tick(self) -> None:
        """Automatic drop: fall one row, or lock in place when blocked."""
        if not self.running:
            return
        if not self.move(0, 1):
            self.lock()

    def lock(self) -> int:
        """Settle the active piece, clear full rows and spawn the next piece.

        Returns the number of rows cleared.
        """
        if not self.running or self.current_piece is None:
            return 0
        piece = self.current_piece
        self.grid.write_cells(piece.cells(), int(piece.kind))
        lines = self.grid.clear_full_lines()
        self.last_lines_cleared = lines
        logger.debug("locked %s at x=%d y=%d, cleared %d", piece.kind.name, piece.x, piece.y, lines)
        if lines > 0 and self.policy.apply_clear(self.progression, lines):
            logger.info(
                "level %d reached, drop interval %d ms",
                self.progression.level,
                self.progression.drop_interval_ms,
            )
            self.scheduler.schedule(self.progression.drop_interval_ms, self.tick)
        self.spawn()
        return lines

    def step(self, action: Action) -> bool:
        """Apply one input command. Returns whether the piece moved or rotated."""
        if not self.running:
            return False

        if action == Action.LEFT:
            return self.move_left()
        if action == Action.RIGHT:
            return self.move_right()
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            self.hard_drop()
            return True
        return False

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(self.current_piece.kind)
        return state

    def snapshot(self) -> GameSnapshot:
        piece = self.current_piece
        p = self.progression
        return GameSnapshot(
            board=self.grid.clone_state(),
            piece_kind=piece.kind if piece else None,
            piece_rotation=piece.rotation if piece else None,
            piece_x=piece.x if piece else None,
            piece_y=piece.y if piece else None,
            score=p.score,
            level=p.level,
            lines_cleared=p.lines_cleared,
            drop_interval_ms=p.drop_interval_ms,
            status=self.status,
        )
