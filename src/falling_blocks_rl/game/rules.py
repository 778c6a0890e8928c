from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProgressionState:
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    drop_interval_ms: int = 1000


@dataclass
class ProgressionPolicy:
    line_clear_scores: tuple[int, ...] = (0, 100, 300, 500, 800)
    lines_per_level: int = 10
    base_drop_interval_ms: int = 1000
    drop_interval_step_ms: int = 75
    min_drop_interval_ms: int = 100

    def initial_state(self) -> ProgressionState:
        return ProgressionState(drop_interval_ms=self.base_drop_interval_ms)

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines < 0:
            raise ValueError(f"lines must be non-negative, got {lines}")
        index = min(lines, len(self.line_clear_scores) - 1)
        return self.line_clear_scores[index] * level

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1

    def drop_interval_for_level(self, level: int) -> int:
        interval = self.base_drop_interval_ms - (level - 1) * self.drop_interval_step_ms
        return max(self.min_drop_interval_ms, interval)

    def apply_clear(self, state: ProgressionState, lines: int) -> bool:
        """Credit a line-clear event to `state`.

        Scores with the level in effect before the event. Returns True when
        the level went up, i.e. the drop timer needs the new interval.
        """
        state.score += self.score_for_lines(lines, state.level)
        state.lines_cleared += lines
        new_level = self.level_for_lines(state.lines_cleared)
        if new_level <= state.level:
            return False
        state.level = new_level
        state.drop_interval_ms = self.drop_interval_for_level(new_level)
        return True
