from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks_rl.game import Action, FallingBlockGame, GameConfig, ManualDropTimer
from falling_blocks_rl.visualization.palette import color_for_value


class FallingBlockEnv(gym.Env):
    """
    Single-player falling-block environment driven one input command per step.

    Actions (6 total), mirroring `Action`:
      0: Move Left
      1: Move Right
      2: Rotate
      3: Soft Drop
      4: Hard Drop
      5: No-op

    Gravity runs on simulated time: every step advances the drop timer by
    `frame_ms`, so pieces fall faster as the level rises.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        frame_ms: int = 100,
        max_episode_steps: int = 10000,
        reward_weights: Optional[Dict[str, float]] = None,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.timer = ManualDropTimer()
        self.game = FallingBlockGame(config, scheduler=self.timer)
        self.render_mode = render_mode
        self.frame_ms = int(frame_ms)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            # Positive components
            "lines": 1.0,            # reward per line cleared
            "lines_sq": 0.5,         # extra for multiple lines (quadratic)
            # Negative components (penalize increases)
            "holes": 0.1,
            "height": 0.02,
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        h, w = self.game.grid.height, self.game.grid.width
        self.observation_space = spaces.Dict(
            {
                # settled cells hold kind ids, the falling piece is negated
                "board": spaces.Box(low=-7, high=7, shape=(h, w), dtype=np.int8),
                "level": spaces.Box(low=1, high=np.iinfo(np.int32).max, shape=(1,), dtype=np.int32),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.game.get_state().astype(np.int8),
            "level": np.array([self.game.progression.level], dtype=np.int32),
        }

    def _get_info(self) -> Dict[str, Any]:
        p = self.game.progression
        return {
            "score": p.score,
            "level": p.level,
            "lines_cleared": p.lines_cleared,
            "drop_interval_ms": p.drop_interval_ms,
            "status": self.game.status.value,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        if not self.action_space.contains(int(action)):
            raise ValueError(f"action {action!r} is outside {self.action_space}")

        grid = self.game.grid
        holes_before = grid.count_holes()
        height_before = grid.get_max_height()
        lines_before = self.game.progression.lines_cleared
        score_before = self.game.progression.score

        self.game.step(Action(int(action)))
        self.timer.advance(self.frame_ms)
        self._steps += 1

        lines = self.game.progression.lines_cleared - lines_before
        reward_components: Dict[str, float] = {
            "lines": self.reward_weights["lines"] * float(lines),
            "lines_sq": self.reward_weights["lines_sq"] * float(lines * lines),
            "holes": -self.reward_weights["holes"] * float(max(0, grid.count_holes() - holes_before)),
            "height": -self.reward_weights["height"] * float(max(0, grid.get_max_height() - height_before)),
        }
        terminated = self.game.game_over
        truncated = not terminated and self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = self.game.progression.score - score_before
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            # human rendering lives in visualization.human_play
            return None
        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(state[y, x]))
        return img

    def close(self) -> None:
        pass
