from __future__ import annotations

import gymnasium as gym
import numpy as np
import pytest

import falling_blocks_rl.env  # noqa: F401
from falling_blocks_rl.env.falling_block_env import FallingBlockEnv
from falling_blocks_rl.game import Action


def test_registered_env_resets_to_running_game() -> None:
    env = gym.make("FallingBlocks-10x20-v0")
    obs, info = env.reset(seed=0)
    assert obs["board"].shape == (20, 10)
    assert obs["board"].dtype == np.int8
    # only the falling piece is on the board, shown negated
    assert (obs["board"] <= 0).all()
    assert int(np.count_nonzero(obs["board"])) == 4
    assert info["status"] == "running"
    assert info["level"] == 1
    env.close()


def test_hard_drops_eventually_terminate() -> None:
    env = FallingBlockEnv()
    env.reset(seed=1)
    terminated = False
    for _ in range(200):
        _, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
        assert isinstance(reward, float)
        assert not truncated
        if terminated:
            break
    assert terminated
    assert info["status"] == "game_over"
    assert "terminal" in info["reward_components"]


def test_gravity_advances_with_frame_time() -> None:
    env = FallingBlockEnv(frame_ms=500)
    env.reset(seed=3)
    y0 = env.game.current_piece.y
    env.step(int(Action.NONE))
    env.step(int(Action.NONE))
    assert env.game.current_piece.y == y0 + 1


def test_seeded_resets_are_reproducible() -> None:
    env = FallingBlockEnv()
    first, _ = env.reset(seed=5)
    second, _ = env.reset(seed=5)
    assert np.array_equal(first["board"], second["board"])


def test_truncates_at_step_limit() -> None:
    env = FallingBlockEnv(max_episode_steps=3)
    env.reset(seed=0)
    results = [env.step(int(Action.NONE)) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_out_of_range_action_is_rejected() -> None:
    env = FallingBlockEnv()
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step(len(Action))


def test_rgb_render_shape() -> None:
    env = FallingBlockEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img is not None
    assert img.shape == (240, 120, 3)
    assert img.dtype == np.uint8
