import gymnasium as gym
import numpy as np

import block_blast.env  # noqa: F401
from block_blast.env import BlockBlastEnv
from block_blast.game import GameConfig


def test_reset_observation_matches_space():
    env = BlockBlastEnv()
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert obs["grid"].shape == (8, 8)
    assert np.all(obs["tray"] >= 0)
    assert info["action_mask"].shape == (3 * 64,)
    assert int(info["action_mask"].sum()) == len(env.game.valid_moves())


def test_seeded_reset_is_reproducible():
    env = BlockBlastEnv()
    obs_a, _ = env.reset(seed=42)
    obs_b, _ = env.reset(seed=42)
    assert np.array_equal(obs_a["tray"], obs_b["tray"])


def test_valid_step_rewards_score_delta():
    env = BlockBlastEnv()
    obs, info = env.reset(seed=1)
    action = int(np.flatnonzero(info["action_mask"])[0])
    obs, reward, terminated, truncated, info = env.step(action)
    assert info["placed"]
    assert reward == env.game.last_move.score_delta > 0
    assert info["score"] == reward
    assert obs["tray"][2] == -1
    assert not truncated


def test_invalid_step_is_penalised():
    env = BlockBlastEnv(invalid_action_penalty=-0.5)
    _, info = env.reset(seed=1)
    action = int(np.flatnonzero(info["action_mask"])[0])
    env.step(action)
    # Any action outside the mask is rejected by the engine.
    blocked = int(np.flatnonzero(~env.action_masks())[0])
    before = env.game.get_snapshot()
    _, reward, _, _, info = env.step(blocked)
    assert not info["placed"]
    assert reward == -0.5
    assert env.game.get_snapshot() == before


def test_registered_env_and_render():
    env = gym.make("BlockBlast-8x8-v0", render_mode="rgb_array")
    env.reset(seed=3)
    frame = env.render()
    assert frame.shape == (96, 96, 3)
    env.close()


def test_custom_size():
    env = BlockBlastEnv(GameConfig(size=10))
    assert env.action_space.n == 300
    obs, _ = env.reset()
    assert obs["grid"].shape == (10, 10)
