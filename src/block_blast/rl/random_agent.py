from __future__ import annotations

import argparse
import random
from typing import Optional

import gymnasium as gym
import numpy as np

import block_blast.env  # noqa: F401  (registers BlockBlast-8x8-v0)


def run_random(steps: int = 200, seed: Optional[int] = None) -> float:
    """Play uniformly among legal placements; returns the total reward."""
    rng = random.Random(seed)
    env = gym.make("BlockBlast-8x8-v0")
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    games = 0
    for _ in range(steps):
        valid = np.flatnonzero(info["action_mask"])
        if valid.size:
            action = int(rng.choice(list(valid)))
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            games += 1
            print(f"game {games}: score {info['score']} best {info['best_score']}")
            obs, info = env.reset()
    env.close()
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Random legal play over the Block Blast env.")
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:  # pragma: no cover
    args = build_parser().parse_args()
    total = run_random(args.steps, args.seed)
    print(f"Random agent total reward: {total:.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
