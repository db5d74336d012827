from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import gymnasium as gym

import blockfall.env  # noqa: F401


logger = logging.getLogger(__name__)


def run_random(steps: int = 2000, seed: Optional[int] = None) -> float:
    env = gym.make("FallingBlocks-10x20-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("episode %d ended after %d steps", episodes, info["steps"])
            obs, info = env.reset()
    env.close()
    return total_reward


def main(argv: Optional[List[str]] = None) -> None:
    p = argparse.ArgumentParser(description="Run a uniform random policy on blockfall.")
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="[BLOCKFALL] %(asctime)s - %(message)s")
    total = run_random(args.steps, args.seed)
    print(f"Random agent cleared {total:.0f} row(s)")


if __name__ == "__main__":  # pragma: no cover
    main()
