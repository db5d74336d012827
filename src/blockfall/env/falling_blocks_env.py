from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import Action, FallingBlockGame, GameConfig


class FallingBlocksEnv(gym.Env):
    """One env step is one driver event: a key press or a gravity tick.

    The reward is the number of rows cleared by the step; the episode
    terminates when a freshly spawned piece is already blocked.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 2}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 5000) -> None:
        super().__init__()
        self.game = FallingBlockGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.game.board.height, self.game.board.width
        self.observation_space = spaces.Box(low=0, high=1, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return np.array(self.game.get_state(), dtype=np.int8)

    def _get_info(self) -> Dict[str, Any]:
        piece = self.game.board.piece
        return {
            "steps": self._steps,
            "piece": piece.shape.name if piece is not None else None,
            "lines_cleared": self.game.board.lines_cleared,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        # Derive the piece stream from the gymnasium generator so env seeding is reproducible.
        self.game.reset(int(self.np_random.integers(0, 2**31 - 1)))
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        board = self.game.step(Action(int(action)))
        self._steps += 1
        reward = float(board.lines_cleared)
        terminated = bool(board.game_over)
        truncated = not terminated and self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.game.get_state()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = (235, 235, 235) if grid[y, x] else (12, 12, 16)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
