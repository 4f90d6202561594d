from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_blast.game import PIECE_INDEX, PIECE_LIST, BlockBlastGame, GameConfig, ScoringRules


logger = logging.getLogger(__name__)


class BlockBlastEnv(gym.Env):
    """Placement environment over ``BlockBlastGame``.

    Actions are flattened (slot, row, col) in C order. Reward is the engine's
    score delta for a legal placement and ``invalid_action_penalty`` otherwise.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
        invalid_action_penalty: float = -1.0,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.rules = rules
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.game = BlockBlastGame(self.config, rules)

        size = self.config.size
        k = self.config.tray_size
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "tray": spaces.Box(low=-1, high=len(PIECE_LIST) - 1, shape=(k,), dtype=np.int8),
            }
        )
        self.action_space = spaces.Discrete(k * size * size)

    def _unflatten(self, action: int) -> Tuple[int, int, int]:
        size = self.config.size
        slot, rest = divmod(int(action), size * size)
        row, col = divmod(rest, size)
        return slot, row, col

    def _flatten(self, slot: int, row: int, col: int) -> int:
        size = self.config.size
        return (slot * size + row) * size + col

    def action_masks(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.bool_)
        for slot, row, col in self.game.valid_moves():
            mask[self._flatten(slot, row, col)] = True
        return mask

    def _get_obs(self) -> Dict[str, Any]:
        snap = self.game.get_snapshot()
        tray = np.full((self.config.tray_size,), -1, dtype=np.int8)
        for i, piece_id in enumerate(snap.tray):
            tray[i] = PIECE_INDEX[piece_id]
        return {
            "grid": snap.cells.reshape(snap.size, snap.size),
            "tray": tray,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "best_score": self.game.best_score,
            "moves": self.game.moves,
            "action_mask": self.action_masks(),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        if seed is not None:
            # Rebuild so the piece stream follows the seed; best score carries over.
            self.config = replace(self.config, random_seed=seed)
            self.game = BlockBlastGame(self.config, self.rules, initial_best_score=self.game.best_score)
        else:
            self.game.reset()
        return self._get_obs(), self._get_info()

    def step(self, action):
        slot, row, col = self._unflatten(action)
        placed = self.game.try_place_at(slot, row, col)
        if placed:
            reward = float(self.game.last_move.score_delta)
        else:
            reward = self.invalid_action_penalty
            logger.debug("invalid action %d -> slot=%d row=%d col=%d", int(action), slot, row, col)
        terminated = self.game.is_game_over
        info = self._get_info()
        info["placed"] = placed
        return self._get_obs(), reward, terminated, False, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.game.board.grid()
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                color = (90, 209, 255) if grid[y, x] else (28, 28, 28)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
