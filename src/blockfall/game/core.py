from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

import numpy as np

from . import grid as grids
from .board import Board


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    DOWN = 3
    NONE = 4


@dataclass
class GameConfig:
    width: int = grids.WIDTH
    height: int = grids.HEIGHT
    random_seed: Optional[int] = None
    tick_ms: int = 500


class FallingBlockGame:
    """Owns the authoritative Board and serializes transitions onto it.

    Ticks and key events both go through :meth:`step`; callers must not
    invoke it reentrantly.
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.random_seed)
        self.board = self._new_board()

    def _new_board(self) -> Board:
        return Board.new(self.rng, self.config.width, self.config.height)

    def reset(self, seed: Optional[int] = None) -> Board:
        if seed is not None:
            self.rng.seed(seed)
        self.board = self._new_board()
        logger.debug("game reset (seed=%s)", seed)
        return self.board

    @property
    def game_over(self) -> bool:
        return self.board.game_over

    def step(self, action: Union[Action, int]) -> Board:
        action = Action(action)
        board = self.board
        if action == Action.LEFT:
            board = board.left()
        elif action == Action.RIGHT:
            board = board.right()
        elif action == Action.ROTATE:
            board = board.rotate()
        elif action == Action.DOWN:
            board = board.down()
        elif action == Action.NONE:
            pass
        self.board = board
        return board

    def tick(self) -> Board:
        return self.step(Action.DOWN)

    def get_state(self) -> np.ndarray:
        return self.board.current_matrix()
