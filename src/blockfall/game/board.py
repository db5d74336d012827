from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Callable, Optional

import numpy as np

from . import grid as grids
from .pieces import SPAWN_X, SPAWN_Y, GamePiece


logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Board:
    """Immutable game state: settled cells plus the falling piece.

    Every transition returns a new Board, or the receiver itself when the
    requested move is rejected. ``lines_cleared`` counts the rows removed by
    the transition that produced this board.

    ``rng`` is shared with successor boards and advances on every spawn, so
    calling ``down()`` twice on the same landing board spawns different pieces.
    """

    grid: np.ndarray
    piece: Optional[GamePiece] = None
    rng: random.Random = field(default_factory=random.Random, repr=False)
    game_over: bool = False
    lines_cleared: int = 0

    def __post_init__(self) -> None:
        if grids.is_frozen(self.grid):
            grids.check_cells(self.grid)
        else:
            object.__setattr__(self, "grid", grids.as_grid(self.grid))

    @classmethod
    def new(
        cls,
        rng: Optional[random.Random] = None,
        width: int = grids.WIDTH,
        height: int = grids.HEIGHT,
    ) -> "Board":
        empty = cls(grids.empty_grid(width, height), None, rng or random.Random())
        return empty._with_spawned(empty.grid, 0)

    @property
    def width(self) -> int:
        return int(self.grid.shape[1])

    @property
    def height(self) -> int:
        return int(self.grid.shape[0])

    def merge(self, piece: GamePiece) -> np.ndarray:
        return grids.merge(self.grid, piece.lit_positions())

    def current_matrix(self) -> np.ndarray:
        if self.piece is None:
            return self.grid
        cells = self.piece.lit_positions()
        if self.game_over:
            # A blocked spawn may hang past the edges of a narrow board.
            cells = [(x, y) for x, y in cells if grids.is_inside(self.grid, x, y)]
        return grids.merge(self.grid, cells)

    def _spawn(self) -> GamePiece:
        return GamePiece.spawn(self.rng, SPAWN_X, SPAWN_Y)

    def _try(self, transform: Callable[[GamePiece], GamePiece]) -> "Board":
        if self.game_over or self.piece is None:
            return self
        candidate = transform(self.piece)
        if grids.is_legal(candidate, self.grid):
            return replace(self, piece=candidate, lines_cleared=0)
        return self

    def left(self) -> "Board":
        return self._try(lambda p: p.move(dx=-1))

    def right(self) -> "Board":
        return self._try(lambda p: p.move(dx=1))

    def rotate(self) -> "Board":
        return self._try(lambda p: p.rotate())

    def down(self) -> "Board":
        if self.game_over:
            return self
        if self.piece is None:
            return self._with_spawned(self.grid, 0)
        moved = self.piece.move(dy=1)
        if grids.is_legal(moved, self.grid):
            return replace(self, piece=moved, lines_cleared=0)
        return self._lock()

    def _lock(self) -> "Board":
        assert self.piece is not None
        merged = self.merge(self.piece)
        lines = grids.count_full_rows(merged)
        cleared = grids.clear_lines(merged)
        logger.debug(
            "locked %s at (%d, %d), cleared %d row(s)",
            self.piece.shape.name, self.piece.x, self.piece.y, lines,
        )
        return self._with_spawned(cleared, lines)

    def _with_spawned(self, grid: np.ndarray, lines: int) -> "Board":
        spawned = self._spawn()
        # A spawn that is already blocked means the stack reached the top.
        topped_out = not grids.is_legal(spawned, grid)
        if topped_out:
            logger.info("spawned %s is blocked; game over", spawned.shape.name)
        return Board(grid, spawned, self.rng, game_over=topped_out, lines_cleared=lines)
