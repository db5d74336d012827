"""Pure helpers over the settled-cell grid.

The grid is a ``(height, width)`` ``int8`` matrix holding 0 for empty cells and
1 for settled ones. Every helper returns a fresh read-only array and leaves its
input untouched, so boards that still reference an older grid never see it
change.
"""

from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .pieces import GamePiece


Coordinate = Tuple[int, int]

WIDTH = 10
HEIGHT = 20


def _frozen(grid: np.ndarray) -> np.ndarray:
    grid.setflags(write=False)
    return grid


def empty_grid(width: int = WIDTH, height: int = HEIGHT) -> np.ndarray:
    return _frozen(np.zeros((int(height), int(width)), dtype=np.int8))


def check_cells(grid: np.ndarray) -> np.ndarray:
    if grid.ndim != 2:
        raise ValueError(f"grid must be 2-D, got shape {grid.shape}")
    if not np.isin(grid, (0, 1)).all():
        raise ValueError("grid cells must be 0 or 1")
    return grid


def is_frozen(grid) -> bool:
    """True for a read-only int8 array that owns its data.

    Views are excluded: their base may still be written through.
    """
    return (
        isinstance(grid, np.ndarray)
        and grid.base is None
        and grid.dtype == np.int8
        and not grid.flags.writeable
    )


def as_grid(cells) -> np.ndarray:
    """Validate ``cells`` as a 0/1 matrix and return a read-only copy."""
    return _frozen(check_cells(np.array(cells, dtype=np.int8)))


def is_inside(grid: np.ndarray, x: int, y: int) -> bool:
    height, width = grid.shape
    return 0 <= x < width and 0 <= y < height


def is_legal(piece: GamePiece, grid: np.ndarray) -> bool:
    """True when every lit cell of ``piece`` is on the board and empty."""
    cells = piece.lit_positions()
    # Bounds first: the grid is only indexed with in-range coordinates.
    for x, y in cells:
        if not is_inside(grid, x, y):
            return False
    for x, y in cells:
        if grid[y, x] != 0:
            return False
    return True


def merge(grid: np.ndarray, cells: Iterable[Coordinate]) -> np.ndarray:
    """Bake ``cells`` into a copy of ``grid`` as settled 1s.

    Raises ``ValueError`` for a cell off the board; there is no clipping.
    """
    merged = grid.copy()
    for x, y in cells:
        if not is_inside(merged, x, y):
            raise ValueError(f"cell ({x}, {y}) is outside the {merged.shape[1]}x{merged.shape[0]} board")
        merged[y, x] = 1
    return _frozen(merged)


def full_rows(grid: np.ndarray) -> np.ndarray:
    return np.all(grid != 0, axis=1)


def count_full_rows(grid: np.ndarray) -> int:
    return int(np.count_nonzero(full_rows(grid)))


def clear_lines(grid: np.ndarray) -> np.ndarray:
    """Drop every full row and pad the top with as many empty rows.

    Fullness is decided once over the original rows; surviving rows keep
    their relative order.
    """
    full = full_rows(grid)
    num = int(np.count_nonzero(full))
    if num == 0:
        return grid
    kept = grid[~full]
    new_rows = np.zeros((num, grid.shape[1]), dtype=np.int8)
    return _frozen(np.vstack((new_rows, kept)))
