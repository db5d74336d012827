"""Game module for blockfall.

Exports the core game engine and supporting classes:
- Shape / ShapeKind: the seven-piece catalog with fixed rotation frames
- GamePiece: immutable falling piece (shape, rotation, origin)
- is_legal / clear_lines: pure grid helpers
- Board: immutable board state with down/left/right/rotate transitions
- FallingBlockGame: driver-side owner of the current board
"""

from .pieces import GamePiece, Shape, ShapeKind, SHAPES, all_shapes, random_shape
from .grid import clear_lines, count_full_rows, empty_grid, is_legal
from .board import Board
from .core import Action, FallingBlockGame, GameConfig

__all__ = [
    "GamePiece",
    "Shape",
    "ShapeKind",
    "SHAPES",
    "all_shapes",
    "random_shape",
    "clear_lines",
    "count_full_rows",
    "empty_grid",
    "is_legal",
    "Board",
    "Action",
    "FallingBlockGame",
    "GameConfig",
]
