from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import FrozenSet, List, Optional, Sequence, Tuple

import numpy as np


Frame = np.ndarray
Coordinate = Tuple[int, int]

SPAWN_X = 3
SPAWN_Y = 0


class ShapeKind(IntEnum):
    I = 1
    O = 2
    L = 3
    J = 4
    Z = 5
    S = 6
    T = 7


def _frame(rows: Sequence[Sequence[int]]) -> Frame:
    arr = np.array(rows, dtype=np.int8)
    if arr.ndim != 2 or arr.size == 0:
        raise ValueError(f"rotation frame must be a non-empty 2-D bitmap, got shape {arr.shape}")
    if not np.isin(arr, (0, 1)).all():
        raise ValueError("rotation frame may only contain 0 and 1")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Shape:
    """A catalog entry: an ordered cycle of fixed rotation frames.

    Shapes compare by identity; pieces reference them, never copy them.
    """

    kind: ShapeKind
    frames: Tuple[Frame, ...] = field(repr=False)

    def __post_init__(self) -> None:
        if not self.frames:
            raise ValueError(f"shape {self.kind.name} needs at least one rotation frame")
        object.__setattr__(self, "frames", tuple(_frame(f) for f in self.frames))

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def frame(self, index: int) -> Frame:
        return self.frames[index]

    @property
    def name(self) -> str:
        return self.kind.name


# Frames are stored with fixed framing and are not re-measured per rotation.
SHAPES = {
    ShapeKind.I: Shape(ShapeKind.I, (
        [[0, 0, 0, 0],
         [1, 1, 1, 1],
         [0, 0, 0, 0],
         [0, 0, 0, 0]],
        [[0, 1, 0, 0],
         [0, 1, 0, 0],
         [0, 1, 0, 0],
         [0, 1, 0, 0]],
    )),
    ShapeKind.O: Shape(ShapeKind.O, (
        [[0, 1, 1],
         [0, 1, 1]],
    )),
    ShapeKind.L: Shape(ShapeKind.L, (
        [[0, 1, 0],
         [0, 1, 0],
         [0, 1, 1]],
        [[0, 0, 0],
         [1, 1, 1],
         [1, 0, 0]],
        [[1, 1, 0],
         [0, 1, 0],
         [0, 1, 0]],
        [[0, 0, 1],
         [1, 1, 1],
         [0, 0, 0]],
    )),
    ShapeKind.J: Shape(ShapeKind.J, (
        [[0, 1, 0],
         [0, 1, 0],
         [1, 1, 0]],
        [[1, 0, 0],
         [1, 1, 1],
         [0, 0, 0]],
        [[0, 1, 1],
         [0, 1, 0],
         [0, 1, 0]],
        [[0, 0, 0],
         [1, 1, 1],
         [0, 0, 1]],
    )),
    ShapeKind.Z: Shape(ShapeKind.Z, (
        [[0, 0, 0],
         [1, 1, 0],
         [0, 1, 1]],
        [[0, 1],
         [1, 1],
         [1, 0]],
    )),
    ShapeKind.S: Shape(ShapeKind.S, (
        [[0, 0, 0],
         [0, 1, 1],
         [1, 1, 0]],
        [[1, 0],
         [1, 1],
         [0, 1]],
    )),
    ShapeKind.T: Shape(ShapeKind.T, (
        [[0, 1, 0],
         [1, 1, 1]],
        [[0, 1, 0],
         [0, 1, 1],
         [0, 1, 0]],
        [[0, 0, 0],
         [1, 1, 1],
         [0, 1, 0]],
        [[0, 1, 0],
         [1, 1, 0],
         [0, 1, 0]],
    )),
}


def all_shapes() -> FrozenSet[Shape]:
    return frozenset(SHAPES.values())


def random_shape(rng: random.Random) -> Shape:
    """Draw a shape uniformly from the catalog."""
    return SHAPES[rng.choice(list(ShapeKind))]


@dataclass(frozen=True)
class GamePiece:
    shape: Shape
    rotation: int = 0
    x: int = SPAWN_X
    y: int = SPAWN_Y

    def __post_init__(self) -> None:
        if not 0 <= self.rotation < self.shape.frame_count:
            raise ValueError(
                f"rotation {self.rotation} out of range for {self.shape.name} "
                f"({self.shape.frame_count} frames)"
            )

    @classmethod
    def spawn(cls, rng: Optional[random.Random] = None, x: int = SPAWN_X, y: int = SPAWN_Y) -> "GamePiece":
        return cls(random_shape(rng or random.Random()), 0, x, y)

    def frame(self) -> Frame:
        return self.shape.frame(self.rotation)

    def rotate(self) -> "GamePiece":
        return GamePiece(self.shape, (self.rotation + 1) % self.shape.frame_count, self.x, self.y)

    def move(self, dx: int = 0, dy: int = 0) -> "GamePiece":
        return GamePiece(self.shape, self.rotation, self.x + dx, self.y + dy)

    def lit_positions(self) -> List[Coordinate]:
        f = self.frame()
        h, w = f.shape
        cells: List[Coordinate] = []
        for dy in range(h):
            for dx in range(w):
                if f[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells
