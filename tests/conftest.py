from __future__ import annotations

import random

import numpy as np
import pytest

from blockfall.game import SHAPES, GamePiece, ShapeKind


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def empty() -> np.ndarray:
    return np.zeros((20, 10), dtype=np.int8)


@pytest.fixture
def square() -> GamePiece:
    return GamePiece(SHAPES[ShapeKind.O])
