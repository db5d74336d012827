from __future__ import annotations

import random

import numpy as np
import pytest

from blockfall.game import SHAPES, Board, GamePiece, ShapeKind, empty_grid, is_legal


def _board(piece, grid=None, seed=0):
    if grid is None:
        grid = empty_grid()
    return Board(grid, piece, random.Random(seed))


def test_new_board(rng):
    board = Board.new(rng)
    assert board.grid.shape == (20, 10)
    assert (board.width, board.height) == (10, 20)
    assert not board.grid.any()
    assert (board.piece.x, board.piece.y) == (3, 0)
    assert not board.game_over


def test_down_moves_one_row(square):
    board = _board(square)
    nxt = board.down()
    assert nxt is not board
    assert nxt.piece.y == 1
    assert nxt.grid is board.grid


def test_landing_merges_and_spawns(square):
    board = _board(square.move(dy=18))
    landed = board.down()
    expected = np.zeros((20, 10), dtype=np.int8)
    expected[18:20, 4:6] = 1
    assert np.array_equal(landed.grid, expected)
    assert (landed.piece.x, landed.piece.y, landed.piece.rotation) == (3, 0, 0)
    assert not landed.game_over
    assert landed.lines_cleared == 0
    # The receiver keeps its own grid.
    assert not board.grid.any()


def test_landing_on_settled_cells(square, empty):
    empty[10, 4] = 1
    board = _board(square.move(dy=8), empty)
    landed = board.down()
    assert landed.grid[8:10, 4:6].all()
    assert landed.piece.y == 0


def test_landing_clears_completed_row(square, empty):
    empty[19, :4] = 1
    empty[19, 6:] = 1
    board = _board(square.move(dy=18), empty)
    landed = board.down()
    assert landed.lines_cleared == 1
    expected = np.zeros((20, 10), dtype=np.int8)
    expected[19, 4:6] = 1
    assert np.array_equal(landed.grid, expected)


def test_left_right(square):
    board = _board(square)
    assert board.left().piece.x == 2
    assert board.right().piece.x == 4


def test_illegal_moves_are_noops(square):
    at_left = _board(square.move(dx=-4))
    assert at_left.left() is at_left
    at_right = _board(square.move(dx=4))
    assert at_right.right() is at_right


def test_blocked_sideways_by_settled_cell(square, empty):
    empty[0, 6] = 1
    board = _board(square, empty)
    assert board.right() is board


def test_rotate_without_wall_kick():
    vertical = GamePiece(SHAPES[ShapeKind.I], rotation=1, x=-1, y=5)
    board = _board(vertical)
    assert board.rotate() is board
    free = _board(vertical.move(dx=3))
    assert free.rotate().piece.rotation == 0


def test_rotation_cycle():
    board = _board(GamePiece(SHAPES[ShapeKind.T], x=3, y=5))
    for _ in range(4):
        board = board.rotate()
    assert board.piece.rotation == 0
    assert (board.piece.x, board.piece.y) == (3, 5)


def test_current_matrix_overlays_piece(square):
    board = _board(square)
    matrix = board.current_matrix()
    assert matrix[0, 4] == 1 and matrix[1, 5] == 1
    assert int(matrix.sum()) == 4
    assert not board.grid.any()


def test_grid_is_read_only(square):
    board = _board(square)
    with pytest.raises(ValueError):
        board.grid[0, 0] = 1
    with pytest.raises(ValueError):
        board.current_matrix()[0, 0] = 1


def test_board_rejects_non_binary_grid(square):
    with pytest.raises(ValueError):
        Board(np.full((20, 10), 2, dtype=np.int8), square)


def test_down_without_piece_spawns():
    board = Board(empty_grid(), None, random.Random(3))
    assert board.current_matrix() is board.grid
    assert board.left() is board
    spawned = board.down()
    assert spawned.piece is not None
    assert (spawned.piece.x, spawned.piece.y) == (3, 0)


def test_game_over_when_spawn_is_blocked(empty):
    empty[0:4, 3:7] = 1
    parked = GamePiece(SHAPES[ShapeKind.O], x=-1, y=18)
    board = _board(parked, empty)
    over = board.down()
    assert over.game_over
    assert over.grid[18:20, 0:2].all()
    for op in (over.down, over.left, over.right, over.rotate):
        assert op() is over


def test_transitions_never_mutate_receiver(rng):
    board = Board.new(rng)
    for _ in range(200):
        before_matrix = board.current_matrix().copy()
        before_piece = board.piece
        for op in (board.left, board.right, board.rotate, board.down):
            op()
        assert np.array_equal(board.current_matrix(), before_matrix)
        assert board.piece is before_piece
        board = board.down()


def test_random_play_keeps_invariants():
    rng = random.Random(99)
    board = Board.new(rng)
    moves = ("down", "left", "right", "rotate")
    for _ in range(3000):
        board = getattr(board, rng.choice(moves))()
        assert set(np.unique(board.grid)) <= {0, 1}
        assert board.grid.shape == (20, 10)
        for x, y in board.piece.lit_positions():
            assert 0 <= x < 10 and 0 <= y < 20
        if board.game_over:
            board = Board.new(rng)


def test_read_only_non_binary_grid_rejected(square):
    grid = np.full((20, 10), 2, dtype=np.int8)
    grid.setflags(write=False)
    with pytest.raises(ValueError):
        Board(grid, square)


def test_read_only_view_is_copied(square):
    base = np.zeros((20, 10), dtype=np.int8)
    view = base.view()
    view.setflags(write=False)
    board = Board(view, square)
    base[19, 0] = 1
    assert board.grid[19, 0] == 0
    assert board.current_matrix()[19, 0] == 0


def test_new_board_checks_first_piece(rng):
    # Every frame spawned at x=3 lies past the right edge of a 3-wide board.
    board = Board.new(rng, width=3)
    assert board.game_over
    assert board.down() is board
    assert not board.current_matrix().any()


def test_new_board_first_piece_legal_or_over():
    for seed in range(50):
        board = Board.new(random.Random(seed), width=5)
        assert board.game_over or is_legal(board.piece, board.grid)


def test_landing_twice_shares_generator(square):
    board = _board(square.move(dy=18))
    first, second = board.down(), board.down()
    assert first.rng is board.rng and second.rng is board.rng
    assert np.array_equal(first.grid, second.grid)
    assert board.piece is not None and board.piece.y == 18
