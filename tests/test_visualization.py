from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np

from blockfall.visualization.human_play import KEY_TO_ACTION, build_parser
from blockfall.visualization.renderer import LIT, UNLIT, Renderer
from blockfall.game import Action, Board


def test_window_size():
    renderer = Renderer(cell_size=10, margin=5)
    assert renderer.window_size(np.zeros((20, 10))) == (110, 210)


def test_grid_surface_paints_lit_cells():
    renderer = Renderer(cell_size=4, margin=0)
    state = np.zeros((20, 10), dtype=np.int8)
    state[2, 3] = 1
    surf = renderer._grid_surface(state)
    assert surf.get_size() == (40, 80)
    assert tuple(surf.get_at((3 * 4, 2 * 4)))[:3] == LIT
    assert tuple(surf.get_at((0, 0)))[:3] == UNLIT


def test_renderer_leaves_board_alone(rng):
    board = Board.new(rng)
    before = board.current_matrix().copy()
    Renderer(cell_size=2)._grid_surface(board.current_matrix())
    assert np.array_equal(board.current_matrix(), before)


def test_arrow_keys_cover_all_transitions():
    assert set(KEY_TO_ACTION.values()) == {Action.LEFT, Action.RIGHT, Action.ROTATE, Action.DOWN}


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.tick_ms == 500
    assert args.seed is None
    args = build_parser().parse_args(["--seed", "4", "--tick-ms", "250"])
    assert (args.seed, args.tick_ms) == (4, 250)
