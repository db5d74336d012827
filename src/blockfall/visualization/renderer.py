from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame


LIT = (235, 235, 235)
UNLIT = (12, 12, 16)
BACKGROUND = (30, 30, 36)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    return LIT if v else UNLIT


class Renderer:
    """Paints a lit/unlit cell matrix; never touches game state."""

    def __init__(self, cell_size: int = 28, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin

    def window_size(self, state: np.ndarray) -> Tuple[int, int]:
        h, w = state.shape
        return w * self.cell_size + self.margin * 2, h * self.cell_size + self.margin * 2

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(BACKGROUND)
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(state[y, x])), rect)
        return surf

    def draw(self, screen: pygame.Surface, state: np.ndarray) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(state), (self.margin, self.margin))
        pygame.display.flip()
