from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import pygame

from blockfall.game import Action, FallingBlockGame, GameConfig
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.DOWN,
}

QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play blockfall in a pygame window.")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--tick-ms", type=int, default=GameConfig.tick_ms)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="[BLOCKFALL] %(asctime)s - %(name)s - %(message)s")

    config = GameConfig(random_seed=args.seed, tick_ms=args.tick_ms)
    game = FallingBlockGame(config)
    renderer = Renderer(cell_size=args.cell_size)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size(game.get_state()))
        pygame.display.set_caption("blockfall")
        logger.info("game started (seed=%s, tick=%dms)", args.seed, config.tick_ms)

        last_fall = pygame.time.get_ticks()
        running = True
        while running:
            # Input and gravity share this loop, so transitions never overlap.
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key in QUIT_KEYS:
                        running = False
                    elif event.key == pygame.K_r and game.game_over:
                        game.reset()
                        last_fall = pygame.time.get_ticks()
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.step(action)

            now = pygame.time.get_ticks()
            if now - last_fall >= config.tick_ms:
                game.tick()
                last_fall = now

            renderer.draw(screen, game.get_state())

            if game.game_over:
                font = pygame.font.SysFont(None, 28)
                text = font.render("Game Over - R to restart, ESC to quit", True, (255, 80, 80))
                rect = text.get_rect(center=(screen.get_width() // 2, 12))
                screen.blit(text, rect)
                pygame.display.flip()

            clock.tick(60)
    finally:
        pygame.quit()
        logger.info("game closed")


if __name__ == "__main__":  # pragma: no cover
    run()
