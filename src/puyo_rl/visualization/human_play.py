from __future__ import annotations

import argparse
from typing import Dict, Optional

import pygame

from puyo_rl.game import Action, GameConfig, LockResult, PuyoGame
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
}


def _lock_message(lock: Optional[LockResult]) -> str:
    if lock is None or lock.chain is None or lock.chain.chains == 0:
        return ""
    return f"{lock.chain.chains} chain! +{lock.points}"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--colors", type=int, default=5, help="Number of colors (3-5)")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--gravity_ms", type=int, default=800)
    return p


def run() -> None:
    args = build_parser().parse_args()
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = PuyoGame(GameConfig(color_count=args.colors, random_seed=args.seed))
        renderer = Renderer(cell_size=40)
        screen = pygame.display.set_mode(renderer.window_size(game.grid.rows, game.grid.cols))
        pygame.display.set_caption("Puyo - Human Play")

        # The engine has no clock; gravity is driven from here
        last_fall = pygame.time.get_ticks()
        message = ""

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game.reset()
                        message = ""
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            lock = game.command(action)
                            message = _lock_message(lock) or message

            now = pygame.time.get_ticks()
            if now - last_fall >= args.gravity_ms:
                lock = game.tick()
                message = _lock_message(lock) or message
                last_fall = now

            if game.game_over:
                message = "Game Over - R to restart"
            renderer.draw(screen, game, message)
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
