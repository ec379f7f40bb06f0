from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from puyo_rl.env.puyo_env import PALETTE
from puyo_rl.game import Pair, PuyoGame


def _color_for_value(v: int) -> Tuple[int, int, int]:
    return PALETTE.get(v, (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        side_panel_w = 5 * self.cell_size
        width = cols * self.cell_size + side_panel_w + self.margin * 3
        height = rows * self.cell_size + self.margin * 2
        return width, height

    def _puyo(self, surf: pygame.Surface, x: int, y: int, color: Tuple[int, int, int], width: int = 0) -> None:
        radius = self.cell_size // 2 - 2
        center = (x + self.cell_size // 2, y + self.cell_size // 2)
        pygame.draw.circle(surf, color, center, radius, width)

    def _grid_surface(self, state: np.ndarray, ghost: Optional[Pair]) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)
                pygame.draw.rect(surf, (20, 20, 26), rect)
                v = int(state[y, x])
                if v:
                    self._puyo(surf, x * self.cell_size, y * self.cell_size, _color_for_value(v))
        if ghost is not None:
            for cell in ghost.cells:
                if 0 <= cell.row < h and not state[cell.row, cell.col]:
                    self._puyo(surf, cell.col * self.cell_size, cell.row * self.cell_size,
                               _color_for_value(cell.color), width=2)
        return surf

    def _text(self, screen: pygame.Surface, text: str, pos: Tuple[int, int]) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        screen.blit(self._font.render(text, True, (230, 230, 240)), pos)

    def draw(self, screen: pygame.Surface, game: PuyoGame, message: str = "") -> None:
        state = game.render_state()
        grid_surf = self._grid_surface(state, game.ghost_pair())
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))

        # Side panel: next pair, score, chains
        x0 = self.margin * 2 + game.grid.cols * self.cell_size
        y0 = self.margin
        self._text(screen, "Next", (x0, y0))
        base, child = game.next_pair
        # Child is drawn above the base, as it spawns
        self._puyo(screen, x0, y0 + 24, _color_for_value(child))
        self._puyo(screen, x0, y0 + 24 + self.cell_size, _color_for_value(base))
        self._text(screen, f"Score {game.score}", (x0, y0 + 40 + 2 * self.cell_size))
        self._text(screen, f"Chains {game.chain_count}", (x0, y0 + 64 + 2 * self.cell_size))
        if message:
            self._text(screen, message, (x0, y0 + 88 + 2 * self.cell_size))
        pygame.display.flip()
