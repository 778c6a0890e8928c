from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from falling_blocks_rl.game import GameSnapshot, GameStatus
from .palette import color_for_value


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 160) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        board_w = width * self.cell_size
        board_h = height * self.cell_size
        return self.margin * 3 + board_w + self.panel_width, self.margin * 2 + board_h

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont(None, 26)
            self._big_font = pygame.font.SysFont(None, 40)
        return self._font, self._big_font

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        width = w * self.cell_size
        height = h * self.cell_size
        surf = pygame.Surface((width, height))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                color = color_for_value(v)
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color, rect)
        return surf

    def _draw_hud(self, screen: pygame.Surface, snapshot: GameSnapshot, board_w: int) -> None:
        font, _ = self._fonts()
        x = self.margin * 2 + board_w
        y = self.margin
        lines = [
            f"Score  {snapshot.score}",
            f"Level  {snapshot.level}",
            f"Lines  {snapshot.lines_cleared}",
            "",
            "Arrows  move/rotate",
            "Space   hard drop",
            "R       restart",
        ]
        for text in lines:
            if text:
                screen.blit(font.render(text, True, (230, 230, 230)), (x, y))
            y += 28

    def _draw_banner(self, screen: pygame.Surface, text: str, board_w: int, board_h: int) -> None:
        _, big_font = self._fonts()
        msg = big_font.render(text, True, (255, 220, 220))
        rect = msg.get_rect(center=(self.margin + board_w // 2, self.margin + board_h // 2))
        backdrop = rect.inflate(20, 14)
        pygame.draw.rect(screen, (10, 10, 14), backdrop)
        screen.blit(msg, rect)

    def draw(self, screen: pygame.Surface, state: np.ndarray, snapshot: GameSnapshot) -> None:
        h, w = state.shape
        board_w = w * self.cell_size
        board_h = h * self.cell_size
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(state), (self.margin, self.margin))
        self._draw_hud(screen, snapshot, board_w)
        if snapshot.status is GameStatus.GAME_OVER:
            self._draw_banner(screen, "GAME OVER - R to restart", board_w, board_h)
        elif snapshot.status is GameStatus.READY:
            self._draw_banner(screen, "Press R to start", board_w, board_h)
        pygame.display.flip()
