# src/game/console.py
"""
Character-cell console the game draws into.

`Console` is the headless grid (tests, agent env). `PygameConsole` paints the
same grid into a window and feeds keyboard/clock input back into it.

Per-frame inputs the game reads:
  ctx.frame_time_ms  -> ms elapsed since the previous frame
  ctx.key            -> most recent pygame key code pressed this frame, or None
Output the game may set:
  ctx.quitting       -> ask the host loop to stop
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pygame

from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT, CELL_W, CELL_H, FPS, TITLE,
    COLOR_WHITE, COLOR_BLACK
)

Color = Tuple[int, int, int]


@dataclass
class Cell:
    glyph: str = " "
    fg: Color = COLOR_WHITE
    bg: Color = COLOR_BLACK


class Console:
    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self.frame_time_ms: float = 0.0
        self.key: Optional[int] = None
        self.quitting: bool = False
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(width)] for _ in range(height)
        ]

    # --- drawing ---

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cls(self):
        self.cls_bg(COLOR_BLACK)

    def cls_bg(self, color: Color):
        for row in self.cells:
            for cell in row:
                cell.glyph, cell.fg, cell.bg = " ", COLOR_WHITE, color

    def set(self, x: int, y: int, fg: Color, bg: Color, glyph: str):
        # Off-grid writes are dropped (obstacles far ahead, player below the floor)
        if not self.in_bounds(x, y):
            return
        cell = self.cells[y][x]
        cell.glyph, cell.fg, cell.bg = glyph, fg, bg

    def print(self, x: int, y: int, text: str):
        for i, ch in enumerate(text):
            self.set(x + i, y, COLOR_WHITE, COLOR_BLACK, ch)

    def print_centered(self, y: int, text: str):
        self.print((self.width - len(text)) // 2, y, text)

    # --- inspection ---

    def glyph_at(self, x: int, y: int) -> str:
        return self.cells[y][x].glyph

    def row_text(self, y: int) -> str:
        return "".join(cell.glyph for cell in self.cells[y])

    def column_text(self, x: int) -> str:
        return "".join(self.cells[y][x].glyph for y in range(self.height))

    def dump(self) -> str:
        return "\n".join(self.row_text(y) for y in range(self.height))

    def copy_cells_from(self, other: "Console"):
        for y in range(min(self.height, other.height)):
            for x in range(min(self.width, other.width)):
                src = other.cells[y][x]
                self.set(x, y, src.fg, src.bg, src.glyph)

    # --- host hooks (no-ops when headless) ---

    def poll(self):
        pass

    def present(self):
        pass

    def close(self):
        pass


class PygameConsole(Console):
    """80x50 grid rendered with a monospace font. Raises pygame.error if no display."""

    def __init__(self,
                 width: int = SCREEN_WIDTH,
                 height: int = SCREEN_HEIGHT,
                 title: str = TITLE,
                 fps: int = FPS):
        super().__init__(width, height)
        self.fps = fps
        pygame.init()
        pygame.display.set_caption(title)
        self.screen = pygame.display.set_mode((width * CELL_W, height * CELL_H))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("jetbrainsmono", CELL_H)
        self._glyph_cache: Dict[Tuple[str, Color], pygame.Surface] = {}

    def poll(self):
        self.frame_time_ms = float(self.clock.tick(self.fps))
        self.key = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quitting = True
            elif event.type == pygame.KEYDOWN:
                self.key = event.key   # last press of the frame wins

    def _glyph(self, glyph: str, fg: Color) -> pygame.Surface:
        surf = self._glyph_cache.get((glyph, fg))
        if surf is None:
            surf = self.font.render(glyph, True, fg)
            self._glyph_cache[(glyph, fg)] = surf
        return surf

    def draw(self, surface: pygame.Surface):
        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                rect = pygame.Rect(x * CELL_W, y * CELL_H, CELL_W, CELL_H)
                surface.fill(cell.bg, rect)
                if cell.glyph != " ":
                    g = self._glyph(cell.glyph, cell.fg)
                    surface.blit(g, (rect.centerx - g.get_width() // 2,
                                     rect.centery - g.get_height() // 2))

    def present(self):
        self.draw(self.screen)
        pygame.display.flip()

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
