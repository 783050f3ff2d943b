# src/game/obstacle.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Tuple

from .config import (
    SCREEN_HEIGHT, GAP_Y_MIN, GAP_Y_MAX, GAP_SIZE_START, GAP_SIZE_MIN,
    OBSTACLE_GLYPH, COLOR_RED, COLOR_BLACK
)
from .player import Player


def gap_size_for_score(score: int) -> int:
    """Gap height shrinks by one per point scored, floored at GAP_SIZE_MIN."""
    return max(GAP_SIZE_MIN, GAP_SIZE_START - score)


@dataclass
class Obstacle:
    """
    A single wall column with a hole in it.
    - x     : world-space column
    - gap_y : vertical center of the hole
    - size  : total height of the hole
    The passable rows are the half-open range [gap_y - size//2, gap_y + size//2).
    """
    x: int
    gap_y: int
    size: int

    @classmethod
    def new(cls, x: int, score: int, rng: random.Random | None = None) -> "Obstacle":
        rng = rng or random.Random()
        return cls(
            x=x,
            gap_y=rng.randrange(GAP_Y_MIN, GAP_Y_MAX),
            size=gap_size_for_score(score),
        )

    @property
    def half_size(self) -> int:
        return self.size // 2

    def gap_bounds(self) -> Tuple[int, int]:
        return self.gap_y - self.half_size, self.gap_y + self.half_size

    def render(self, ctx, player_x: int, screen_height: int = SCREEN_HEIGHT):
        # World -> screen: the player is pinned at column 0
        screen_x = self.x - player_x
        gap_top, gap_bottom = self.gap_bounds()

        for y in range(0, gap_top):
            ctx.set(screen_x, y, COLOR_RED, COLOR_BLACK, OBSTACLE_GLYPH)
        for y in range(gap_bottom, screen_height):
            ctx.set(screen_x, y, COLOR_RED, COLOR_BLACK, OBSTACLE_GLYPH)

    def hit_obstacle(self, player: Player) -> bool:
        """
        Column-exact test: only the step where player.x == self.x can collide.
        The player moves one column per step, so that step is never skipped.
        """
        gap_top, gap_bottom = self.gap_bounds()
        does_x_match = player.x == self.x
        player_above_gap = player.y < gap_top
        player_below_gap = player.y > gap_bottom
        return does_x_match and (player_above_gap or player_below_gap)
