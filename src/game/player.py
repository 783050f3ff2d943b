# src/game/player.py
from __future__ import annotations
from dataclasses import dataclass

from .config import (
    GRAVITY_STEP, MAX_VELOCITY, FLAP_IMPULSE,
    PLAYER_GLYPH, COLOR_YELLOW, COLOR_BLACK
)

VELOCITY_DIGITS = 6


@dataclass
class Player:
    """
    The dragon. Lives in world-space:
    - x advances by exactly 1 per simulation step (world distance / time)
    - y grows downward, 0 is the top row
    On screen it is always drawn in column 0; everything else is projected around it.
    """
    x: int
    y: int
    velocity: float = 0.0

    def gravity_and_move(self,
                         gravity_step: float = GRAVITY_STEP,
                         max_velocity: float = MAX_VELOCITY):
        """One fixed simulation step: accelerate, integrate, advance one column."""
        # Rounded so ten 0.2 steps land exactly on 2.0 and int() sees whole rows
        self.velocity = min(round(self.velocity + gravity_step, VELOCITY_DIGITS), max_velocity)
        self.y += int(self.velocity)   # truncates toward zero
        self.x += 1
        if self.y < 0:
            self.y = 0
        # no clamp at the bottom: falling off the screen is the loss condition

    def flap(self, impulse: float = FLAP_IMPULSE):
        # Stacks with whatever velocity we already have
        self.velocity = round(self.velocity + impulse, VELOCITY_DIGITS)

    def render(self, ctx):
        ctx.set(0, self.y, COLOR_YELLOW, COLOR_BLACK, PLAYER_GLYPH)
