# src/game/state.py
from __future__ import annotations
import random
from enum import Enum
from typing import Optional

import pygame

from .config import GameConfig, COLOR_NAVY
from .obstacle import Obstacle
from .player import Player

KEY_PLAY = pygame.K_p
KEY_QUIT = pygame.K_q
KEY_FLAP = pygame.K_SPACE


class GameMode(Enum):
    MENU = "menu"
    PLAYING = "playing"
    END = "end"


class State:
    """
    Whole game. The host calls tick(ctx) once per rendered frame; the current
    mode decides what that frame does.

    Simulation only advances once ctx.frame_time_ms has added up to more than
    config.frame_duration, so physics runs at a fixed cadence whatever the
    render rate. Input is read every frame.
    """

    def __init__(self,
                 config: Optional[GameConfig] = None,
                 rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.player = self._fresh_player()
        self.frame_time = 0.0
        self.mode = GameMode.MENU
        self.score = 0
        self.obstacle: Optional[Obstacle] = self._fresh_obstacle()

    # --- construction helpers ---

    def _fresh_player(self) -> Player:
        return Player(self.config.start_x, self.config.start_y)

    def _fresh_obstacle(self) -> Optional[Obstacle]:
        if not self.config.obstacles:
            return None
        return Obstacle.new(self.config.screen_width, 0, self.rng)

    # --- host entry point ---

    def tick(self, ctx):
        if self.mode is GameMode.MENU:
            self.main_menu(ctx)
        elif self.mode is GameMode.END:
            self.dead(ctx)
        elif self.mode is GameMode.PLAYING:
            self.play(ctx)

    # --- modes ---

    def play(self, ctx):
        cfg = self.config
        ctx.cls_bg(COLOR_NAVY)
        ctx.print(0, 0, "Press SPACE to flap.")
        if cfg.obstacles:
            ctx.print(0, 1, f"Score: {self.score}")

        self.frame_time += ctx.frame_time_ms
        if self.frame_time > cfg.frame_duration:
            self.frame_time = 0.0
            self.player.gravity_and_move(cfg.gravity_step, cfg.max_velocity)

        if ctx.key == KEY_FLAP:
            self.player.flap(cfg.flap_impulse)

        self.player.render(ctx)

        if self.obstacle is not None:
            self.obstacle.render(ctx, self.player.x, cfg.screen_height)
            if self.player.x > self.obstacle.x:
                self.score += 1
                self.obstacle = Obstacle.new(
                    self.player.x + cfg.screen_width, self.score, self.rng
                )

        if self.player.y > cfg.screen_height or self.collided():
            self.mode = GameMode.END

    def collided(self) -> bool:
        return self.obstacle is not None and self.obstacle.hit_obstacle(self.player)

    def restart(self):
        # New run: player back at the start, timer cleared, score and wall reset
        self.player = self._fresh_player()
        self.frame_time = 0.0
        self.score = 0
        self.obstacle = self._fresh_obstacle()
        self.mode = GameMode.PLAYING

    def main_menu(self, ctx):
        ctx.cls()
        ctx.print_centered(5, "Welcome to Flappy Dragon")
        ctx.print_centered(8, "(P) Play Game")
        ctx.print_centered(9, "(Q) Quit Game")
        self._menu_keys(ctx)

    def dead(self, ctx):
        ctx.cls()
        ctx.print_centered(5, "You are dead!")
        if self.config.obstacles:
            ctx.print_centered(6, f"You earned {self.score} points")
        ctx.print_centered(8, "(P) Play Again")
        ctx.print_centered(9, "(Q) Quit Game")
        self._menu_keys(ctx)

    def _menu_keys(self, ctx):
        if ctx.key == KEY_PLAY:
            self.restart()
        elif ctx.key == KEY_QUIT:
            ctx.quitting = True
