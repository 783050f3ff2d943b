# src/env/flappy_env.py
from __future__ import annotations
import random
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
import pygame

from src.game.config import GameConfig, CELL_W, CELL_H, TITLE
from src.game.console import Console, PygameConsole
from src.game.state import State, GameMode, KEY_FLAP
from src.env.observations import build_observation, OBS_SIZE, OBS_LOW, OBS_HIGH


class FlappyEnv(gym.Env):
    """
    Flappy Dragon Gymnasium environment (vector observations).
    - One env step = one fixed simulation step of the game.
    - Actions: 0 = NOOP, 1 = FLAP (applied right after the step's gravity move,
      exactly like a key press in the live game).
    - Observation: shape (5,), float32, see build_observation.
    The game runs through its real tick() on a headless console.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 15}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 obstacles: bool = True,
                 time_limit_steps: Optional[int] = 2000):
        super().__init__()
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode}"
        self.render_mode = render_mode
        self.config = GameConfig(obstacles=obstacles)
        self.time_limit_steps = time_limit_steps

        # --- Gym spaces ---
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH,
                                                shape=(OBS_SIZE,), dtype=np.float32)

        # --- Runtime state ---
        self.console = Console(self.config.screen_width, self.config.screen_height)
        self.state: Optional[State] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None
        self.death_cause: Optional[str] = None   # "wall" | "fall" | None

        # Rendering
        self.window: Optional[PygameConsole] = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # With a seed the gap sequence is fully reproducible; without one we
        # still derive it from np_random so the env stays seedable as a whole.
        if seed is not None:
            game_seed = int(seed)
        else:
            game_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.current_seed = game_seed
        self.state = State(self.config, random.Random(game_seed))
        self.state.restart()

        self.timestep = 0
        self.death_cause = None

        obs = build_observation(self.state)
        info = {"seed": self.current_seed, "score": 0}
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None, "Call reset() before step()"

        score_before = self.state.score

        # Enough elapsed time to trigger exactly one simulation step
        self.console.frame_time_ms = self.config.frame_duration + 1.0
        self.console.key = KEY_FLAP if action == 1 else None
        self.state.tick(self.console)

        terminated = self.state.mode is GameMode.END
        if terminated:
            self.death_cause = "wall" if self.state.collided() else "fall"

        passed = self.state.score - score_before
        reward = -1.0 if terminated else 1.0 + 10.0 * passed

        self.timestep += 1
        truncated = False
        if (self.time_limit_steps is not None) and (self.timestep >= self.time_limit_steps):
            truncated = not terminated

        obs = build_observation(self.state)
        info = {
            "score": self.state.score,
            "timestep": self.timestep,
            "distance": self.state.player.x - self.config.start_x,
            "seed": self.current_seed,
            "death_cause": self.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return cells_to_rgb(self.console)

        if self.window is None:
            self.window = PygameConsole(self.config.screen_width, self.config.screen_height,
                                        title=f"{TITLE} — Gym Env",
                                        fps=self.metadata["render_fps"])

        # Pump the event queue so the OS doesn't think we're hung
        pygame.event.pump()
        self.window.copy_cells_from(self.console)
        self.window.present()
        self.window.clock.tick(self.metadata["render_fps"])
        return None

    def close(self):
        if self.window is not None:
            self.window.close()
            self.window = None


def cells_to_rgb(console: Console) -> np.ndarray:
    """(H, W, 3) uint8 image of a console: cell background, glyphs as a centered block."""
    img = np.zeros((console.height * CELL_H, console.width * CELL_W, 3), dtype=np.uint8)
    gx0, gx1 = CELL_W // 4, CELL_W - CELL_W // 4
    gy0, gy1 = CELL_H // 4, CELL_H - CELL_H // 4
    for y, row in enumerate(console.cells):
        for x, cell in enumerate(row):
            y0, x0 = y * CELL_H, x * CELL_W
            img[y0:y0 + CELL_H, x0:x0 + CELL_W] = cell.bg
            if cell.glyph != " ":
                img[y0 + gy0:y0 + gy1, x0 + gx0:x0 + gx1] = cell.fg
    return img
