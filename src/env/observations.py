# src/env/observations.py
from __future__ import annotations
import numpy as np

from src.game.config import FLAP_IMPULSE

OBS_SIZE = 5
VEL_SCALE = 2.0 * abs(FLAP_IMPULSE)   # two stacked flaps map to -1

OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0], dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def build_observation(state) -> np.ndarray:
    """
    Compact observation for an agent, shape (5,), float32:
      [y_norm, vel_norm, dx_norm, gap_top_norm, gap_bottom_norm]
    - y_norm       : player row / screen height, clipped to [0,1]
    - vel_norm     : velocity / VEL_SCALE, clipped to [-1,1] (negative = rising)
    - dx_norm      : columns until the wall / screen width (1.0 if no wall)
    - gap_top/bot  : half-open gap bounds / screen height (0 and 1 if no wall)
    """
    player = state.player
    width = state.config.screen_width
    height = state.config.screen_height

    y_norm = _clamp(player.y / height, 0.0, 1.0)
    vel_norm = _clamp(player.velocity / VEL_SCALE, -1.0, 1.0)

    obstacle = state.obstacle
    if obstacle is None:
        dx_norm, gap_top, gap_bottom = 1.0, 0.0, 1.0
    else:
        top, bottom = obstacle.gap_bounds()
        dx_norm = _clamp((obstacle.x - player.x) / width, 0.0, 1.0)
        gap_top = _clamp(top / height, 0.0, 1.0)
        gap_bottom = _clamp(bottom / height, 0.0, 1.0)

    return np.array([y_norm, vel_norm, dx_norm, gap_top, gap_bottom], dtype=np.float32)
