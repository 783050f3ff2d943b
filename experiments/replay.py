# experiments/replay.py
"""
Replay tool for FlappyEnv — quick command cheat sheet

# Typical usage (run from REPO ROOT so `src/...` imports work)

# Replay a HEURISTIC episode by seed (uses actions at experiments/runs/traces/heuristic/<seed>_actions.npy)
python -m experiments.replay --policy heuristic --seed 105

# Replay by pointing directly to a specific actions file (bypasses --policy/--seed lookup)
python -m experiments.replay --trace experiments/runs/traces/random/112_actions.npy

# Controls during replay
SPACE = pause/resume
N     = single step (when paused)
R     = restart episode
ESC   = quit

# Notes
- Deterministic: same seed, same variant and same action sequence replay the original run.
- With --trace the meta sidecar is not read; pass --no-obstacles for free-fall traces.
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Optional

import numpy as np
import pygame

from src.env.flappy_env import FlappyEnv

DEFAULT_OUT_DIR = "experiments/runs"


def _find_trace(out_dir: Path, policy: str, seed: int) -> Path:
    p = out_dir / "traces" / policy / f"{seed}_actions.npy"
    if not p.exists():
        raise FileNotFoundError(f"Trace not found: {p}")
    return p

def _read_meta(out_dir: Path, policy: str, seed: int) -> dict:
    meta_path = out_dir / "traces" / policy / f"{seed}_meta.txt"
    meta = {}
    if meta_path.exists():
        for line in meta_path.read_text(encoding="utf-8").splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                meta[k.strip()] = v.strip()
    return meta

def _draw_overlay(env: FlappyEnv, step_idx: int, action: Optional[int], paused: bool):
    # Bottom rows of the env's own window console
    win = env.window
    if win is None or env.state is None:
        return
    act = "NOOP" if action == 0 else ("FLAP" if action == 1 else "-")
    win.print(0, win.height - 2, f"Step={step_idx}  Action={act}  Score={env.state.score}"
                                 f"  Cause={env.death_cause or '-'}")
    win.print(0, win.height - 1, "PAUSED  N=step R=restart ESC=quit" if paused
                                 else "SPACE=pause R=restart ESC=quit")
    win.present()

def replay_episode(seed: int, actions: np.ndarray, obstacles: bool = True):
    """Replays an episode deterministically with an on-screen status line."""
    env = FlappyEnv(render_mode="human", obstacles=obstacles, time_limit_steps=None)
    env.reset(seed=seed)
    env.render()

    paused = False
    single = False
    step_idx = 0
    action: Optional[int] = None
    clock = pygame.time.Clock()

    try:
        running = True
        while running and step_idx < len(actions):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_n and paused:
                        single = True
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step_idx = 0
                        paused = False

            if paused and not single:
                env.render()
                _draw_overlay(env, step_idx, action=None, paused=True)
                clock.tick(30)
                continue
            single = False

            action = int(actions[step_idx])
            obs, r, term, trunc, info = env.step(action)
            _draw_overlay(env, step_idx, action, paused)
            step_idx += 1

            if term or trunc:
                # Final frame is already drawn; wait a moment
                pygame.time.delay(600)
                break
    finally:
        env.close()

def main():
    ap = argparse.ArgumentParser(description="Replay a recorded FlappyEnv episode.")
    ap.add_argument("--seed", type=int, help="Episode seed")
    ap.add_argument("--policy", type=str, default="random",
                    help="Trace subfolder name, e.g. random / heuristic")
    ap.add_argument("--trace", type=str, default="",
                    help="Optional explicit path to a .npy action file")
    ap.add_argument("--out-dir", type=str, default=DEFAULT_OUT_DIR,
                    help="Base directory where experiments/runs live")
    ap.add_argument("--no-obstacles", action="store_true",
                    help="Trace was recorded on the free-fall variant")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    obstacles = not args.no_obstacles

    if args.trace:
        trace_path = Path(args.trace)
        if not trace_path.exists():
            raise FileNotFoundError(f"Trace file not found: {trace_path}")
        if args.seed is None:
            stem = trace_path.stem.split("_")[0]
            if not stem.lstrip("-").isdigit():
                raise SystemExit(f"Cannot infer seed from {trace_path.name}; pass --seed")
            args.seed = int(stem)
    else:
        if args.seed is None:
            raise SystemExit("Please provide --seed or --trace")
        trace_path = _find_trace(out_dir, args.policy, args.seed)
        meta = _read_meta(out_dir, args.policy, args.seed)
        if "obstacles" in meta:
            obstacles = meta["obstacles"] == "1"

    actions = np.load(trace_path)
    if actions.ndim != 1:
        raise ValueError(f"Expected 1D action array, got shape {actions.shape}")

    print(f"Replaying seed={args.seed}  policy={args.policy}  steps={len(actions)}  obstacles={obstacles}")
    print("Controls: SPACE pause/resume | N step (when paused) | R restart | ESC quit")

    replay_episode(seed=args.seed, actions=actions, obstacles=obstacles)

if __name__ == "__main__":
    main()
