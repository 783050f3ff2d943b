# src/env/quickcheck_env.py
#command is python -m src.env.quickcheck_env
from __future__ import annotations
import random
from .flappy_env import FlappyEnv

def run_once(seed=None, steps=600, flap_prob=0.15, obstacles=True):
    env = FlappyEnv(obstacles=obstacles, time_limit_steps=steps)
    obs, info = env.reset(seed=seed)
    assert obs.shape == (5,), "Obs shape must be 5"
    total_r = 0.0
    flaps = 0

    for t in range(steps):
        a = 1 if random.random() < flap_prob else 0
        if a == 1: flaps += 1
        obs, r, term, trunc, info = env.step(a)

        # --- invariants / sanity ---
        y, vel, dx, gap_top, gap_bot = obs
        assert 0.0 <= y <= 1.0, f"y out of range: {y}"
        assert -1.0 <= vel <= 1.0, f"vel out of range: {vel}"
        assert 0.0 <= dx <= 1.0, f"dx out of range: {dx}"
        assert gap_top <= gap_bot, f"gap inverted: {gap_top} > {gap_bot}"

        if t % 100 == 0:
            print(f"t={t} y={y:.2f} vel={vel:+.2f} dx={dx:.2f} gap=[{gap_top:.2f},{gap_bot:.2f})")

        total_r += r
        if term or trunc:
            print(f"[DONE] steps={info['timestep']} score={info['score']} seed={info['seed']} cause={info['death_cause']}")
            break

    env.close()
    print(f"steps={t+1} flaps={flaps} total_r={total_r:.1f}")


if __name__ == "__main__":
    # same seed -> same walls (flap pattern still comes from the global RNG)
    run_once(seed=12345)
    # fresh walls every time with seed=None
    run_once(seed=None)

    run_once(seed=12345, obstacles=False)
