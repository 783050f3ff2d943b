# src/tests/flappy_env_tests.py
"""
Quick tests for FlappyEnv (Gymnasium environment).

Usage (from repo root):
  python -m src.tests.flappy_env_tests
  python -m src.tests.flappy_env_tests --render
  python -m src.tests.flappy_env_tests --no-api-check --no-determinism
(pytest also collects the test_* wrappers at the bottom.)
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from src.env.flappy_env import FlappyEnv


def api_check() -> None:
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = FlappyEnv()
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()
    print("✓ API check ok")


def smoke_test(steps: int, seed: int, obstacles: bool = True) -> None:
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = FlappyEnv(obstacles=obstacles)
    try:
        obs, info = env.reset(seed=seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["seed"] == seed

        for t in range(steps):
            a = int(env.action_space.sample())
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term:
                assert r == -1.0, "Death must cost -1"
                assert info["death_cause"] in ("wall", "fall")
                if not obstacles:
                    assert info["death_cause"] == "fall"
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Smoke test ok")


def determinism_test(steps: int, seed: int) -> None:
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlappyEnv()
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            obs, _ = env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    # Fixed action sequence using a local RNG (not numpy global)
    rng = np.random.RandomState(42)
    action_seq = [int(rng.rand() < 0.15) for _ in range(steps)]

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        if not np.allclose(o1, o2):
            raise AssertionError(f"Determinism: obs mismatch at step {i}")
        if not (r1 == r2 and te1 == te2 and tr1 == tr2):
            raise AssertionError(f"Determinism: transition mismatch at step {i}")

    print("✓ Determinism ok")


def noop_falls_test(seed: int) -> None:
    """Never flapping: one column per step, dead by falling before the first wall."""
    env = FlappyEnv()
    try:
        env.reset(seed=seed)
        for t in range(1, 100):
            obs, r, term, trunc, info = env.step(0)
            assert info["distance"] == t, "one env step must be one simulation step"
            if term:
                break
        assert term and info["death_cause"] == "fall" and info["score"] == 0
    finally:
        env.close()
    print("✓ No-op fall ok")


def truncation_test() -> None:
    env = FlappyEnv(obstacles=False, time_limit_steps=5)
    try:
        env.reset(seed=0)
        flags = [env.step(0)[3] for _ in range(5)]
        assert flags == [False] * 4 + [True], f"Truncation flags {flags}"
    finally:
        env.close()
    print("✓ Truncation ok")


def render_demo(steps: int, seed: int) -> None:
    """Open a window and run a short flap-every-few-steps demo to verify visually."""
    env = FlappyEnv(render_mode="human")
    try:
        obs, info = env.reset(seed=seed)
        for t in range(steps):
            obs, r, term, trunc, info = env.step(1 if t % 4 == 0 else 0)
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Render demo finished")


# ------------------------ pytest entry points ------------------------

def test_api():
    api_check()

def test_smoke():
    smoke_test(steps=300, seed=123)
    smoke_test(steps=300, seed=123, obstacles=False)

def test_determinism():
    determinism_test(steps=300, seed=123)

def test_noop_falls():
    noop_falls_test(seed=5)

def test_truncation():
    truncation_test()

def test_rgb_array_render():
    env = FlappyEnv(render_mode="rgb_array")
    try:
        env.reset(seed=1)
        env.step(0)
        frame = env.render()
        assert frame.ndim == 3 and frame.shape[2] == 3 and frame.dtype == np.uint8
    finally:
        env.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=123, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=300, help="Max steps per test")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    ap.add_argument("--no-api-check", action="store_true", help="Skip Gym API compliance check")
    ap.add_argument("--no-smoke", action="store_true", help="Skip smoke test")
    ap.add_argument("--no-determinism", action="store_true", help="Skip determinism test")
    args = ap.parse_args()

    try:
        if not args.no_api_check:
            api_check()
        if not args.no_smoke:
            smoke_test(steps=args.steps, seed=args.seed)
            smoke_test(steps=args.steps, seed=args.seed, obstacles=False)
        if not args.no_determinism:
            determinism_test(steps=args.steps, seed=args.seed)
        noop_falls_test(seed=args.seed)
        truncation_test()
        if args.render:
            render_demo(steps=min(args.steps, 600), seed=args.seed)
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"✗ Unexpected error: {e}", file=sys.stderr)
        raise
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
