# /experiments/sanity_rollout.py
"""
Sanity rollouts for FlappyEnv: random and/or heuristic flapping over fixed seeds.
One CSV row per episode, optional .npy action traces for experiments.replay.

Usage examples (from repo root):
  python -m experiments.sanity_rollout --save-traces
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333
  python -m experiments.sanity_rollout --policies random --no-obstacles --out-dir /tmp/sanity
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import Callable, Dict, List, Tuple

import numpy as np

from src.env.flappy_env import FlappyEnv

Policy = Callable[[np.ndarray], int]

CSV_FIELDS = ["policy", "seed", "obstacles", "steps", "return", "score",
              "terminated", "truncated", "death_cause", "flap_ratio"]


def random_policy(seed: int, flap_prob: float = 0.15) -> Policy:
    rng = np.random.RandomState(10_000 + seed)
    return lambda _obs: int(rng.rand() < flap_prob)

def heuristic_policy(_seed: int) -> Policy:
    """Flap when below the middle of the next gap and not already rising."""
    def act(obs: np.ndarray) -> int:
        y, vel, _dx, gap_top, gap_bot = obs
        return int(y > 0.5 * (gap_top + gap_bot) and vel >= 0.0)
    return act

POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": random_policy,
    "heuristic": heuristic_policy,
}


def run_episode(policy_name: str, seed: int, obstacles: bool, steps_limit: int) -> Tuple[Dict, List[int]]:
    policy = POLICIES[policy_name](seed)
    env = FlappyEnv(obstacles=obstacles, time_limit_steps=steps_limit)
    actions: List[int] = []
    ret = 0.0
    term = trunc = False
    try:
        obs, info = env.reset(seed=seed)
        while not (term or trunc):
            a = policy(obs)
            actions.append(a)
            obs, r, term, trunc, info = env.step(a)
            ret += r
    finally:
        env.close()

    row = {
        "policy": policy_name,
        "seed": seed,
        "obstacles": int(obstacles),
        "steps": len(actions),
        "return": f"{ret:.1f}",
        "score": info["score"],
        "terminated": int(term),
        "truncated": int(trunc),
        "death_cause": info.get("death_cause") or "",
        "flap_ratio": f"{sum(actions) / max(1, len(actions)):.3f}",
    }
    return row, actions


def save_trace(out_dir: Path, row: Dict, actions: List[int]):
    trace_dir = out_dir / "traces" / row["policy"]
    trace_dir.mkdir(parents=True, exist_ok=True)
    np.save(trace_dir / f"{row['seed']}_actions.npy", np.asarray(actions, dtype=np.int8))
    # read back by experiments.replay to pick the right game variant
    (trace_dir / f"{row['seed']}_meta.txt").write_text(
        f"seed={row['seed']}\nobstacles={row['obstacles']}\npolicy={row['policy']}\n",
        encoding="utf-8")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", default="both", choices=["random", "heuristic", "both"])
    ap.add_argument("--seeds", default="", help="Comma-separated seeds (default 101..120)")
    ap.add_argument("--no-obstacles", action="store_true", help="Run the free-fall variant")
    ap.add_argument("--steps", type=int, default=2000, help="Step cap per episode")
    ap.add_argument("--out-dir", default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true", help="Save action sequences for replay")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    obstacles = not args.no_obstacles
    seeds = [int(s) for s in args.seeds.split(",") if s.strip()] or list(range(101, 121))
    policies = list(POLICIES) if args.policies == "both" else [args.policies]

    csv_path = out_dir / "episodes.csv"
    new_file = not csv_path.exists()
    print(f"Running {policies} on {len(seeds)} seeds (obstacles={obstacles}) -> {csv_path}")

    with csv_path.open("a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        if new_file:
            writer.writeheader()
        for policy_name in policies:
            for seed in seeds:
                row, actions = run_episode(policy_name, seed, obstacles, args.steps)
                writer.writerow(row)
                if args.save_traces:
                    save_trace(out_dir, row, actions)
                print(f"[{policy_name}] seed={seed}  len={row['steps']}  score={row['score']}  "
                      f"ret={row['return']}  cause={row['death_cause'] or '-'}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
