# src/tests/rollout_unit.py
import tempfile
from pathlib import Path

import numpy as np

from experiments.sanity_rollout import CSV_FIELDS, run_episode, save_trace


def test_episode_row_matches_csv_fields():
    row, actions = run_episode("heuristic", seed=101, obstacles=True, steps_limit=50)
    assert list(row) == CSV_FIELDS
    assert row["steps"] == len(actions) <= 50
    assert row["terminated"] + row["truncated"] == 1

def test_random_policy_is_reproducible():
    a = run_episode("random", seed=7, obstacles=False, steps_limit=40)
    b = run_episode("random", seed=7, obstacles=False, steps_limit=40)
    assert a == b

def test_trace_written_for_replay():
    row, actions = run_episode("random", seed=3, obstacles=False, steps_limit=30)
    with tempfile.TemporaryDirectory() as tmp:
        save_trace(Path(tmp), row, actions)
        trace_dir = Path(tmp) / "traces" / "random"
        saved = np.load(trace_dir / "3_actions.npy")
        assert saved.ndim == 1 and list(saved) == actions
        meta = (trace_dir / "3_meta.txt").read_text(encoding="utf-8")
        assert "obstacles=0" in meta

def main():
    test_episode_row_matches_csv_fields()
    test_random_policy_is_reproducible()
    test_trace_written_for_replay()
    print("✓ rollout unit sanity passed")

if __name__ == "__main__":
    main()
