"""python benchmarks/bench_organizer.py"""

import json
import time
from pathlib import Path

import numpy as np
from tqdm import tqdm

from utils import make_registry

from shardnet import NetworkOrganizer

SIZES = [1_000, 10_000, 100_000]
REPEATS = 5
NUM_SHARDS = 32
BASE = Path(__file__).resolve().parent / "output" / "organizer"


def bench(label, fn, n):
    times = []
    for _ in tqdm(range(REPEATS), desc=f"  {label}", leave=False):
        t0 = time.perf_counter()
        fn()
        times.append(time.perf_counter() - t0)
    elapsed = float(np.median(times))
    print(f"  {label:40s} | {elapsed:8.4f}s | {n / elapsed:>12,.0f} nodes/s")
    return {"time": elapsed, "throughput": n / elapsed}


def main():
    BASE.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(9176)
    results = {}

    print(f"\n{'=' * 75}")
    print(f" organizer benchmark — {REPEATS} repeats, {NUM_SHARDS} shards + {NUM_SHARDS} backups")
    print(f"{'=' * 75}")
    print(f"  {'Case':40s} | {'Median':>9s} | {'Throughput':>18s}")
    print(f"  {'-' * 40}-+-{'-' * 9}-+-{'-' * 18}")

    for n in SIZES:
        nodes = make_registry(rng, n)
        results[f"explicit_{n}"] = bench(
            f"explicit subnet, {n:,} nodes",
            lambda: NetworkOrganizer(nodes, "10.20.0.0/16").assign(NUM_SHARDS),
            n,
        )
        # inference only sees the in-subnet address of each node
        single = [node.addresses[:1] for node in nodes]
        results[f"inferred_{n}"] = bench(
            f"inferred subnet, {n:,} nodes",
            lambda: NetworkOrganizer(single).assign(NUM_SHARDS),
            n,
        )

    with open(BASE / "results.json", "w") as f:
        json.dump(results, f, indent=2)
    print(f"\n  Saved to {BASE / 'results.json'}")


if __name__ == "__main__":
    main()
