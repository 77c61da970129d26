"""
Engine throughput: checked vs unchecked, batch vs streaming.

Dataset: two float32 clusters (1000.0 and 2000.0) on a period of 4000,
consumed lazily through itertools.chain so no engine sees a materialised
list.

    python benchmarks/bench_engine.py [samples_per_cluster] [repeats]
"""

import sys
import timeit
from itertools import chain, repeat
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from circadian.engine import (
    circular_mean,
    circular_mean_unchecked,
    running_circular_mean,
    running_circular_mean_unchecked,
)

PERIOD = 4000.0


def dataset(n: int):
    return chain(repeat(np.float32(1000.0), n), repeat(np.float32(2000.0), n))


ENGINES = {
    "batch (checked)": circular_mean,
    "batch (unchecked)": circular_mean_unchecked,
    "streaming (checked)": running_circular_mean,
    "streaming (unchecked)": running_circular_mean_unchecked,
}


def main(n: int, repeats: int) -> None:
    print(f"{2 * n:,} float32 samples, period {PERIOD:g}, best of {repeats}")
    print("-" * 58)
    for name, engine in ENGINES.items():
        timer = timeit.Timer(lambda: engine(PERIOD, dataset(n), dtype=np.float32))
        best = min(timer.repeat(repeat=repeats, number=1))
        mean, confidence = engine(PERIOD, dataset(n), dtype=np.float32)
        print(
            f"  {name:22s} : {best * 1000:9.1f} ms"
            f"  (mean={mean:.2f}, confidence={confidence:.4f})"
        )


if __name__ == "__main__":
    n = int(sys.argv[1]) if len(sys.argv) > 1 else 100_000
    repeats = int(sys.argv[2]) if len(sys.argv) > 2 else 3
    main(n, repeats)
