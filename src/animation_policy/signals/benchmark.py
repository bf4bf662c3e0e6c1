"""Bounded synchronous micro-benchmark.

The score is a relative cost: the projected wall-clock time in milliseconds
to finish a fixed arithmetic workload. The loop checks the clock between
chunks and stops at a hard cap, so measuring never becomes a jank source;
when the cap is hit the partial timing is extrapolated to the full workload.
"""

from __future__ import annotations

import math
import time
from typing import Callable

Clock = Callable[[], float]


def run_benchmark(
    cap_ms: float,
    iterations: int = 100_000,
    chunk: int = 1_000,
    clock: Clock = time.perf_counter,
) -> float:
    """Run the reference workload under a wall-clock cap.

    Args:
        cap_ms: Hard cap on measurement time in milliseconds
        iterations: Size of the reference workload
        chunk: Iterations between clock checks
        clock: Monotonic clock returning seconds

    Returns:
        Projected milliseconds for the full workload (never negative).
    """
    cap_s = cap_ms / 1000.0
    start = clock()
    done = 0
    sink = 0.0

    while done < iterations:
        end = min(done + chunk, iterations)
        for i in range(done, end):
            sink += math.sqrt(i) * math.sin(i)
        done = end
        if clock() - start >= cap_s:
            break

    elapsed_ms = max(0.0, (clock() - start) * 1000.0)
    if done == 0:
        return elapsed_ms
    return elapsed_ms * (iterations / done)
