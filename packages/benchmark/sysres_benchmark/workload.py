"""Deterministic CPU-bound workload run by every benchmark worker."""

from __future__ import annotations

import math

DEFAULT_ITERATIONS = 100_000_000


def run_workload(iterations: int = DEFAULT_ITERATIONS) -> float:
    # Module-level so process pools can pickle it.
    sqrt = math.sqrt
    sin = math.sin
    total = 0.0
    for i in range(iterations):
        total += sqrt(i) * sin(i)
    return total
