"""Per-worker score calculation and batch aggregation."""

from __future__ import annotations

import math
from typing import Iterable

from .models import BenchmarkBatch, BenchmarkReport

_SCALE = 10000.0
_RAW_DIVISOR = 1000.0


def score(raw_result: float, elapsed_ms: float) -> int:
    """Integer score for one worker; smaller accumulators and faster batches score higher."""
    base = _SCALE / (1.0 + abs(raw_result) / _RAW_DIVISOR)
    time_bonus = _SCALE / (max(0.0, elapsed_ms) + 1.0)
    return max(0, math.floor(base + time_bonus))


def aggregate(scores: Iterable[int]) -> int:
    return sum(int(s) for s in scores)


def score_batch(batch: BenchmarkBatch) -> BenchmarkReport:
    scores = tuple(score(r.raw_score, r.elapsed_ms) for r in batch.results)
    return BenchmarkReport(batch=batch, scores=scores, total_score=aggregate(scores))
