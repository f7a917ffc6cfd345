"""Typed benchmark records and the presenter capability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class BenchmarkResult:
    worker_id: int
    raw_score: float
    elapsed_ms: float


@dataclass(frozen=True)
class BenchmarkBatch:
    results: tuple[BenchmarkResult, ...]
    elapsed_ms: float
    iterations: int

    @property
    def worker_count(self) -> int:
        return len(self.results)


@dataclass(frozen=True)
class BenchmarkReport:
    batch: BenchmarkBatch
    scores: tuple[int, ...]
    total_score: int


class Presenter(Protocol):
    def worker_completed(self, worker_id: int, raw_score: float) -> None: ...

    def batch_completed(self, total_score: int, elapsed_ms: float) -> None: ...
