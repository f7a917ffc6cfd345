"""Synthetic multi-core CPU benchmark and scoring."""

from .engine import BenchmarkEngine, BenchmarkError, logical_processor_count, run_benchmark
from .models import BenchmarkBatch, BenchmarkReport, BenchmarkResult, Presenter
from .scoring import aggregate, score, score_batch
from .workload import DEFAULT_ITERATIONS, run_workload

__all__ = [
    "BenchmarkBatch",
    "BenchmarkEngine",
    "BenchmarkError",
    "BenchmarkReport",
    "BenchmarkResult",
    "DEFAULT_ITERATIONS",
    "Presenter",
    "aggregate",
    "logical_processor_count",
    "run_benchmark",
    "run_workload",
    "score",
    "score_batch",
]
