"""Fan-out CPU stress benchmark across all logical processors."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor, as_completed

import psutil

from .models import BenchmarkBatch, BenchmarkReport, BenchmarkResult, Presenter
from .scoring import score_batch
from .workload import DEFAULT_ITERATIONS, run_workload

_log = logging.getLogger("sysres.benchmark")

EXECUTORS = ("process", "thread")


class BenchmarkError(RuntimeError):
    """A benchmark worker failed; the whole batch is discarded."""


def logical_processor_count() -> int:
    """Logical processors this process may run on, never less than one."""
    try:
        affinity = psutil.Process().cpu_affinity()
    except (AttributeError, psutil.Error, OSError):
        affinity = None
    if affinity:
        return len(affinity)
    return max(1, psutil.cpu_count(logical=True) or 1)


class BenchmarkEngine:
    def __init__(
        self,
        iterations: int = DEFAULT_ITERATIONS,
        executor: str = "process",
        presenter: Presenter | None = None,
    ) -> None:
        if iterations < 0:
            raise ValueError("iterations must be non-negative")
        if executor not in EXECUTORS:
            raise ValueError(f"unknown executor: {executor}")
        self.iterations = iterations
        self.executor = executor
        self.presenter = presenter

    def _make_executor(self, workers: int) -> Executor:
        if self.executor == "thread":
            return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sysres-bench")
        return ProcessPoolExecutor(max_workers=workers)

    def _notify(self, worker_id: int, raw_score: float) -> None:
        if self.presenter is None:
            return
        try:
            self.presenter.worker_completed(worker_id, raw_score)
        except Exception:
            _log.exception("presenter failed on worker completion", extra={"event": "presenter_error"})

    def run(self, worker_count: int | None = None) -> BenchmarkBatch:
        """Run one batch and block until every worker has finished.

        Each worker owns one slot of the result list; the batch clock spans
        submission of the first worker to completion of the last.
        """
        workers = logical_processor_count() if worker_count is None else worker_count
        if workers < 1:
            raise ValueError("worker_count must be at least 1")

        _log.info(
            f"benchmark start workers={workers} iterations={self.iterations} executor={self.executor}",
            extra={"event": "benchmark_start"},
        )
        raw: list[float | None] = [None] * workers
        start = time.perf_counter()
        with self._make_executor(workers) as pool:
            futures: dict[Future[float], int] = {
                pool.submit(run_workload, self.iterations): worker_id for worker_id in range(workers)
            }
            try:
                for fut in as_completed(futures):
                    worker_id = futures[fut]
                    raw[worker_id] = fut.result()
                    self._notify(worker_id, raw[worker_id])
            except Exception as exc:
                for pending in futures:
                    pending.cancel()
                _log.error(f"benchmark worker failed: {exc}", extra={"event": "benchmark_failed"})
                raise BenchmarkError(f"benchmark worker failed: {exc}") from exc
        elapsed_ms = max(0.0, (time.perf_counter() - start) * 1000.0)

        results = tuple(
            BenchmarkResult(worker_id=i, raw_score=float(value), elapsed_ms=elapsed_ms)
            for i, value in enumerate(raw)
            if value is not None
        )
        _log.info(f"benchmark done elapsed_ms={elapsed_ms:.1f}", extra={"event": "benchmark_done"})
        return BenchmarkBatch(results=results, elapsed_ms=elapsed_ms, iterations=self.iterations)


def run_benchmark(engine: BenchmarkEngine, worker_count: int | None = None) -> BenchmarkReport:
    """Run a batch, score it after the join, and report the total to the presenter."""
    report = score_batch(engine.run(worker_count))
    if engine.presenter is not None:
        engine.presenter.batch_completed(report.total_score, report.batch.elapsed_ms)
    return report
