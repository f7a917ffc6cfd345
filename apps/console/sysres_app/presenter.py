"""Console presenter for benchmark progress events."""

from __future__ import annotations

import json
import sys
import threading
from typing import TextIO


class ConsolePresenter:
    """Writes one JSON line per benchmark event."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout
        self._lock = threading.Lock()

    def _emit(self, payload: dict) -> None:
        with self._lock:
            self._stream.write(json.dumps(payload, sort_keys=True) + "\n")
            self._stream.flush()

    def worker_completed(self, worker_id: int, raw_score: float) -> None:
        self._emit({"event": "worker_completed", "worker_id": worker_id, "raw_score": raw_score})

    def batch_completed(self, total_score: int, elapsed_ms: float) -> None:
        self._emit({"event": "batch_completed", "total_score": total_score, "elapsed_ms": round(elapsed_ms, 3)})
