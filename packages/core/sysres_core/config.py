"""Persistent settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 2
MONITOR_INTERVAL_MS_MIN = 100
MONITOR_INTERVAL_MS_MAX = 5000
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class BenchmarkConfig:
    iterations: int = 100_000_000
    workers: int = 0
    executor: str = "process"


@dataclass
class MonitorConfig:
    interval_ms: int = 500


@dataclass
class TelemetryConfig:
    thermal_namespace: str = "sensors"


@dataclass
class LoggingConfig:
    keep_log_files: int = 7
    console: bool = False
    level: str = "INFO"


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "SysResControl"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "SysResControl"
    return Path.home() / ".config" / "sysres-control"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def clamp_interval_ms(value: int) -> int:
    return max(MONITOR_INTERVAL_MS_MIN, min(MONITOR_INTERVAL_MS_MAX, int(value)))


def _normalize_benchmark(cfg: AppConfig) -> None:
    cfg.benchmark.iterations = max(1000, int(cfg.benchmark.iterations))
    cfg.benchmark.workers = max(0, int(cfg.benchmark.workers))
    if cfg.benchmark.executor not in ("process", "thread"):
        cfg.benchmark.executor = "process"


def _normalize_monitor(cfg: AppConfig) -> None:
    cfg.monitor.interval_ms = clamp_interval_ms(cfg.monitor.interval_ms)


def _normalize_logging(cfg: AppConfig) -> None:
    cfg.logging.keep_log_files = max(2, int(cfg.logging.keep_log_files))
    cfg.logging.console = bool(cfg.logging.console)
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in LOG_LEVELS else "INFO"


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept the benchmark knobs at the top level.
        bench = dict(data.get("benchmark", {}) or {})
        for key in ("iterations", "workers"):
            if key in data:
                bench.setdefault(key, data.pop(key))
        data["benchmark"] = bench
        data.setdefault("logging", {})
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        benchmark=_merge(BenchmarkConfig, data.get("benchmark", {})),
        monitor=_merge(MonitorConfig, data.get("monitor", {})),
        telemetry=_merge(TelemetryConfig, data.get("telemetry", {})),
        logging=_merge(LoggingConfig, data.get("logging", {})),
    )

    _normalize_benchmark(cfg)
    _normalize_monitor(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
