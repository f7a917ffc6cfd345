"""CLI entrypoints for hardware telemetry, core monitoring, and the CPU benchmark."""

from __future__ import annotations

import argparse
import json
import time
from dataclasses import asdict
from pathlib import Path
from typing import Any

from sysres_benchmark import BenchmarkEngine, BenchmarkError, run_benchmark
from sysres_core import AppConfig, load_config, save_config
from sysres_core.config import clamp_interval_ms, config_path
from sysres_core.logging_setup import configure_logging, get_logger, install_excepthook
from sysres_telemetry import PsutilHardwareProvider, QueryResult, TelemetryAggregator, project_summary

from .presenter import ConsolePresenter


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def _result_payload(result: QueryResult[Any]) -> dict[str, Any]:
    value = result.value
    if isinstance(value, tuple):
        body: Any = [asdict(v) for v in value]
    else:
        body = asdict(value)
    payload: dict[str, Any] = {"ok": result.ok, "data": body}
    if result.error:
        payload["error"] = result.error
    return payload


def _load(args: argparse.Namespace) -> AppConfig:
    return load_config(Path(args.config).expanduser() if getattr(args, "config", None) else None)


def _aggregator(cfg: AppConfig) -> TelemetryAggregator:
    return TelemetryAggregator(PsutilHardwareProvider(), thermal_namespace=cfg.telemetry.thermal_namespace)


_DOMAINS = {
    "cpu": "processor",
    "gpu": "graphics",
    "memory": "memory",
    "disk": "disks",
    "network": "network",
    "thermal": "thermal",
}


def cmd_domain(args: argparse.Namespace) -> int:
    agg = _aggregator(_load(args))
    result = getattr(agg, _DOMAINS[args.command])()
    _print_json(_result_payload(result))
    return 0


def cmd_all(args: argparse.Namespace) -> int:
    snap = _aggregator(_load(args)).snapshot()
    _print_json(
        {
            "processor": _result_payload(snap.processor),
            "graphics": _result_payload(snap.graphics),
            "memory": _result_payload(snap.memory),
            "disks": _result_payload(snap.disks),
            "network": _result_payload(snap.network),
            "thermal": _result_payload(snap.thermal),
        }
    )
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    snap = _aggregator(_load(args)).snapshot()
    _print_json(asdict(project_summary(snap)))
    return 0


def cmd_cpu_monitor(args: argparse.Namespace) -> int:
    cfg = _load(args)
    agg = _aggregator(cfg)
    interval_ms = clamp_interval_ms(cfg.monitor.interval_ms if args.interval_ms is None else args.interval_ms)
    # The first psutil sample only primes the counters.
    agg.core_usage()
    taken = 0
    try:
        while args.samples <= 0 or taken < args.samples:
            time.sleep(interval_ms / 1000.0)
            result = agg.core_usage()
            taken += 1
            print(
                json.dumps(
                    {
                        "sample": taken,
                        "ok": result.ok,
                        "cores": [{"thread": c.index, "percent": round(c.percent, 2)} for c in result.value],
                    },
                    sort_keys=True,
                ),
                flush=True,
            )
    except KeyboardInterrupt:
        pass
    return 0


def cmd_benchmark(args: argparse.Namespace) -> int:
    cfg = _load(args)
    iterations = cfg.benchmark.iterations if args.iterations is None else args.iterations
    workers = args.workers if args.workers is not None else (cfg.benchmark.workers or None)
    engine = BenchmarkEngine(
        iterations=iterations,
        executor=args.executor or cfg.benchmark.executor,
        presenter=ConsolePresenter(),
    )
    try:
        report = run_benchmark(engine, worker_count=workers)
    except BenchmarkError as exc:
        _print_json({"success": False, "error": str(exc)})
        return 2

    _print_json(
        {
            "success": True,
            "workers": report.batch.worker_count,
            "iterations": report.batch.iterations,
            "elapsed_ms": report.batch.elapsed_ms,
            "scores": list(report.scores),
            "total_score": report.total_score,
        }
    )
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    cfg = _load(args)
    payload: dict[str, Any] = {"config": asdict(cfg)}
    if args.init:
        target = Path(args.config).expanduser() if args.config else config_path()
        payload["written"] = str(save_config(cfg, target))
    _print_json(payload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sysres", description="System resources telemetry and CPU benchmark")
    parser.add_argument("--config", default=None, help="Optional path to a config.json")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, label in (
        ("cpu", "Detailed processor info"),
        ("gpu", "Graphics adapter info"),
        ("memory", "Installed memory"),
        ("disk", "Disk drives"),
        ("network", "Enabled network adapters"),
        ("thermal", "Thermal zone reading"),
    ):
        cmd = sub.add_parser(name, help=label)
        cmd.set_defaults(func=cmd_domain)

    all_cmd = sub.add_parser("all", help="Every hardware domain")
    all_cmd.set_defaults(func=cmd_all)

    summary_cmd = sub.add_parser("summary", help="Condensed overview")
    summary_cmd.set_defaults(func=cmd_summary)

    mon_cmd = sub.add_parser("cpu-monitor", help="Monitor per-thread CPU usage")
    mon_cmd.add_argument("--interval-ms", type=_positive_int, default=None, help="Sampling interval, clamped to 100-5000 ms")
    mon_cmd.add_argument("--samples", type=_non_negative_int, default=0, help="Number of samples, 0 until interrupted")
    mon_cmd.set_defaults(func=cmd_cpu_monitor)

    bench_cmd = sub.add_parser("benchmark", help="Run CPU stress benchmark on every logical processor")
    bench_cmd.add_argument("--iterations", type=_positive_int, default=None)
    bench_cmd.add_argument("--workers", type=_positive_int, default=None, help="Worker count, default all logical processors")
    bench_cmd.add_argument("--executor", choices=["process", "thread"], default=None)
    bench_cmd.set_defaults(func=cmd_benchmark)

    config_cmd = sub.add_parser("config", help="Show effective configuration")
    config_cmd.add_argument("--init", action="store_true", help="Write the effective configuration to disk")
    config_cmd.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = _load(args)
    configure_logging(cfg.logging)
    install_excepthook()
    get_logger().info(f"command {args.command}", extra={"event": "command_start"})
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
