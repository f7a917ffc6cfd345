"""Per-domain telemetry queries normalized into typed records."""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, TypeVar

from .models import (
    ADAPTER_MEMORY_UNAVAILABLE,
    CoreUsage,
    DiskInfo,
    GraphicsInfo,
    MemoryInfo,
    MemoryModule,
    NetworkAdapterInfo,
    ProcessorInfo,
    QueryResult,
    TelemetrySnapshot,
    ThermalInfo,
)
from .provider import THERMAL_NAMESPACE, HardwareProvider, Record

_log = logging.getLogger("sysres.telemetry")

T = TypeVar("T")

_GIB = 1024**3
_MIB = 1024 * 1024


def _as_int(raw: Record, key: str) -> int:
    value = raw.get(key)
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError):
        try:
            number = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0
    return max(0, number)


def _as_float(raw: Record, key: str) -> float | None:
    value = raw.get(key)
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _as_str(raw: Record, key: str) -> str:
    value = raw.get(key)
    return "" if value is None else str(value).strip()


def _adapter_memory_mb(raw: Record) -> int | str:
    value = raw.get("AdapterRAM")
    if value is None or isinstance(value, bool):
        return ADAPTER_MEMORY_UNAVAILABLE
    try:
        ram = int(str(value).strip())
    except ValueError:
        return ADAPTER_MEMORY_UNAVAILABLE
    if ram < 0:
        return ADAPTER_MEMORY_UNAVAILABLE
    return ram // _MIB


def map_processor(raw: Record) -> ProcessorInfo:
    physical = _as_int(raw, "NumberOfCores")
    return ProcessorInfo(
        name=_as_str(raw, "Name"),
        manufacturer=_as_str(raw, "Manufacturer"),
        physical_cores=physical,
        logical_processors=max(physical, _as_int(raw, "NumberOfLogicalProcessors")),
        max_clock_mhz=_as_int(raw, "MaxClockSpeed"),
        current_clock_mhz=_as_int(raw, "CurrentClockSpeed"),
        processor_id=_as_str(raw, "ProcessorId"),
        l2_cache_kb=_as_int(raw, "L2CacheSize"),
        l3_cache_kb=_as_int(raw, "L3CacheSize"),
        architecture=_as_str(raw, "Architecture"),
        processor_type=_as_str(raw, "ProcessorType"),
        status=_as_str(raw, "Status"),
    )


def map_graphics(raw: Record) -> GraphicsInfo:
    return GraphicsInfo(
        name=_as_str(raw, "Name"),
        adapter_memory=_adapter_memory_mb(raw),
        driver_version=_as_str(raw, "DriverVersion"),
        video_processor=_as_str(raw, "VideoProcessor"),
    )


def map_memory(rows: list[Record]) -> MemoryInfo:
    modules = tuple(
        MemoryModule(
            capacity=_as_int(row, "Capacity") // _GIB,
            manufacturer=_as_str(row, "Manufacturer"),
            speed=_as_int(row, "Speed"),
            part_number=_as_str(row, "PartNumber"),
        )
        for row in rows
    )
    return MemoryInfo(total_capacity=sum(m.capacity for m in modules), modules=modules)


def map_disk(raw: Record) -> DiskInfo:
    return DiskInfo(
        model=_as_str(raw, "Model"),
        interface_type=_as_str(raw, "InterfaceType"),
        size=_as_int(raw, "Size"),
        media_type=_as_str(raw, "MediaType"),
    )


def map_network(raw: Record) -> NetworkAdapterInfo:
    return NetworkAdapterInfo(
        name=_as_str(raw, "Name"),
        mac_address=_as_str(raw, "MACAddress"),
        link_speed=_as_int(raw, "Speed"),
    )


def map_thermal(rows: list[Record]) -> ThermalInfo:
    for row in rows:
        temp = _as_float(row, "CurrentTemperature")
        if temp is not None:
            return ThermalInfo(has_reading=True, temperature=temp)
    return ThermalInfo()


class TelemetryAggregator:
    """Queries each hardware domain in isolation.

    A provider failure in one domain yields that domain's zero-value record
    with ``ok=False`` and never affects the other domains.
    """

    def __init__(self, provider: HardwareProvider, thermal_namespace: str = THERMAL_NAMESPACE) -> None:
        self._provider = provider
        self._thermal_namespace = thermal_namespace

    def _query(self, domain: str, fetch: Callable[[], list[Record]], build: Callable[[list[Record]], T], zero: T) -> QueryResult[T]:
        try:
            rows = fetch()
            value = build(list(rows or []))
        except Exception as exc:
            _log.warning(
                f"{domain} query failed: {exc}",
                extra={"event": "telemetry_query_failed", "domain": domain},
            )
            return QueryResult(value=zero, ok=False, error=str(exc) or type(exc).__name__)
        return QueryResult(value=value)

    def processor(self) -> QueryResult[ProcessorInfo]:
        return self._query(
            "processor",
            self._provider.processors,
            lambda rows: map_processor(rows[0]) if rows else ProcessorInfo(),
            ProcessorInfo(),
        )

    def graphics(self) -> QueryResult[GraphicsInfo]:
        return self._query(
            "graphics",
            self._provider.video_controllers,
            lambda rows: map_graphics(rows[0]) if rows else GraphicsInfo(),
            GraphicsInfo(),
        )

    def memory(self) -> QueryResult[MemoryInfo]:
        return self._query("memory", self._provider.memory_modules, map_memory, MemoryInfo())

    def disks(self) -> QueryResult[tuple[DiskInfo, ...]]:
        return self._query(
            "disk",
            self._provider.disk_drives,
            lambda rows: tuple(map_disk(r) for r in rows),
            (),
        )

    def network(self) -> QueryResult[tuple[NetworkAdapterInfo, ...]]:
        return self._query(
            "network",
            self._provider.network_adapters,
            lambda rows: tuple(map_network(r) for r in rows if _enabled(r)),
            (),
        )

    def thermal(self) -> QueryResult[ThermalInfo]:
        return self._query(
            "thermal",
            lambda: self._provider.thermal_zones(self._thermal_namespace),
            map_thermal,
            ThermalInfo(),
        )

    def core_usage(self) -> QueryResult[tuple[CoreUsage, ...]]:
        def build(rows: list[Record]) -> tuple[CoreUsage, ...]:
            return tuple(
                CoreUsage(index=i, percent=_as_float(row, "PercentProcessorTime") or 0.0) for i, row in enumerate(rows)
            )

        return self._query("core_usage", self._provider.core_usage, build, ())

    def snapshot(self) -> TelemetrySnapshot:
        return TelemetrySnapshot(
            processor=self.processor(),
            graphics=self.graphics(),
            memory=self.memory(),
            disks=self.disks(),
            network=self.network(),
            thermal=self.thermal(),
        )


def _enabled(raw: Record) -> bool:
    value: Any = raw.get("NetEnabled")
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)
