"""Typed telemetry records and their zero values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

ADAPTER_MEMORY_UNAVAILABLE = "Not Available"

T = TypeVar("T")


@dataclass(frozen=True)
class ProcessorInfo:
    name: str = ""
    manufacturer: str = ""
    physical_cores: int = 0
    logical_processors: int = 0
    max_clock_mhz: int = 0
    current_clock_mhz: int = 0
    processor_id: str = ""
    l2_cache_kb: int = 0
    l3_cache_kb: int = 0
    architecture: str = ""
    processor_type: str = ""
    status: str = ""


@dataclass(frozen=True)
class GraphicsInfo:
    name: str = ""
    adapter_memory: int | str = ADAPTER_MEMORY_UNAVAILABLE
    driver_version: str = ""
    video_processor: str = ""


@dataclass(frozen=True)
class MemoryModule:
    capacity: int = 0
    manufacturer: str = ""
    speed: int = 0
    part_number: str = ""


@dataclass(frozen=True)
class MemoryInfo:
    total_capacity: int = 0
    modules: tuple[MemoryModule, ...] = ()


@dataclass(frozen=True)
class DiskInfo:
    model: str = ""
    interface_type: str = ""
    size: int = 0
    media_type: str = ""


@dataclass(frozen=True)
class NetworkAdapterInfo:
    name: str = ""
    mac_address: str = ""
    link_speed: int = 0


@dataclass(frozen=True)
class ThermalInfo:
    has_reading: bool = False
    temperature: float = 0.0


@dataclass(frozen=True)
class CoreUsage:
    index: int = 0
    percent: float = 0.0


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Outcome of one domain query.

    ``ok`` is False only when the provider call itself failed; an empty but
    successful query still reports ``ok=True`` with a zero-value ``value``.
    """

    value: T
    ok: bool = True
    error: str | None = None


@dataclass(frozen=True)
class TelemetrySnapshot:
    processor: QueryResult[ProcessorInfo]
    graphics: QueryResult[GraphicsInfo]
    memory: QueryResult[MemoryInfo]
    disks: QueryResult[tuple[DiskInfo, ...]]
    network: QueryResult[tuple[NetworkAdapterInfo, ...]]
    thermal: QueryResult[ThermalInfo]


@dataclass(frozen=True)
class ProcessorSummary:
    name: str
    core_count: int
    logical_count: int


@dataclass(frozen=True)
class GraphicsSummary:
    name: str
    adapter_memory: int | str


@dataclass(frozen=True)
class MemorySummary:
    total_capacity: int
    module_count: int


@dataclass(frozen=True)
class DiskSummary:
    model: str
    size: int


@dataclass(frozen=True)
class NetworkSummary:
    name: str
    link_speed: int


@dataclass(frozen=True)
class ThermalSummary:
    has_reading: bool
    temperature: float


@dataclass(frozen=True)
class SummaryView:
    processor: ProcessorSummary
    graphics: GraphicsSummary
    memory: MemorySummary
    disks: tuple[DiskSummary, ...] = field(default_factory=tuple)
    network: tuple[NetworkSummary, ...] = field(default_factory=tuple)
    thermal: ThermalSummary = field(default_factory=lambda: ThermalSummary(False, 0.0))
