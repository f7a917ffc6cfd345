"""Condensed per-domain projections for the overview screen."""

from __future__ import annotations

from .models import (
    DiskInfo,
    DiskSummary,
    GraphicsInfo,
    GraphicsSummary,
    MemoryInfo,
    MemorySummary,
    NetworkAdapterInfo,
    NetworkSummary,
    ProcessorInfo,
    ProcessorSummary,
    SummaryView,
    TelemetrySnapshot,
    ThermalInfo,
    ThermalSummary,
)


def summarize_processor(info: ProcessorInfo) -> ProcessorSummary:
    return ProcessorSummary(name=info.name, core_count=info.physical_cores, logical_count=info.logical_processors)


def summarize_graphics(info: GraphicsInfo) -> GraphicsSummary:
    return GraphicsSummary(name=info.name, adapter_memory=info.adapter_memory)


def summarize_memory(info: MemoryInfo) -> MemorySummary:
    return MemorySummary(total_capacity=info.total_capacity, module_count=len(info.modules))


def summarize_disk(info: DiskInfo) -> DiskSummary:
    return DiskSummary(model=info.model, size=info.size)


def summarize_network(info: NetworkAdapterInfo) -> NetworkSummary:
    return NetworkSummary(name=info.name, link_speed=info.link_speed)


def summarize_thermal(info: ThermalInfo) -> ThermalSummary:
    return ThermalSummary(has_reading=info.has_reading, temperature=info.temperature)


def project_summary(snapshot: TelemetrySnapshot) -> SummaryView:
    """Reduce a full snapshot to names and counts; failed domains project their zero values."""
    return SummaryView(
        processor=summarize_processor(snapshot.processor.value),
        graphics=summarize_graphics(snapshot.graphics.value),
        memory=summarize_memory(snapshot.memory.value),
        disks=tuple(summarize_disk(d) for d in snapshot.disks.value),
        network=tuple(summarize_network(n) for n in snapshot.network.value),
        thermal=summarize_thermal(snapshot.thermal.value),
    )
