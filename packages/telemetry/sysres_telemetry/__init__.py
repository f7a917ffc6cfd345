"""Hardware telemetry queries, typed records, and summary projections."""

from .aggregator import TelemetryAggregator
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
    SummaryView,
    TelemetrySnapshot,
    ThermalInfo,
)
from .provider import HardwareProvider, ProviderQueryError, PsutilHardwareProvider
from .summary import project_summary

__all__ = [
    "ADAPTER_MEMORY_UNAVAILABLE",
    "CoreUsage",
    "DiskInfo",
    "GraphicsInfo",
    "HardwareProvider",
    "MemoryInfo",
    "MemoryModule",
    "NetworkAdapterInfo",
    "ProcessorInfo",
    "ProviderQueryError",
    "PsutilHardwareProvider",
    "QueryResult",
    "SummaryView",
    "TelemetryAggregator",
    "TelemetrySnapshot",
    "ThermalInfo",
    "project_summary",
]
