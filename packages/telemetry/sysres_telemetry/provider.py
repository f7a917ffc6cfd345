"""Hardware query capability and its psutil/NVML implementation."""

from __future__ import annotations

import platform
from pathlib import Path
from typing import Any, Protocol

import psutil

Record = dict[str, Any]

THERMAL_NAMESPACE = "sensors"

# Preferred psutil sensor chips for the CPU package reading, most specific first.
_THERMAL_CHIPS = ("coretemp", "k10temp", "cpu_thermal", "acpitz")


class ProviderQueryError(RuntimeError):
    """Raised when a hardware query cannot be answered."""


class HardwareProvider(Protocol):
    def processors(self) -> list[Record]: ...

    def video_controllers(self) -> list[Record]: ...

    def memory_modules(self) -> list[Record]: ...

    def disk_drives(self) -> list[Record]: ...

    def network_adapters(self) -> list[Record]: ...

    def thermal_zones(self, namespace: str = THERMAL_NAMESPACE) -> list[Record]: ...

    def core_usage(self) -> list[Record]: ...


class _GpuAdapter:
    def video_controllers(self) -> list[Record]:
        raise ProviderQueryError("no graphics backend available")


class _NvmlGpuAdapter(_GpuAdapter):
    def __init__(self) -> None:
        import pynvml  # type: ignore

        self._nvml = pynvml
        pynvml.nvmlInit()

    def video_controllers(self) -> list[Record]:
        nvml = self._nvml
        driver = _text(nvml.nvmlSystemGetDriverVersion())
        rows: list[Record] = []
        for index in range(nvml.nvmlDeviceGetCount()):
            h = nvml.nvmlDeviceGetHandleByIndex(index)
            name = _text(nvml.nvmlDeviceGetName(h))
            try:
                adapter_ram: Any = nvml.nvmlDeviceGetMemoryInfo(h).total
            except nvml.NVMLError:
                adapter_ram = None
            rows.append(
                {
                    "Name": name,
                    "AdapterRAM": adapter_ram,
                    "DriverVersion": driver,
                    "VideoProcessor": name,
                }
            )
        return rows


def _build_gpu_adapter() -> _GpuAdapter:
    try:
        return _NvmlGpuAdapter()
    except Exception:
        return _GpuAdapter()


def _text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _cpuinfo() -> dict[str, str]:
    path = Path("/proc/cpuinfo")
    if not path.exists():
        return {}
    info: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        if not line.strip():
            # Only the first processor block is needed.
            break
        key, _, value = line.partition(":")
        info[key.strip()] = value.strip()
    return info


def _cache_sizes_kb() -> dict[int, int]:
    base = Path("/sys/devices/system/cpu/cpu0/cache")
    sizes: dict[int, int] = {}
    if not base.is_dir():
        return sizes
    for index in sorted(base.glob("index*")):
        try:
            level = int((index / "level").read_text().strip())
            raw = (index / "size").read_text().strip().upper()
            if raw.endswith("K"):
                sizes[level] = int(raw[:-1])
            elif raw.endswith("M"):
                sizes[level] = int(raw[:-1]) * 1024
        except (OSError, ValueError):
            continue
    return sizes


class PsutilHardwareProvider:
    """Answers hardware point queries from psutil, platform and NVML.

    Records are keyed with WMI-style field names so the aggregator maps every
    platform through one shape.
    """

    def __init__(self) -> None:
        self._gpu = _build_gpu_adapter()
        self._platform = platform.system()

    def processors(self) -> list[Record]:
        cpuinfo = _cpuinfo()
        freq = psutil.cpu_freq()
        caches = _cache_sizes_kb()
        return [
            {
                "Name": cpuinfo.get("model name") or platform.processor() or platform.machine(),
                "Manufacturer": cpuinfo.get("vendor_id", ""),
                "NumberOfCores": psutil.cpu_count(logical=False),
                "NumberOfLogicalProcessors": psutil.cpu_count(logical=True),
                "MaxClockSpeed": freq.max if freq else None,
                "CurrentClockSpeed": freq.current if freq else None,
                "ProcessorId": cpuinfo.get("Serial", ""),
                "L2CacheSize": caches.get(2),
                "L3CacheSize": caches.get(3),
                "Architecture": platform.machine(),
                "ProcessorType": "Central Processor",
                "Status": "OK",
            }
        ]

    def video_controllers(self) -> list[Record]:
        return self._gpu.video_controllers()

    def memory_modules(self) -> list[Record]:
        # psutil cannot enumerate DIMMs; installed memory is one logical module.
        vm = psutil.virtual_memory()
        return [{"Capacity": vm.total, "Manufacturer": "", "Speed": None, "PartNumber": ""}]

    def disk_drives(self) -> list[Record]:
        rows: list[Record] = []
        for part in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError:
                continue
            rows.append(
                {
                    "Model": part.device,
                    "InterfaceType": part.fstype,
                    "Size": usage.total,
                    "MediaType": "Removable" if "removable" in part.opts else "Fixed",
                }
            )
        return rows

    def network_adapters(self) -> list[Record]:
        stats = psutil.net_if_stats()
        addrs = psutil.net_if_addrs()
        rows: list[Record] = []
        for name, st in stats.items():
            mac = next((a.address for a in addrs.get(name, []) if a.family == psutil.AF_LINK), "")
            rows.append(
                {
                    "Name": name,
                    "MACAddress": mac,
                    # psutil reports Mbit/s.
                    "Speed": st.speed * 1_000_000,
                    "NetEnabled": st.isup,
                }
            )
        return rows

    def thermal_zones(self, namespace: str = THERMAL_NAMESPACE) -> list[Record]:
        if namespace != THERMAL_NAMESPACE:
            raise ProviderQueryError(f"unknown thermal namespace: {namespace}")
        if not hasattr(psutil, "sensors_temperatures"):
            raise ProviderQueryError(f"temperature sensors unsupported on {self._platform}")
        temps = psutil.sensors_temperatures()
        rows: list[Record] = []
        ordered = [n for n in _THERMAL_CHIPS if n in temps] + [n for n in temps if n not in _THERMAL_CHIPS]
        for chip in ordered:
            for entry in temps[chip]:
                rows.append({"InstanceName": f"{chip}/{entry.label or chip}", "CurrentTemperature": entry.current})
        return rows

    def core_usage(self) -> list[Record]:
        per_cpu = psutil.cpu_percent(interval=None, percpu=True)
        return [{"Name": str(i), "PercentProcessorTime": pct} for i, pct in enumerate(per_cpu)]
