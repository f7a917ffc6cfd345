import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))

from sysres_telemetry.models import (
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
from sysres_telemetry.summary import (
    project_summary,
    summarize_disk,
    summarize_graphics,
    summarize_memory,
    summarize_network,
    summarize_processor,
    summarize_thermal,
)


def _snapshot(**values):
    defaults = {
        "processor": ProcessorInfo(),
        "graphics": GraphicsInfo(),
        "memory": MemoryInfo(),
        "disks": (),
        "network": (),
        "thermal": ThermalInfo(),
    }
    defaults.update(values)
    return TelemetrySnapshot(**{k: QueryResult(value=v) for k, v in defaults.items()})


class SummaryProjectorTests(unittest.TestCase):
    def test_processor_keeps_name_and_counts(self):
        cpu = ProcessorInfo(name="Core i7-12700K", manufacturer="GenuineIntel", physical_cores=12, logical_processors=20)
        summary = summarize_processor(cpu)
        self.assertEqual(summary.name, cpu.name)
        self.assertEqual(summary.core_count, 12)
        self.assertEqual(summary.logical_count, 20)

    def test_names_are_preserved(self):
        gpu = GraphicsInfo(name="Arc A770", adapter_memory=16384, driver_version="31.0")
        nic = NetworkAdapterInfo(name="eth0", mac_address="aa:bb", link_speed=10)
        disk = DiskInfo(model="WD Blue", interface_type="SATA", size=500)
        self.assertEqual(summarize_graphics(gpu).name, gpu.name)
        self.assertEqual(summarize_graphics(gpu).adapter_memory, 16384)
        self.assertEqual(summarize_network(nic).name, nic.name)
        self.assertEqual(summarize_disk(disk).model, disk.model)
        self.assertEqual(summarize_disk(disk).size, 500)

    def test_memory_counts_modules(self):
        memory = MemoryInfo(total_capacity=24, modules=(MemoryModule(capacity=8), MemoryModule(capacity=16)))
        summary = summarize_memory(memory)
        self.assertEqual(summary.total_capacity, 24)
        self.assertEqual(summary.module_count, 2)

    def test_thermal_passthrough(self):
        summary = summarize_thermal(ThermalInfo(has_reading=True, temperature=61.0))
        self.assertTrue(summary.has_reading)
        self.assertEqual(summary.temperature, 61.0)

    def test_zero_in_zero_out(self):
        view = project_summary(_snapshot())
        self.assertEqual(view.processor.name, "")
        self.assertEqual(view.processor.core_count, 0)
        self.assertEqual(view.memory.module_count, 0)
        self.assertEqual(view.graphics.adapter_memory, "Not Available")
        self.assertEqual(view.disks, ())
        self.assertFalse(view.thermal.has_reading)

    def test_full_projection(self):
        view = project_summary(
            _snapshot(
                processor=ProcessorInfo(name="M2", physical_cores=8, logical_processors=8),
                disks=(DiskInfo(model="APPLE SSD", size=1), DiskInfo(model="USB", size=2)),
                network=(NetworkAdapterInfo(name="en0", link_speed=1),),
            )
        )
        self.assertEqual(view.processor.name, "M2")
        self.assertEqual([d.model for d in view.disks], ["APPLE SSD", "USB"])
        self.assertEqual(view.network[0].name, "en0")


if __name__ == "__main__":
    unittest.main()
