"""Builders and fakes shared by the test modules."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from helioscope_node.sink.log_sink import BaseSink
from helioscope_node.snapshot import (
    CpuCore,
    DiskInfo,
    MemoryUsage,
    NetworkInterface,
    SensorReading,
    SystemIdentity,
    SystemSnapshot,
)

GIB = 1024 ** 3


class RecordingSink(BaseSink):
    """Keeps every emitted record in memory."""

    def __init__(self):
        self.records: List[Dict[str, Any]] = []

    def emit(self, level, message, fields, timestamp, context=None):
        self.records.append(
            {
                "level": level,
                "message": message,
                "fields": dict(fields),
                "timestamp": timestamp,
                "context": context,
            }
        )

    def for_probe(self, name: str) -> List[Dict[str, Any]]:
        return [r for r in self.records if r["context"] == name]


def build_snapshot(
    cores: int = 8,
    usage: float = 0.5,
    frequency_mhz: float = 2400.0,
    memory_total: int = 16 * GIB,
    memory_used: int = 8 * GIB,
    swap_total: int = 0,
    swap_used: int = 0,
    sensors: Optional[List[SensorReading]] = None,
    disks: Optional[List[DiskInfo]] = None,
    interfaces: Optional[List[NetworkInterface]] = None,
) -> SystemSnapshot:
    return SystemSnapshot(
        taken_at=datetime.now(timezone.utc),
        identity=SystemIdentity(
            os_name="Linux",
            os_version="#1 SMP PREEMPT_DYNAMIC",
            kernel_version="6.8.0-45-generic",
            hostname="node-1.example.com",
            architecture="x86_64",
        ),
        cpu_cores=[CpuCore(index=i, name=f"cpu{i}", frequency_mhz=frequency_mhz, usage=usage) for i in range(cores)],
        memory=MemoryUsage(total_bytes=memory_total, used_bytes=memory_used),
        swap=MemoryUsage(total_bytes=swap_total, used_bytes=swap_used),
        sensors=sensors or [],
        disks=disks or [],
        network_interfaces=interfaces or [],
    )
