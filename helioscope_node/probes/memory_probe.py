from typing import List

from ..schemas.metric_record import MetricRecord, format_one_decimal, usage_percent
from ..snapshot import SystemSnapshot
from .base import BaseProbe


class MemoryProbe(BaseProbe):
    """
    Memory Probe.
    Responsibility: Report physical memory and swap usage.
    A zero total (e.g. swap disabled) reports 0.0% usage.
    """

    def __init__(self):
        super().__init__("memory", "memory")

    def run(self, snapshot: SystemSnapshot) -> List[MetricRecord]:
        memory = snapshot.memory
        swap = snapshot.swap

        return [
            MetricRecord(
                message="Memory usage",
                fields={
                    "total_memory_bytes": memory.total_bytes,
                    "used_memory_bytes": memory.used_bytes,
                    "memory_usage_percent": format_one_decimal(usage_percent(memory.used_bytes, memory.total_bytes)),
                },
            ),
            MetricRecord(
                message="Swap usage",
                fields={
                    "total_swap_bytes": swap.total_bytes,
                    "used_swap_bytes": swap.used_bytes,
                    "swap_usage_percent": format_one_decimal(usage_percent(swap.used_bytes, swap.total_bytes)),
                },
            ),
        ]
