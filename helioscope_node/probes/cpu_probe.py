from typing import List

from ..errors import ProbeError
from ..schemas.metric_record import MetricRecord, fraction_to_percent
from ..snapshot import SystemSnapshot
from .base import BaseProbe


class CpuProbe(BaseProbe):
    """
    CPU Probe.
    Responsibility: Report core count and average frequency, then frequency and
    utilization for every core.
    """

    def __init__(self):
        super().__init__("cpu", "CPU")

    def run(self, snapshot: SystemSnapshot) -> List[MetricRecord]:
        cores = snapshot.cpu_cores
        if not cores:
            raise ProbeError("snapshot contains no CPU cores")

        core_count = len(cores)
        average_frequency = sum(core.frequency_mhz for core in cores) / core_count
        average_usage = sum(core.usage for core in cores) / core_count

        records = [
            MetricRecord(
                message="CPU summary",
                fields={
                    "cores": core_count,
                    "average_frequency_mhz": round(average_frequency),
                    "average_usage_percent": fraction_to_percent(average_usage),
                },
            )
        ]

        for core in cores:
            records.append(
                MetricRecord(
                    message="CPU core",
                    fields={
                        "core": core.index,
                        "name": core.name,
                        "frequency_mhz": round(core.frequency_mhz),
                        "usage_percent": fraction_to_percent(core.usage),
                    },
                )
            )

        return records
