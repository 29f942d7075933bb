from typing import List

from ..schemas.metric_record import MetricRecord
from ..snapshot import SystemSnapshot
from .base import BaseProbe


class DiskProbe(BaseProbe):
    """
    Disk Probe.
    Responsibility: Report raw capacity counters for every mounted disk.
    """

    def __init__(self):
        super().__init__("disk", "disk")

    def run(self, snapshot: SystemSnapshot) -> List[MetricRecord]:
        disks = snapshot.disks
        records = [MetricRecord(message=f"Detected {len(disks)} disks", fields={"disk_count": len(disks)})]

        for disk in disks:
            records.append(
                MetricRecord(
                    message="Disk",
                    fields={
                        "name": disk.name,
                        "mount_point": disk.mount_point,
                        "file_system": disk.file_system,
                        "total_bytes": disk.total_bytes,
                        "available_bytes": disk.available_bytes,
                    },
                )
            )

        return records
