from typing import List

from ..schemas.metric_record import MetricRecord
from ..snapshot import SystemSnapshot
from .base import BaseProbe


class StaticInfoProbe(BaseProbe):
    """
    Static Info Probe.
    Responsibility: Report host identity (OS, kernel, hostname) verbatim.
    """

    def __init__(self):
        super().__init__("static_info", "static info")

    def run(self, snapshot: SystemSnapshot) -> List[MetricRecord]:
        identity = snapshot.identity
        return [
            MetricRecord(
                message="System information",
                fields={
                    "os_name": identity.os_name,
                    "os_version": identity.os_version,
                    "kernel_version": identity.kernel_version,
                    "hostname": identity.hostname,
                    "architecture": identity.architecture,
                },
            )
        ]
