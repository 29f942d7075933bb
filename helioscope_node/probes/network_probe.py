from typing import List

from ..schemas.metric_record import MetricRecord
from ..snapshot import SystemSnapshot
from .base import BaseProbe


class NetworkProbe(BaseProbe):
    """
    Network Probe.
    Responsibility: Report cumulative traffic counters for every interface.
    Counters are raw totals since boot; no rates are derived.
    """

    def __init__(self):
        super().__init__("network", "network")

    def run(self, snapshot: SystemSnapshot) -> List[MetricRecord]:
        interfaces = snapshot.network_interfaces
        records = [
            MetricRecord(
                message=f"Detected {len(interfaces)} network interfaces",
                fields={"interface_count": len(interfaces)},
            )
        ]

        for iface in interfaces:
            records.append(
                MetricRecord(
                    message="Network interface",
                    fields={
                        "interface": iface.name,
                        "bytes_sent": iface.bytes_sent,
                        "bytes_received": iface.bytes_received,
                        "packets_sent": iface.packets_sent,
                        "packets_received": iface.packets_received,
                    },
                )
            )

        return records
