from abc import ABC, abstractmethod
from typing import List

from ..schemas.metric_record import MetricRecord
from ..snapshot import SystemSnapshot


class BaseProbe(ABC):
    """
    Abstract Base Class for Helioscope probes.

    A probe is a pure transform over one SystemSnapshot: no I/O, no state kept
    between cycles. It signals an incomplete reading by raising ProbeError.
    """

    def __init__(self, name: str, title: str):
        # name: config key and registry key; title: used in operator-facing log lines
        self.name = name
        self.title = title

    @abstractmethod
    def run(self, snapshot: SystemSnapshot) -> List[MetricRecord]:
        """
        Derives metric records from the snapshot.
        Returns records in emission order.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
