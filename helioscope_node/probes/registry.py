import logging
from typing import Dict, Iterator, List, Optional

from .base import BaseProbe
from .cpu_probe import CpuProbe
from .disk_probe import DiskProbe
from .memory_probe import MemoryProbe
from .network_probe import NetworkProbe
from .static_info_probe import StaticInfoProbe
from .temperature_probe import TemperatureProbe

logger = logging.getLogger("helioscope-node.probes.registry")


class ProbeRegistry:
    """
    Name-keyed set of probes, iterated in registration order.
    New probes join by registering under a unique name; the runner walks
    whatever is registered.
    """

    def __init__(self):
        self._probes: Dict[str, BaseProbe] = {}

    def register(self, probe: BaseProbe) -> None:
        if probe.name in self._probes:
            raise ValueError(f"Probe '{probe.name}' is already registered")
        self._probes[probe.name] = probe
        logger.debug(f"Registered probe '{probe.name}'")

    def get(self, name: str) -> Optional[BaseProbe]:
        return self._probes.get(name)

    def names(self) -> List[str]:
        return list(self._probes)

    def __iter__(self) -> Iterator[BaseProbe]:
        return iter(list(self._probes.values()))

    def __len__(self) -> int:
        return len(self._probes)

    def __contains__(self, name: object) -> bool:
        return name in self._probes


def default_registry() -> ProbeRegistry:
    """Registry with every built-in probe, in documented execution order."""
    registry = ProbeRegistry()
    for probe in (StaticInfoProbe(), CpuProbe(), MemoryProbe(), DiskProbe(), NetworkProbe(), TemperatureProbe()):
        registry.register(probe)
    return registry
