"""
Point-in-time read of OS-exposed hardware and resource state.

A SystemSnapshot is refreshed once per collection cycle and shared read-only by
every probe in that cycle. CPU, memory and host identity are mandatory: if any
of them cannot be read the refresh fails with SnapshotError. Swap, sensors,
disks and network interfaces are best-effort: an unsupported or failing
category comes back empty instead of failing the snapshot.

Uses psutil for every hardware counter and the stdlib (platform, socket) for
host identity.
"""
import logging
import platform
import socket
from datetime import datetime, timezone
from typing import List, Optional

import psutil
from pydantic import BaseModel, ConfigDict, Field

from .config import settings
from .errors import SnapshotError

logger = logging.getLogger("helioscope-node.snapshot")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class SystemIdentity(_Frozen):
    os_name: str
    os_version: str
    kernel_version: str
    hostname: str
    architecture: str


class CpuCore(_Frozen):
    index: int
    name: str
    frequency_mhz: float = 0.0
    # Fraction of the sample window the core was busy, 0.0 - 1.0
    usage: float = 0.0


class MemoryUsage(_Frozen):
    total_bytes: int = 0
    used_bytes: int = 0


class SensorReading(_Frozen):
    label: str
    current_celsius: float
    high_celsius: Optional[float] = None
    critical_celsius: Optional[float] = None


class DiskInfo(_Frozen):
    name: str
    mount_point: str
    file_system: str = ""
    total_bytes: int = 0
    available_bytes: int = 0


class NetworkInterface(_Frozen):
    name: str
    bytes_sent: int = 0
    bytes_received: int = 0
    packets_sent: int = 0
    packets_received: int = 0


class SystemSnapshot(_Frozen):
    taken_at: datetime
    identity: SystemIdentity
    cpu_cores: List[CpuCore] = Field(default_factory=list)
    memory: MemoryUsage = Field(default_factory=MemoryUsage)
    swap: MemoryUsage = Field(default_factory=MemoryUsage)
    sensors: List[SensorReading] = Field(default_factory=list)
    disks: List[DiskInfo] = Field(default_factory=list)
    network_interfaces: List[NetworkInterface] = Field(default_factory=list)

    @property
    def core_count(self) -> int:
        return len(self.cpu_cores)


def refresh(cpu_sample_interval: Optional[float] = None) -> SystemSnapshot:
    """
    Refresh every category and return a new snapshot.

    Blocks for cpu_sample_interval seconds (settings.CPU_SAMPLE_INTERVAL_SECONDS
    by default) while psutil measures per-core utilization.
    Raises SnapshotError if a mandatory reading fails.
    """
    interval = settings.CPU_SAMPLE_INTERVAL_SECONDS if cpu_sample_interval is None else cpu_sample_interval
    logger.debug(f"Refreshing system snapshot (cpu sample interval {interval}s)")

    try:
        identity = _read_identity()
        cpu_cores = _read_cpu_cores(interval)
        memory = _read_memory()
    except (psutil.Error, OSError, RuntimeError) as e:
        raise SnapshotError(f"System snapshot refresh failed: {e}") from e

    snapshot = SystemSnapshot(
        taken_at=datetime.now(timezone.utc),
        identity=identity,
        cpu_cores=cpu_cores,
        memory=memory,
        swap=_read_swap(),
        sensors=_read_sensors(),
        disks=_read_disks(),
        network_interfaces=_read_network_interfaces(),
    )
    logger.debug(
        f"Snapshot ready: {snapshot.core_count} cores, {len(snapshot.sensors)} sensors, "
        f"{len(snapshot.disks)} disks, {len(snapshot.network_interfaces)} interfaces"
    )
    return snapshot


def _read_identity() -> SystemIdentity:
    try:
        hostname = socket.getfqdn() or socket.gethostname()
    except OSError:
        hostname = "localhost"

    return SystemIdentity(
        os_name=platform.system() or "unknown",       # e.g. "Linux", "Darwin", "Windows"
        os_version=platform.version() or "unknown",
        kernel_version=platform.release() or "unknown",
        hostname=hostname,
        architecture=platform.machine() or "unknown",
    )


def _read_cpu_cores(interval: float) -> List[CpuCore]:
    percents = psutil.cpu_percent(interval=interval, percpu=True) or []
    frequencies = _per_core_frequencies(len(percents))
    return [
        CpuCore(
            index=idx,
            name=f"cpu{idx}",
            frequency_mhz=frequencies[idx],
            usage=float(percent) / 100.0,
        )
        for idx, percent in enumerate(percents)
    ]


def _per_core_frequencies(core_count: int) -> List[float]:
    """
    Current frequency (MHz) of every core.
    Platforms that only expose one aggregate reading get it applied to every
    core; platforms without frequency support report 0.0.
    """
    try:
        freqs = psutil.cpu_freq(percpu=True) or []
    except (AttributeError, NotImplementedError, OSError, RuntimeError) as e:
        logger.debug(f"CPU frequency not available: {e}")
        freqs = []

    if len(freqs) == core_count:
        return [float(f.current or 0.0) for f in freqs]
    if freqs:
        return [float(freqs[0].current or 0.0)] * core_count
    return [0.0] * core_count


def _read_memory() -> MemoryUsage:
    vm = psutil.virtual_memory()
    # "used" means everything that is not available to new allocations
    return MemoryUsage(total_bytes=int(vm.total), used_bytes=max(int(vm.total) - int(vm.available), 0))


def _read_swap() -> MemoryUsage:
    try:
        sm = psutil.swap_memory()
    except (psutil.Error, OSError, RuntimeError) as e:
        logger.debug(f"Swap metrics not available: {e}")
        return MemoryUsage()
    return MemoryUsage(total_bytes=int(sm.total), used_bytes=int(sm.used))


def _read_sensors() -> List[SensorReading]:
    reader = getattr(psutil, "sensors_temperatures", None)
    if reader is None:
        logger.debug("Temperature sensors not supported on this platform")
        return []

    try:
        temps = reader() or {}
    except (OSError, RuntimeError) as e:
        logger.debug(f"Temperature sensors not available: {e}")
        return []

    readings = []
    for chip, entries in temps.items():
        for entry in entries:
            if entry.current is None:
                continue
            label = f"{chip} {entry.label}" if entry.label else chip
            readings.append(
                SensorReading(
                    label=label,
                    current_celsius=float(entry.current),
                    high_celsius=_optional_float(entry.high),
                    critical_celsius=_optional_float(entry.critical),
                )
            )
    return readings


def _optional_float(value) -> Optional[float]:
    return float(value) if value is not None else None


def _read_disks() -> List[DiskInfo]:
    try:
        partitions = psutil.disk_partitions(all=False)
    except (OSError, RuntimeError) as e:
        logger.debug(f"Disk partitions not available: {e}")
        return []

    disks = []
    for part in partitions:
        try:
            usage = psutil.disk_usage(part.mountpoint)
        except OSError as e:
            # Unmounted media, permission-restricted mounts, etc.
            logger.debug(f"Skipping {part.mountpoint}: {e}")
            continue
        disks.append(
            DiskInfo(
                name=part.device,
                mount_point=part.mountpoint,
                file_system=part.fstype,
                total_bytes=int(usage.total),
                available_bytes=int(usage.free),
            )
        )
    return disks


def _read_network_interfaces() -> List[NetworkInterface]:
    try:
        counters = psutil.net_io_counters(pernic=True) or {}
    except (OSError, RuntimeError) as e:
        logger.debug(f"Network counters not available: {e}")
        return []

    return [
        NetworkInterface(
            name=name,
            bytes_sent=int(c.bytes_sent),
            bytes_received=int(c.bytes_recv),
            packets_sent=int(c.packets_sent),
            packets_received=int(c.packets_recv),
        )
        for name, c in sorted(counters.items())
    ]
