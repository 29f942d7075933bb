from collections import namedtuple
from datetime import timezone
from unittest.mock import patch

import psutil
import pytest
from pydantic import ValidationError

from helioscope_node.errors import SnapshotError
from helioscope_node.snapshot import refresh

Freq = namedtuple("Freq", "current min max")
VirtualMemory = namedtuple("VirtualMemory", "total available used")
SwapMemory = namedtuple("SwapMemory", "total used")
Temp = namedtuple("Temp", "label current high critical")
Partition = namedtuple("Partition", "device mountpoint fstype")
Usage = namedtuple("Usage", "total free")
NetIO = namedtuple("NetIO", "bytes_sent bytes_recv packets_sent packets_recv")

GIB = 1024 ** 3


def _disk_usage(mountpoint):
    if mountpoint != "/":
        raise PermissionError(mountpoint)
    return Usage(total=100 * GIB, free=40 * GIB)


@pytest.fixture
def fake_psutil():
    with patch("helioscope_node.snapshot.psutil") as mock_psutil:
        mock_psutil.Error = psutil.Error
        mock_psutil.cpu_percent.return_value = [25.0, 75.0]
        mock_psutil.cpu_freq.return_value = [Freq(2400.0, 800.0, 3600.0), Freq(3000.0, 800.0, 3600.0)]
        mock_psutil.virtual_memory.return_value = VirtualMemory(total=16 * GIB, available=8 * GIB, used=6 * GIB)
        mock_psutil.swap_memory.return_value = SwapMemory(total=2 * GIB, used=GIB // 2)
        mock_psutil.sensors_temperatures.return_value = {
            "coretemp": [Temp("Package id 0", 54.0, 80.0, 100.0), Temp("", 50.0, None, None)],
        }
        mock_psutil.disk_partitions.return_value = [
            Partition("/dev/sda1", "/", "ext4"),
            Partition("/dev/sr0", "/media/cdrom", "iso9660"),
        ]
        mock_psutil.disk_usage.side_effect = _disk_usage
        mock_psutil.net_io_counters.return_value = {
            "lo": NetIO(10, 10, 1, 1),
            "eth0": NetIO(1000, 2000, 10, 20),
        }
        yield mock_psutil


def test_refresh_reads_every_category(fake_psutil):
    snapshot = refresh(cpu_sample_interval=0)

    fake_psutil.cpu_percent.assert_called_once_with(interval=0, percpu=True)
    assert snapshot.taken_at.tzinfo == timezone.utc
    assert snapshot.core_count == 2
    assert [c.usage for c in snapshot.cpu_cores] == [0.25, 0.75]
    assert [c.frequency_mhz for c in snapshot.cpu_cores] == [2400.0, 3000.0]
    assert snapshot.memory.total_bytes == 16 * GIB
    assert snapshot.memory.used_bytes == 8 * GIB
    assert snapshot.swap.used_bytes == GIB // 2
    assert snapshot.identity.hostname


def test_sensor_labels_and_thresholds(fake_psutil):
    sensors = refresh(cpu_sample_interval=0).sensors

    assert [s.label for s in sensors] == ["coretemp Package id 0", "coretemp"]
    assert sensors[0].critical_celsius == 100.0
    assert sensors[1].critical_celsius is None


def test_unreadable_partition_is_skipped(fake_psutil):
    disks = refresh(cpu_sample_interval=0).disks

    assert len(disks) == 1
    assert disks[0].mount_point == "/"
    assert disks[0].available_bytes == 40 * GIB


def test_interfaces_sorted_by_name(fake_psutil):
    interfaces = refresh(cpu_sample_interval=0).network_interfaces
    assert [i.name for i in interfaces] == ["eth0", "lo"]
    assert interfaces[0].bytes_received == 2000


def test_single_aggregate_frequency_applies_to_all_cores(fake_psutil):
    fake_psutil.cpu_freq.return_value = [Freq(1800.0, 0.0, 0.0)]
    cores = refresh(cpu_sample_interval=0).cpu_cores
    assert [c.frequency_mhz for c in cores] == [1800.0, 1800.0]


def test_missing_frequency_support_reports_zero(fake_psutil):
    fake_psutil.cpu_freq.side_effect = NotImplementedError("no cpufreq")
    cores = refresh(cpu_sample_interval=0).cpu_cores
    assert [c.frequency_mhz for c in cores] == [0.0, 0.0]


def test_platform_without_sensors_yields_empty_list(fake_psutil):
    del fake_psutil.sensors_temperatures
    assert refresh(cpu_sample_interval=0).sensors == []


def test_best_effort_categories_fail_soft(fake_psutil):
    fake_psutil.swap_memory.side_effect = OSError("no swap info")
    fake_psutil.disk_partitions.side_effect = OSError("no mounts")
    fake_psutil.net_io_counters.side_effect = RuntimeError("no counters")
    fake_psutil.sensors_temperatures.side_effect = OSError("no hwmon")

    snapshot = refresh(cpu_sample_interval=0)

    assert snapshot.swap.total_bytes == 0
    assert snapshot.disks == []
    assert snapshot.network_interfaces == []
    assert snapshot.sensors == []


def test_mandatory_reading_failure_is_snapshot_error(fake_psutil):
    fake_psutil.virtual_memory.side_effect = OSError("/proc/meminfo unreadable")

    with pytest.raises(SnapshotError, match="meminfo"):
        refresh(cpu_sample_interval=0)


def test_snapshot_is_read_only(fake_psutil):
    snapshot = refresh(cpu_sample_interval=0)
    with pytest.raises(ValidationError):
        snapshot.cpu_cores = []
