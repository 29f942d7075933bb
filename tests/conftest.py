import pytest

from factories import GIB, RecordingSink, build_snapshot
from helioscope_node.snapshot import DiskInfo, NetworkInterface, SensorReading


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def snapshot():
    return build_snapshot(
        sensors=[
            SensorReading(label="coretemp Package id 0", current_celsius=54.0, high_celsius=80.0, critical_celsius=100.0),
            SensorReading(label="acpitz", current_celsius=27.8),
        ],
        disks=[
            DiskInfo(name="/dev/nvme0n1p2", mount_point="/", file_system="ext4", total_bytes=500 * GIB, available_bytes=210 * GIB),
        ],
        interfaces=[
            NetworkInterface(name="eth0", bytes_sent=1200, bytes_received=34000, packets_sent=10, packets_received=42),
            NetworkInterface(name="lo", bytes_sent=500, bytes_received=500, packets_sent=5, packets_received=5),
        ],
    )
