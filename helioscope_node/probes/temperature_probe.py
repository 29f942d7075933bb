from typing import Dict, List

from ..schemas.metric_record import FieldValue, MetricRecord, format_one_decimal
from ..snapshot import SensorReading, SystemSnapshot
from .base import BaseProbe


class TemperatureProbe(BaseProbe):
    """
    Temperature Probe.
    Responsibility: Report every temperature sensor and whether it has reached
    its critical threshold.

    Sensors without a critical threshold carry no above_critical flag at all:
    an unknown threshold is not reported as safe.
    """

    def __init__(self):
        super().__init__("temperature", "temperature")

    def run(self, snapshot: SystemSnapshot) -> List[MetricRecord]:
        sensors = snapshot.sensors
        records = [
            MetricRecord(
                message=f"Detected {len(sensors)} temperature sensors",
                fields={"sensor_count": len(sensors)},
            )
        ]
        records.extend(MetricRecord(message="Temperature", fields=self._sensor_fields(sensor)) for sensor in sensors)
        return records

    @staticmethod
    def _sensor_fields(sensor: SensorReading) -> Dict[str, FieldValue]:
        fields: Dict[str, FieldValue] = {
            "label": sensor.label,
            "temperature_celsius": format_one_decimal(sensor.current_celsius),
        }
        if sensor.high_celsius is not None:
            fields["high_celsius"] = format_one_decimal(sensor.high_celsius)
        if sensor.critical_celsius is not None:
            fields["critical_celsius"] = format_one_decimal(sensor.critical_celsius)
            fields["above_critical"] = sensor.current_celsius >= sensor.critical_celsius
        return fields
