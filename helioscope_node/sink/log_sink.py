import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Mapping, Optional

from ..schemas.metric_record import FieldValue

METRICS_LOGGER_NAME = "helioscope-node.metrics"


class BaseSink(ABC):
    """
    Destination for metric records.
    Every record arrives with a non-empty message and a UTC timestamp.
    """

    @abstractmethod
    def emit(
        self,
        level: int,
        message: str,
        fields: Mapping[str, FieldValue],
        timestamp: datetime,
        context: Optional[str] = None,
    ) -> None:
        pass


def _check_utc(timestamp: datetime) -> None:
    if timestamp.tzinfo is None or timestamp.utcoffset() != timedelta(0):
        raise ValueError(f"Metric timestamps must be UTC, got {timestamp.isoformat()}")


class LogSink(BaseSink):
    """
    Log Sink.
    Responsibility: Hand metric records to the structured log stream.
    The formatter installed by setup_logging() renders the fields, the probe
    context and the UTC timestamp attached to each log record.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(METRICS_LOGGER_NAME)

    def emit(
        self,
        level: int,
        message: str,
        fields: Mapping[str, FieldValue],
        timestamp: datetime,
        context: Optional[str] = None,
    ) -> None:
        if not message:
            raise ValueError("Metric records must carry a message")
        _check_utc(timestamp)

        self._logger.log(
            level,
            message,
            extra={"fields": dict(fields), "probe": context, "ts_utc": timestamp},
        )
