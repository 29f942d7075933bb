import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from .config import settings

# ANSI escape codes
_RESET    = "\033[0m"
_BOLD     = "\033[1m"
_DIM      = "\033[2m"

# Level → color
_LEVEL_COLORS = {
    "DEBUG":    "\033[36m",    # Cyan
    "INFO":     "\033[32m",    # Green
    "WARNING":  "\033[33m",    # Yellow
    "ERROR":    "\033[31m",    # Red
    "CRITICAL": "\033[35;1m",  # Bright Magenta
}

# Component badge: orange for the node agent
_COMPONENT_COLOR = "\033[38;5;208m"
_COMPONENT_TAG   = "HELIOSCOPE"

_FIELD_COLOR = "\033[34m"

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _record_timestamp(record: logging.LogRecord) -> datetime:
    """
    Timestamp for a log line, always UTC.
    Metric records carry the instant the runner stamped them with (ts_utc);
    everything else falls back to the time the log record was created.
    """
    ts = getattr(record, "ts_utc", None)
    if isinstance(ts, datetime):
        return ts.astimezone(timezone.utc)
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


def _render_value(value: Any) -> str:
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _metric_fields(record: logging.LogRecord) -> Optional[Dict[str, Any]]:
    fields = getattr(record, "fields", None)
    return fields if isinstance(fields, dict) else None


class HelioscopeFormatter(logging.Formatter):
    """
    Human-readable colored formatter for Helioscope Node.

    Example output:
      [2026-10-18T14:05:33Z]  [HELIOSCOPE]  [INFO    ]  helioscope-node.runner   » Starting CPU probe
      [2026-10-18T14:05:33Z]  [HELIOSCOPE]  [INFO    ]  helioscope-node.metrics  » Memory usage  probe=memory total_memory_bytes=17179869184 ...
      [2026-10-18T14:05:33Z]  [HELIOSCOPE]  [WARNING ]  helioscope-node.runner   » Probe 'temperature' failed: ...
    """

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def _paint(self, text: str, *codes: str) -> str:
        if not self.use_color:
            return text
        return "".join(codes) + text + _RESET

    def format(self, record: logging.LogRecord) -> str:
        ts = _record_timestamp(record).strftime(_TIMESTAMP_FORMAT)
        ts_part = self._paint(f"[{ts}]", _DIM)

        badge = self._paint(f"[{_COMPONENT_TAG}]", _COMPONENT_COLOR, _BOLD)

        level = record.levelname
        level_part = self._paint(f"[{level:<8}]", _LEVEL_COLORS.get(level, ""), _BOLD)

        name_part = self._paint(record.name, _DIM)

        msg = record.getMessage()

        extras = []
        probe = getattr(record, "probe", None)
        if probe:
            extras.append(f"probe={probe}")
        fields = _metric_fields(record)
        if fields:
            extras.extend(f"{key}={_render_value(value)}" for key, value in fields.items())
        if extras:
            msg = msg + "  " + self._paint(" ".join(extras), _FIELD_COLOR)

        if record.exc_info:
            msg = msg + "\n" + self.formatException(record.exc_info)

        return f"{ts_part}  {badge}  {level_part}  {name_part}  » {msg}"


class JsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per line, for log shippers feeding the collector."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        # Extras (fields, probe, ts_utc) are merged by the base class; normalize them
        log_record["ts_utc"] = _record_timestamp(record).strftime(_TIMESTAMP_FORMAT)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        if not log_record.get("probe"):
            log_record.pop("probe", None)
        if _metric_fields(record) is None:
            log_record.pop("fields", None)


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure logging for Helioscope Node.

    Development  → colored, human-readable lines to stdout
    Production   → one JSON object per line to stdout (no color codes)

    Log level is controlled by settings.LOG_LEVEL (default: INFO).
    """
    root = logging.getLogger()

    # Remove handlers added by imported libraries before us
    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)

    if settings.ENVIRONMENT == "production":
        handler.setFormatter(JsonFormatter("%(message)s", json_ensure_ascii=False))
    else:
        handler.setFormatter(HelioscopeFormatter(use_color=sys.stdout.isatty()))

    root.addHandler(handler)
    root.setLevel((level or settings.LOG_LEVEL).upper())

    # Suppress chatty third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    return root
