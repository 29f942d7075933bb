"""
Node configuration loaded from the TOML config file.

    node_id = "node-1"
    metrics_collector_addr = "collector.example.com:9090"
    collection_interval_secs = 60

    [probes.sysinfo]
    cpu = true
    memory = true
    temperature = false

Every probe flag defaults to disabled when absent. Unknown keys (future probes,
other probe sources) are ignored. A recognized key with a non-boolean value is
an operator mistake and raises ConfigError.
"""
import logging
import tomllib
from pathlib import Path
from typing import Any, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, StrictBool, StrictStr, ValidationError

from .errors import ConfigError

logger = logging.getLogger("helioscope-node.config")

# Fixed execution order of the known probes
KNOWN_PROBES: Tuple[str, ...] = ("static_info", "cpu", "memory", "disk", "network", "temperature")


class ProbeConfig(BaseModel):
    """Immutable set of enablement flags, one per known probe."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    static_info: StrictBool = False
    cpu: StrictBool = False
    memory: StrictBool = False
    disk: StrictBool = False
    network: StrictBool = False
    temperature: StrictBool = False

    def is_enabled(self, name: str) -> bool:
        if name not in KNOWN_PROBES:
            return False
        return bool(getattr(self, name))

    def enabled_probes(self) -> Tuple[str, ...]:
        return tuple(name for name in KNOWN_PROBES if self.is_enabled(name))


class ProbesConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    sysinfo: ProbeConfig = Field(default_factory=ProbeConfig)


class NodeConfig(BaseModel):
    """
    Validated node configuration.
    node_id and metrics_collector_addr are carried for the collector client and
    are not interpreted by the probe framework.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    node_id: StrictStr
    metrics_collector_addr: StrictStr
    collection_interval_secs: PositiveInt = Field(default=60, strict=True)
    probes: ProbesConfig = Field(default_factory=ProbesConfig)


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def build_probe_config(raw: Mapping[str, Any]) -> ProbeConfig:
    """Validate a raw mapping of probe flags into a ProbeConfig."""
    try:
        return ProbeConfig.model_validate(dict(raw))
    except ValidationError as e:
        raise ConfigError(f"Invalid probe configuration: {_describe(e)}") from e


def build_node_config(raw: Mapping[str, Any]) -> NodeConfig:
    try:
        config = NodeConfig.model_validate(dict(raw))
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {_describe(e)}") from e

    ignored = _unknown_probe_keys(raw)
    if ignored:
        logger.debug(f"Ignoring unrecognized probe keys: {', '.join(ignored)}")
    return config


def _unknown_probe_keys(raw: Mapping[str, Any]) -> Tuple[str, ...]:
    probes = raw.get("probes")
    if not isinstance(probes, Mapping):
        return ()
    sysinfo = probes.get("sysinfo")
    if not isinstance(sysinfo, Mapping):
        return ()
    return tuple(key for key in sysinfo if key not in KNOWN_PROBES)


def parse_node_config(content: str) -> NodeConfig:
    """Parse TOML text into a NodeConfig."""
    try:
        raw = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Config is not valid TOML: {e}") from e
    return build_node_config(raw)


def load_node_config(path: Union[str, Path]) -> NodeConfig:
    """Read and validate the node config file at path."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    return parse_node_config(content)
