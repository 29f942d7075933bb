class HelioscopeError(Exception):
    """Base class for all Helioscope Node errors."""


class ConfigError(HelioscopeError):
    """
    Configuration is malformed (unreadable file, bad TOML, wrong value type).
    Fatal: raised before any probe runs.
    """


class SnapshotError(HelioscopeError):
    """
    The OS-level refresh could not be performed at all.
    Fatal for the whole cycle.
    """


class ProbeError(HelioscopeError):
    """A single probe could not complete. The runner logs it and moves on."""
