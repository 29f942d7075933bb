import sys
from datetime import datetime, timezone


def agent_version() -> str:
    """Installed package version, or "dev" when running from a checkout."""
    try:
        import importlib.metadata as _imeta
        return _imeta.version("helioscope-node")
    except Exception:
        return "dev"


def print_banner(service_name: str, version: str = "") -> None:
    """
    Print the Helioscope startup banner to stderr, keeping stdout for log lines.

    Args:
        service_name: Name of the service starting up (e.g., "Helioscope-Node")
        version: Version number of the service (default: installed package version)
    """
    version = version or agent_version()
    out = sys.stderr
    print("=" * 80, file=out)
    print("  HELIOSCOPE - Host-local metrics agent", file=out)
    print("=" * 80, file=out)
    print(f"  Service:        {service_name}", file=out)
    print(f"  Version:        {version}", file=out)
    print(f"  Started:        {datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')}", file=out)
    print("=" * 80, file=out)
    print(file=out)
