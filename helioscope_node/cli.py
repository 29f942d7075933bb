"""
Command line entry point for Helioscope Node.

Runs one collection cycle and exits, or with --loop keeps collecting every
collection_interval_secs. Exit codes: 0 on normal completion, 1 when the
configuration is invalid, 2 when the system snapshot could not be taken.
"""
import argparse
import asyncio
import logging
import sys
from typing import Callable, List, Optional

from .config import settings
from .errors import ConfigError, SnapshotError
from .logger import setup_logging
from .node_config import NodeConfig, load_node_config
from .probe_runner.service import ProbeRunnerService
from .sink.log_sink import BaseSink, LogSink
from .snapshot import SystemSnapshot, refresh
from .utils import print_banner

logger = logging.getLogger("helioscope-node")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_SNAPSHOT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="helioscope-node",
        description="Read host hardware counters and log them as structured metric records.",
    )
    parser.add_argument(
        "--config-file",
        default=settings.CONFIG_FILE,
        help=f"config file location (default: {settings.CONFIG_FILE})",
    )
    parser.add_argument(
        "--loop",
        action="store_true",
        help="keep collecting every collection_interval_secs instead of running once",
    )
    return parser


async def collection_loop(
    runner: ProbeRunnerService,
    config: NodeConfig,
    max_cycles: Optional[int] = None,
) -> int:
    """
    Periodically runs collection cycles.
    Each cycle takes a fresh snapshot; a failed snapshot skips that cycle only.
    Returns the number of cycles attempted.
    """
    logger.info(f"Collecting every {config.collection_interval_secs}s")
    cycles = 0
    while max_cycles is None or cycles < max_cycles:
        cycles += 1
        try:
            # Snapshot refresh blocks while psutil samples CPU usage
            await asyncio.to_thread(runner.execute, config.probes.sysinfo)
        except SnapshotError as e:
            logger.error(f"Collection cycle {cycles} aborted: {e}")

        if max_cycles is not None and cycles >= max_cycles:
            break
        await asyncio.sleep(config.collection_interval_secs)
    return cycles


def main(
    argv: Optional[List[str]] = None,
    sink: Optional[BaseSink] = None,
    snapshot_provider: Callable[[], SystemSnapshot] = refresh,
) -> int:
    args = build_parser().parse_args(argv)

    logger.info("Starting helioscope")
    logger.info(f"Config file is read from: {args.config_file}")

    try:
        config = load_node_config(args.config_file)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    logger.debug(f"Config: {config!r}")

    enabled = config.probes.sysinfo.enabled_probes()
    if enabled:
        logger.info(f"Enabled probes: {', '.join(enabled)}")
    else:
        logger.warning("No probes enabled in configuration; nothing will be collected")

    runner = ProbeRunnerService(sink or LogSink(), snapshot_provider=snapshot_provider)

    if args.loop:
        try:
            asyncio.run(collection_loop(runner, config))
        except KeyboardInterrupt:
            logger.info("Helioscope stopped by user.")
        return EXIT_OK

    try:
        summary = runner.execute(config.probes.sysinfo)
    except SnapshotError as e:
        logger.error(f"Collection cycle aborted: {e}")
        return EXIT_SNAPSHOT_ERROR

    logger.info(
        f"Helioscope complete: {summary.records_emitted} records from "
        f"{len(summary.completed)} probes ({len(summary.failed)} failed)"
    )
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    # Installs the formatter before anything else logs
    setup_logging()
    if settings.ENVIRONMENT != "production":
        print_banner("Helioscope-Node")
    sys.exit(main())
