import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from ..errors import ProbeError
from ..node_config import ProbeConfig
from ..probes.registry import ProbeRegistry, default_registry
from ..sink.log_sink import BaseSink
from ..snapshot import SystemSnapshot, refresh

logger = logging.getLogger("helioscope-node.runner")


class CycleSummary(BaseModel):
    """What one cycle did: probes that completed, probes that failed, records emitted."""
    completed: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)
    records_emitted: int = 0


class ProbeRunnerService:
    """
    Probe Runner Service.
    Responsibility: Run one collection cycle: take a single snapshot, invoke
    every enabled probe against it in registry order and forward the records
    to the sink.

    Probes are isolated from each other: a probe that fails is logged and
    skipped, the remaining probes still run. A snapshot that cannot be taken
    (SnapshotError) aborts the cycle and propagates to the caller.
    """

    def __init__(
        self,
        sink: BaseSink,
        registry: Optional[ProbeRegistry] = None,
        snapshot_provider: Callable[[], SystemSnapshot] = refresh,
    ):
        self.sink = sink
        self.registry = registry if registry is not None else default_registry()
        self._snapshot_provider = snapshot_provider

    def execute(self, config: ProbeConfig) -> CycleSummary:
        snapshot = self._snapshot_provider()
        summary = CycleSummary()

        for probe in self.registry:
            if not config.is_enabled(probe.name):
                logger.debug(f"Probe '{probe.name}' disabled, skipping")
                continue

            logger.info(f"Starting {probe.title} probe")
            try:
                records = probe.run(snapshot)
            except ProbeError as e:
                logger.warning(f"Probe '{probe.name}' failed: {e}")
                summary.failed.append(probe.name)
                continue
            except Exception as e:
                logger.error(f"Probe '{probe.name}' raised unexpectedly: {e}", exc_info=True)
                summary.failed.append(probe.name)
                continue

            for record in records:
                self.sink.emit(
                    record.level,
                    record.message,
                    record.fields,
                    datetime.now(timezone.utc),
                    context=probe.name,
                )
            summary.completed.append(probe.name)
            summary.records_emitted += len(records)

        logger.debug(
            f"Cycle finished: {len(summary.completed)} probes completed, "
            f"{len(summary.failed)} failed, {summary.records_emitted} records"
        )
        return summary
