import asyncio
import logging
from typing import FrozenSet, Optional, Set

from abstractions.metrics_sink import MetricsSink
from abstractions.storage_client import StorageClient
from contracts.errors import DurabilitySeedError
from contracts.probe_config import ProbeConfig
from contracts.probe_state import ProbeState, ProbeStatus
from core.bucket_preparer import BucketPreparer
from core.durability_checker import DurabilityChecker
from core.latency_checker import LatencyChecker
from core.measurement_recorder import MeasurementRecorder

logger = logging.getLogger(__name__)


class Probe:
    """
    Periodically prepares the probe buckets and launches latency and
    durability checks against one storage endpoint.
    """

    def __init__(
        self,
        config: ProbeConfig,
        client: StorageClient,
        sink: MetricsSink,
        cancel_event: Optional[asyncio.Event] = None,
    ):
        """
        Initialize the Probe.

        Args:
            config (ProbeConfig): Configuration of the probe.
            client (StorageClient): Client for the probed endpoint, owned by this probe.
            sink (MetricsSink): Destination of measurements, may be shared by probes.
            cancel_event (Optional[asyncio.Event]): Signal that stops the probe
                once set. A private event is created when omitted.
        """
        self.config = config
        self.client = client
        self.cancel_event = cancel_event if cancel_event is not None else asyncio.Event()
        self.recorder = MeasurementRecorder(sink, endpoint_label=config.name)
        self.preparer = BucketPreparer(client, config)
        self.latency_checker = LatencyChecker(client, config, self.recorder)
        self.durability_checker = DurabilityChecker(
            client, config, self.preparer, self.recorder
        )
        self.state = ProbeState.IDLE
        self._inflight: Set[asyncio.Task] = set()
        logger.info(f"Probe created for: {config.endpoint}")

    @property
    def inflight(self) -> FrozenSet[asyncio.Task]:
        """Check tasks dispatched by this probe that have not finished yet."""
        return frozenset(self._inflight)

    def status(self) -> ProbeStatus:
        return ProbeStatus(
            name=self.config.name,
            endpoint=self.config.endpoint,
            state=self.state,
            in_flight_checks=len(self._inflight),
        )

    def stop(self):
        """Ask the probe to stop; takes effect at the next idle wait."""
        self.cancel_event.set()

    async def run(self):
        """
        Probe the endpoint until cancelled.

        Cancellation is only observed while idle: it neither interrupts a
        bucket preparation nor the checks already dispatched.

        Raises:
            Exception: Whatever made a bucket preparation fail. The probe is
                left in the ``failed`` state.
        """
        logger.info(
            f"Starting probing on {self.config.name} every {self.config.tick_interval_ms}ms"
        )
        while not self.cancel_event.is_set():
            try:
                await asyncio.wait_for(
                    self.cancel_event.wait(), timeout=self.config.tick_interval_seconds
                )
                break
            except asyncio.TimeoutError:
                pass
            await self.tick()
        self.state = ProbeState.TERMINATED
        logger.info(f"Terminating probe on {self.config.name}")

    async def tick(self):
        """Prepare both buckets, then dispatch one latency and one durability check."""
        self.state = ProbeState.PREPARING
        try:
            await self.preparer.ensure_latency_bucket()
        except Exception as e:
            self.state = ProbeState.FAILED
            logger.error(f"Error: cannot prepare latency bucket on {self.config.name}: {e}")
            raise
        try:
            await self.preparer.ensure_durability_bucket()
        except Exception as e:
            self.state = ProbeState.FAILED
            logger.error(
                f"Error: cannot prepare durability bucket on {self.config.name}: {e}"
            )
            raise

        self.state = ProbeState.DISPATCHING
        self._dispatch(self.latency_checker.run(), "latency")
        self._dispatch(self.durability_checker.run(), "durability")
        self.state = ProbeState.IDLE

    def _dispatch(self, coro, kind: str):
        task = asyncio.create_task(coro, name=f"{self.config.name}-{kind}-check")
        self._inflight.add(task)
        task.add_done_callback(self._on_check_done)

    def _on_check_done(self, task: asyncio.Task):
        self._inflight.discard(task)
        if task.cancelled():
            logger.info(f"{task.get_name()} cancelled")
            return
        exc = task.exception()
        if isinstance(exc, DurabilitySeedError):
            # The bucket now exists but is only partly seeded and will not be reseeded
            logger.error(
                f"{task.get_name()} left {exc.bucket} partly seeded: {exc}"
            )
        elif exc is not None:
            logger.warning(f"{task.get_name()} failed: {exc}")

    async def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the checks in flight at call time to finish.

        Returns:
            bool: True if they all finished within ``timeout``.
        """
        pending = set(self._inflight)
        if not pending:
            return True
        _, pending = await asyncio.wait(pending, timeout=timeout)
        return not pending

    async def abandon(self):
        """Cancel the checks in flight and wait until they have stopped."""
        tasks = list(self._inflight)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def shutdown(self, timeout: Optional[float] = None):
        """
        Stop scheduling and give in-flight checks ``timeout`` seconds to
        finish before cancelling them.
        """
        self.stop()
        if not await self.join(timeout):
            logger.warning(
                f"Abandoning {len(self._inflight)} in-flight checks on {self.config.name}"
            )
            await self.abandon()
