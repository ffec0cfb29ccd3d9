import asyncio
import logging
import time

from abstractions.metrics_sink import MetricsSink
from contracts.measurement import MeasurementOutcome, Operation

logger = logging.getLogger(__name__)


class MeasurementRecorder:
    """
    Times storage operations and reports each invocation to a metrics sink.
    """

    def __init__(self, sink: MetricsSink, endpoint_label: str):
        self.sink = sink
        self.endpoint_label = endpoint_label

    async def measure(self, operation: Operation, func, *args):
        """
        Run a blocking operation in a worker thread and record its outcome.

        The request and its latency are recorded whatever the outcome; the
        success counter only moves when ``func`` returns. Exceptions are
        logged and re-raised, never retried.

        Args:
            operation (Operation): Label under which the call is recorded.
            func: Blocking callable performing the operation.
            *args: Positional arguments passed to ``func``.

        Returns:
            Whatever ``func`` returns.
        """
        start = time.perf_counter()
        success = False
        try:
            result = await asyncio.to_thread(func, *args)
            success = True
            return result
        except Exception as e:
            logger.error(
                f"Error while executing {operation.value} on {self.endpoint_label}: {e}"
            )
            raise
        finally:
            elapsed = time.perf_counter() - start
            self.sink.record(
                MeasurementOutcome(
                    operation=operation,
                    endpoint=self.endpoint_label,
                    elapsed_seconds=elapsed,
                    success=success,
                )
            )
