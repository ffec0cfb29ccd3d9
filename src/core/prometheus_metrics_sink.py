import logging
from typing import Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Summary

from abstractions.metrics_sink import MetricsSink
from contracts.measurement import MeasurementOutcome

logger = logging.getLogger(__name__)

LABELS = ["operation", "endpoint"]


class PrometheusMetricsSink(MetricsSink):
    """
    Metrics sink exporting probe measurements as Prometheus instruments.

    All probes of a process share one sink; their series are told apart by
    the ``endpoint`` label.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Initialize the sink and register its instruments.

        Args:
            registry (Optional[CollectorRegistry]): Registry to register the
                instruments with. Defaults to the process-wide registry.
        """
        self.registry = registry if registry is not None else REGISTRY
        self.LATENCY = Summary(
            "s3_latency_seconds",
            "Latency for operation on the S3 endpoint",
            LABELS,
            registry=self.registry,
        )
        self.TOTAL = Counter(
            "s3_request_total",
            "Total number of requests on S3 endpoint",
            LABELS,
            registry=self.registry,
        )
        self.SUCCESS = Counter(
            "s3_request_success_total",
            "Total number of successful requests on S3 endpoint",
            LABELS,
            registry=self.registry,
        )
        logger.info("PrometheusMetricsSink initialized.")

    def record(self, outcome: MeasurementOutcome) -> None:
        labels = (outcome.operation.value, outcome.endpoint)
        self.TOTAL.labels(*labels).inc()
        self.LATENCY.labels(*labels).observe(outcome.elapsed_seconds)
        if outcome.success:
            self.SUCCESS.labels(*labels).inc()
        logger.debug(
            f"Recorded {outcome.operation.value} on {outcome.endpoint}: "
            f"{outcome.elapsed_seconds:.4f}s success={outcome.success}"
        )
