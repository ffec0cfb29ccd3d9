import threading
import unittest

from prometheus_client import CollectorRegistry

from contracts.measurement import MeasurementOutcome, Operation
from core.prometheus_metrics_sink import PrometheusMetricsSink


def sample(registry, name, operation, endpoint):
    return registry.get_sample_value(
        name, {"operation": operation, "endpoint": endpoint}
    )


class TestPrometheusMetricsSink(unittest.TestCase):
    def setUp(self):
        self.registry = CollectorRegistry()
        self.sink = PrometheusMetricsSink(self.registry)

    def _make_outcome(self, success, endpoint="s3-a", elapsed=0.25):
        return MeasurementOutcome(
            operation=Operation.PUT_OBJECT,
            endpoint=endpoint,
            elapsed_seconds=elapsed,
            success=success,
        )

    def test_success_counts_everything(self):
        self.sink.record(self._make_outcome(True))
        self.assertEqual(sample(self.registry, "s3_request_total", "put_object", "s3-a"), 1.0)
        self.assertEqual(
            sample(self.registry, "s3_request_success_total", "put_object", "s3-a"), 1.0
        )
        self.assertEqual(
            sample(self.registry, "s3_latency_seconds_count", "put_object", "s3-a"), 1.0
        )
        self.assertAlmostEqual(
            sample(self.registry, "s3_latency_seconds_sum", "put_object", "s3-a"), 0.25
        )

    def test_failure_skips_success_counter(self):
        self.sink.record(self._make_outcome(False))
        self.assertEqual(sample(self.registry, "s3_request_total", "put_object", "s3-a"), 1.0)
        self.assertIsNone(
            sample(self.registry, "s3_request_success_total", "put_object", "s3-a")
        )
        self.assertEqual(
            sample(self.registry, "s3_latency_seconds_count", "put_object", "s3-a"), 1.0
        )

    def test_endpoints_are_separate_series(self):
        self.sink.record(self._make_outcome(True, endpoint="s3-a"))
        self.sink.record(self._make_outcome(True, endpoint="s3-b"))
        self.sink.record(self._make_outcome(False, endpoint="s3-b"))
        self.assertEqual(sample(self.registry, "s3_request_total", "put_object", "s3-a"), 1.0)
        self.assertEqual(sample(self.registry, "s3_request_total", "put_object", "s3-b"), 2.0)

    def test_two_sinks_on_separate_registries(self):
        other_registry = CollectorRegistry()
        other = PrometheusMetricsSink(other_registry)
        other.record(self._make_outcome(True))
        self.assertIsNone(sample(self.registry, "s3_request_total", "put_object", "s3-a"))
        self.assertEqual(sample(other_registry, "s3_request_total", "put_object", "s3-a"), 1.0)

    def test_concurrent_records(self):
        def worker():
            for _ in range(200):
                self.sink.record(self._make_outcome(True))

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(
            sample(self.registry, "s3_request_total", "put_object", "s3-a"), 1000.0
        )


if __name__ == "__main__":
    unittest.main()
