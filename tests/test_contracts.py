import unittest

from pydantic import ValidationError

from contracts.errors import DurabilityLossError, DurabilitySeedError, ProbeError
from contracts.measurement import MeasurementOutcome, Operation
from contracts.probe_config import ProbeConfig
from contracts.probe_state import ProbeState, ProbeStatus
from contracts.retry_policy import RetryPolicy
from fake_storage import make_config


class TestProbeConfigContract(unittest.TestCase):
    def test_defaults(self):
        config = ProbeConfig(
            name="s3",
            endpoint="s3.example.com",
            latency_bucket_name="latency",
            durability_bucket_name="durability",
            probe_rate_per_min=1,
        )
        self.assertEqual(config.durability_item_total, 10000)
        self.assertEqual(config.durability_item_size, 1024 * 1024)
        self.assertEqual(config.latency_item_size, 1024)
        self.assertEqual(config.seed_retry, RetryPolicy())
        self.assertEqual(config.seed_retry.base_delay, 5.0)

    def test_tick_interval(self):
        self.assertEqual(make_config(probe_rate_per_min=60).tick_interval_ms, 1000)
        self.assertEqual(make_config(probe_rate_per_min=1).tick_interval_ms, 60000)
        self.assertEqual(make_config(probe_rate_per_min=7).tick_interval_ms, 8571)
        self.assertAlmostEqual(
            make_config(probe_rate_per_min=120).tick_interval_seconds, 0.5
        )

    def test_rate_must_be_positive(self):
        with self.assertRaises(ValidationError):
            make_config(probe_rate_per_min=0)
        with self.assertRaises(ValidationError):
            make_config(probe_rate_per_min=-5)

    def test_bucket_names_must_differ(self):
        with self.assertRaises(ValidationError):
            make_config(latency_bucket_name="same", durability_bucket_name="same")

    def test_config_is_immutable(self):
        config = make_config()
        with self.assertRaises(ValidationError):
            config.probe_rate_per_min = 10

    def test_secrets_hidden_from_repr(self):
        s = repr(make_config(secret_key="topsecret"))
        self.assertNotIn("topsecret", s)

    def test_endpoint_url(self):
        self.assertEqual(
            make_config(endpoint="s3.local:9000").endpoint_url, "http://s3.local:9000"
        )
        self.assertEqual(
            make_config(endpoint="s3.local", secure=True).endpoint_url,
            "https://s3.local",
        )
        self.assertEqual(
            make_config(endpoint="https://s3.local").endpoint_url, "https://s3.local"
        )


class TestRetryPolicyContract(unittest.TestCase):
    def test_validation(self):
        with self.assertRaises(ValidationError):
            RetryPolicy(max_attempts=0)
        with self.assertRaises(ValidationError):
            RetryPolicy(max_duration=0)


class TestMeasurementContract(unittest.TestCase):
    def test_operation_names(self):
        self.assertEqual(
            [op.value for op in Operation],
            [
                "list_buckets",
                "put_object",
                "get_object",
                "remove_object",
                "durability_get_object",
            ],
        )

    def test_outcome_fields(self):
        outcome = MeasurementOutcome(
            operation="put_object", endpoint="s3", elapsed_seconds=0.2, success=True
        )
        self.assertEqual(outcome.operation, Operation.PUT_OBJECT)
        self.assertTrue(outcome.success)

    def test_outcome_rejects_unknown_operation(self):
        with self.assertRaises(ValidationError):
            MeasurementOutcome(
                operation="copy_object", endpoint="s3", elapsed_seconds=0.1, success=True
            )


class TestProbeStatusContract(unittest.TestCase):
    def test_status_serialization(self):
        status = ProbeStatus(name="s3", endpoint="s3.local", state=ProbeState.IDLE)
        self.assertEqual(status.model_dump(mode="json")["state"], "idle")
        self.assertEqual(status.in_flight_checks, 0)


class TestErrors(unittest.TestCase):
    def test_error_hierarchy(self):
        seed_error = DurabilitySeedError("bucket", "fake-item-3", 4)
        self.assertIsInstance(seed_error, ProbeError)
        self.assertIn("fake-item-3", str(seed_error))
        self.assertEqual(seed_error.attempts, 4)
        loss_error = DurabilityLossError("fake-item-1", 16, 3)
        self.assertIsInstance(loss_error, ProbeError)
        self.assertEqual(loss_error.actual_size, 3)


if __name__ == "__main__":
    unittest.main()
