import unittest

from abstractions.metrics_sink import MetricsSink
from abstractions.storage_client import StorageClient
from contracts.measurement import MeasurementOutcome, Operation
from fake_storage import FakeStorageClient


class TestStorageClientAbstraction(unittest.TestCase):
    def test_cannot_instantiate_abstract(self):
        with self.assertRaises(TypeError):
            StorageClient()

    def test_partial_subclass_cannot_be_instantiated(self):
        class ListOnly(StorageClient):
            def list_buckets(self):
                return []

        with self.assertRaises(TypeError):
            ListOnly()

    def test_fake_client_implements_interface(self):
        client = FakeStorageClient(buckets=["a"])
        self.assertIsInstance(client, StorageClient)
        self.assertTrue(client.bucket_exists("a"))
        self.assertFalse(client.bucket_exists("b"))


class TestMetricsSinkAbstraction(unittest.TestCase):
    def test_cannot_instantiate_abstract(self):
        with self.assertRaises(TypeError):
            MetricsSink()

    def test_subclass_must_implement_record(self):
        class ListSink(MetricsSink):
            def __init__(self):
                self.outcomes = []

            def record(self, outcome):
                self.outcomes.append(outcome)

        sink = ListSink()
        outcome = MeasurementOutcome(
            operation=Operation.LIST_BUCKETS, endpoint="s3", elapsed_seconds=0.1, success=True
        )
        sink.record(outcome)
        self.assertEqual(sink.outcomes, [outcome])


if __name__ == "__main__":
    unittest.main()
