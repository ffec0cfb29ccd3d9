import logging

from abstractions.storage_client import StorageClient
from contracts.measurement import Operation
from contracts.probe_config import ProbeConfig
from core.measurement_recorder import MeasurementRecorder
from core.random_payload import random_hex, random_object

logger = logging.getLogger(__name__)

OBJECT_NAME_BYTES = 20


class LatencyChecker:
    """
    Runs the list, put, get, remove sequence against the latency bucket.
    """

    def __init__(
        self,
        client: StorageClient,
        config: ProbeConfig,
        recorder: MeasurementRecorder,
    ):
        self.client = client
        self.config = config
        self.recorder = recorder

    async def run(self):
        """
        Execute one latency check.

        Steps run strictly in order and the first failure aborts the rest.
        An object left behind by an aborted run is removed by the bucket's
        expiration policy.
        """
        bucket = self.config.latency_bucket_name
        object_name = random_hex(OBJECT_NAME_BYTES)
        object_size = self.config.latency_item_size
        object_data = random_object(object_size)

        await self.recorder.measure(Operation.LIST_BUCKETS, self.client.list_buckets)
        await self.recorder.measure(
            Operation.PUT_OBJECT,
            self.client.put_object,
            bucket,
            object_name,
            object_data,
            object_size,
        )
        await self.recorder.measure(
            Operation.GET_OBJECT, self.client.get_object, bucket, object_name
        )
        await self.recorder.measure(
            Operation.REMOVE_OBJECT, self.client.remove_object, bucket, object_name
        )
        logger.debug(f"Latency check on {self.config.name} completed for {object_name}")
