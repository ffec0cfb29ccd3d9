import logging
import random
from typing import List

from abstractions.storage_client import StorageClient
from contracts.errors import DurabilityLossError
from contracts.measurement import Operation
from contracts.probe_config import ProbeConfig
from core.bucket_preparer import BucketPreparer, durability_object_name
from core.measurement_recorder import MeasurementRecorder

logger = logging.getLogger(__name__)


class DurabilityChecker:
    """
    Verifies that objects seeded in the durability bucket are still retrievable.

    Each run fetches a random sample of the seeded objects rather than the
    whole population.
    """

    def __init__(
        self,
        client: StorageClient,
        config: ProbeConfig,
        preparer: BucketPreparer,
        recorder: MeasurementRecorder,
    ):
        self.client = client
        self.config = config
        self.preparer = preparer
        self.recorder = recorder

    def sample_indexes(self) -> List[int]:
        total = self.config.durability_item_total
        k = min(self.config.durability_sample_size, total)
        return sorted(random.sample(range(total), k))

    def _fetch(self, key: str) -> int:
        data = self.client.get_object(self.config.durability_bucket_name, key)
        if len(data) != self.config.durability_item_size:
            raise DurabilityLossError(key, self.config.durability_item_size, len(data))
        return len(data)

    async def run(self) -> List[str]:
        """
        Run one durability check.

        Returns:
            List[str]: Keys of sampled objects that could not be read back
            intact. Empty when nothing was lost.
        """
        # Recreates and reseeds the bucket if it was removed
        await self.preparer.ensure_durability_bucket()

        lost = []
        for index in self.sample_indexes():
            key = durability_object_name(index)
            try:
                await self.recorder.measure(
                    Operation.DURABILITY_GET_OBJECT, self._fetch, key
                )
            except Exception as e:
                lost.append(key)
                logger.error(
                    f"Durability loss on {self.config.name}: "
                    f"{self.config.durability_bucket_name}/{key} is not retrievable ({e})"
                )
        if lost:
            logger.error(
                f"Durability check on {self.config.name} found {len(lost)} lost objects"
            )
        return lost
