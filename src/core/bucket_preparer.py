import asyncio
import logging

from tenacity import (
    AsyncRetrying,
    RetryError,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
)

from abstractions.storage_client import StorageClient
from contracts.errors import DurabilitySeedError
from contracts.probe_config import ProbeConfig
from core.random_payload import random_object

logger = logging.getLogger(__name__)

DURABILITY_OBJECT_PREFIX = "fake-item-"
SEED_PROGRESS_EVERY = 100

# Objects put by latency checks expire after a day, whether removed or not
LATENCY_LIFECYCLE_POLICY = {
    "Rules": [
        {
            "ID": "expire-bucket",
            "Filter": {"Prefix": ""},
            "Status": "Enabled",
            "Expiration": {"Days": 1},
        }
    ]
}


def durability_object_name(index: int) -> str:
    return f"{DURABILITY_OBJECT_PREFIX}{index}"


class BucketPreparer:
    """
    Establishes the buckets a probe needs before it runs its checks.

    Both ``ensure_*`` methods are idempotent and cheap once the bucket
    exists, so they are called on every tick.
    """

    def __init__(self, client: StorageClient, config: ProbeConfig):
        self.client = client
        self.config = config
        self._lock = asyncio.Lock()

    async def ensure_latency_bucket(self) -> bool:
        """
        Create the latency bucket and its expiration policy if it is missing.

        Returns:
            bool: True if the bucket was created by this call.
        """
        bucket = self.config.latency_bucket_name
        async with self._lock:
            if await asyncio.to_thread(self.client.bucket_exists, bucket):
                return False
            logger.info(f"Preparing latency bucket {bucket} on {self.config.name}")
            await asyncio.to_thread(self.client.make_bucket, bucket)
            try:
                await asyncio.to_thread(
                    self.client.set_bucket_lifecycle, bucket, LATENCY_LIFECYCLE_POLICY
                )
            except Exception as e:
                # Best effort: the bucket is usable without the policy
                logger.warning(
                    f"Could not set lifecycle policy on {bucket} ({self.config.name}): {e}"
                )
            return True

    async def ensure_durability_bucket(self) -> bool:
        """
        Create and seed the durability bucket if it is missing.

        Seeding happens only right after creation. A bucket that exists but
        was only partially seeded by an earlier process is left as is.

        Returns:
            bool: True if the bucket was created and seeded by this call.

        Raises:
            DurabilitySeedError: If an object could not be written within the
                configured retry policy.
        """
        bucket = self.config.durability_bucket_name
        async with self._lock:
            if await asyncio.to_thread(self.client.bucket_exists, bucket):
                return False
            await asyncio.to_thread(self.client.make_bucket, bucket)
            logger.info(f"Preparing durability bucket {bucket} on {self.config.name}")
            await self.seed_durability_bucket()
            return True

    async def seed_durability_bucket(self):
        total = self.config.durability_item_total
        size = self.config.durability_item_size
        for index in range(total):
            await self._put_with_retry(durability_object_name(index), random_object(size))
            if index % SEED_PROGRESS_EVERY == 0:
                logger.info(f"> {index} objects written ({index * 100 // total}%)")
        logger.info(
            f"Durability bucket {self.config.durability_bucket_name} seeded with {total} objects"
        )

    def _retrying(self) -> AsyncRetrying:
        policy = self.config.seed_retry
        stop = stop_after_attempt(policy.max_attempts)
        if policy.max_duration is not None:
            stop = stop | stop_after_delay(policy.max_duration)
        return AsyncRetrying(
            stop=stop,
            wait=wait_exponential(multiplier=policy.base_delay, max=policy.max_delay),
            retry=retry_if_exception_type(Exception),
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )

    async def _put_with_retry(self, key: str, data: bytes):
        bucket = self.config.durability_bucket_name
        try:
            async for attempt in self._retrying():
                with attempt:
                    await asyncio.to_thread(
                        self.client.put_object, bucket, key, data, len(data)
                    )
        except RetryError as e:
            last = e.last_attempt
            logger.error(
                f"Giving up on {key} in {bucket} after {last.attempt_number} attempts: "
                f"{last.exception()}"
            )
            raise DurabilitySeedError(bucket, key, last.attempt_number) from last.exception()
