import logging
from typing import List

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError

from abstractions.storage_client import StorageClient

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = ("404", "NoSuchBucket", "NotFound")
DEFAULT_REGION = "us-east-1"


class BotoStorageClient(StorageClient):
    """
    Storage client for S3-compatible endpoints backed by boto3.
    """

    def __init__(
        self,
        endpoint_url: str,
        access_key: str,
        secret_key: str,
        region: str = DEFAULT_REGION,
    ):
        """
        Initialize the client.

        Args:
            endpoint_url (str): Full URL of the endpoint, scheme included.
            access_key (str): Access key id.
            secret_key (str): Secret access key.
            region (str): Region used for request signing.
        """
        self.endpoint_url = endpoint_url
        self.region = region
        # The probe does its own retrying and must see every failure
        self._client = boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=BotoConfig(
                retries={"max_attempts": 1, "mode": "standard"},
                s3={"addressing_style": "path"},
            ),
        )
        logger.info(f"BotoStorageClient created for {endpoint_url}")

    def list_buckets(self) -> List[str]:
        resp = self._client.list_buckets()
        return [b["Name"] for b in resp.get("Buckets", [])]

    def bucket_exists(self, bucket: str) -> bool:
        try:
            self._client.head_bucket(Bucket=bucket)
            return True
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in NOT_FOUND_CODES:
                return False
            raise

    def make_bucket(self, bucket: str) -> None:
        # us-east-1 is the default location and rejects an explicit constraint
        if self.region == DEFAULT_REGION:
            self._client.create_bucket(Bucket=bucket)
        else:
            self._client.create_bucket(
                Bucket=bucket,
                CreateBucketConfiguration={"LocationConstraint": self.region},
            )

    def set_bucket_lifecycle(self, bucket: str, policy: dict) -> None:
        self._client.put_bucket_lifecycle_configuration(
            Bucket=bucket, LifecycleConfiguration=policy
        )

    def put_object(self, bucket: str, key: str, data: bytes, size: int) -> None:
        self._client.put_object(Bucket=bucket, Key=key, Body=data, ContentLength=size)

    def get_object(self, bucket: str, key: str) -> bytes:
        resp = self._client.get_object(Bucket=bucket, Key=key)
        return resp["Body"].read()

    def remove_object(self, bucket: str, key: str) -> None:
        self._client.delete_object(Bucket=bucket, Key=key)
