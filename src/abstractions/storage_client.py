from abc import ABC, abstractmethod
from typing import List


class StorageClient(ABC):
    """
    Abstract base class for the object-storage operations used by a probe.

    All methods are blocking and raise on failure; callers run them off the
    event loop.
    """

    @abstractmethod
    def list_buckets(self) -> List[str]:
        """
        Return the names of all buckets visible with the configured credentials.
        """

    @abstractmethod
    def bucket_exists(self, bucket: str) -> bool:
        """
        Check whether a bucket exists.

        Args:
            bucket (str): Name of the bucket.

        Returns:
            bool: True if the bucket exists, False otherwise.
        """

    @abstractmethod
    def make_bucket(self, bucket: str) -> None:
        """
        Create a bucket.

        Args:
            bucket (str): Name of the bucket to create.
        """

    @abstractmethod
    def set_bucket_lifecycle(self, bucket: str, policy: dict) -> None:
        """
        Install a lifecycle configuration on a bucket.

        Args:
            bucket (str): Name of the bucket.
            policy (dict): Lifecycle configuration with a ``Rules`` list.
        """

    @abstractmethod
    def put_object(self, bucket: str, key: str, data: bytes, size: int) -> None:
        """
        Upload an object.

        Args:
            bucket (str): Target bucket.
            key (str): Object key.
            data (bytes): Object payload.
            size (int): Payload length in bytes.
        """

    @abstractmethod
    def get_object(self, bucket: str, key: str) -> bytes:
        """
        Download an object.

        Returns:
            bytes: The full object payload.
        """

    @abstractmethod
    def remove_object(self, bucket: str, key: str) -> None:
        """
        Delete an object.
        """
