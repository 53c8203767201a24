from abc import ABC, abstractmethod
from typing import BinaryIO


class StorageBackend(ABC):
    """
    ABC for remote storage implementations.
    Implements how to create the destination bucket and store an object in it.
    """

    @abstractmethod
    def create_bucket(self, bucket: str, region: str) -> None:
        """
        Creates the bucket. An existing bucket is not an error.
        :param bucket: name of the bucket
        :param region: region for the bucket
        """
        pass

    @abstractmethod
    def put_object(self, bucket: str, key: str, body: BinaryIO, acl: str) -> None:
        """
        Stores body under key in the bucket.
        :param bucket: name of the bucket
        :param key: object key
        :param body: file object to read the content from
        :param acl: canned ACL of the object
        """
        pass
