"""
Hands the archive to the storage backend.
"""
from pathlib import Path

from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from mongo_backup.storage.base import StorageBackend
from mongo_backup.storage.s3 import S3Backend
from mongo_backup.utils.datatypes import StorageSpec
from mongo_backup.utils.exceptions import UploadFailure

DEFAULT_ACL = 'private'


def create_backend(storage: StorageSpec) -> StorageBackend:
    """
    Create the S3 backend for the storage settings.
    """
    return S3Backend(storage.access_key, storage.secret_key, storage.region,
                     endpoint=storage.endpoint_url)


def upload(local_path: str or Path, remote_name: str, storage: StorageSpec,
           backend: StorageBackend = None) -> None:
    """
    Upload the archive. The bucket is created first if it does not exist.
    :param local_path: path of the archive
    :param remote_name: object key
    :param storage: S3 settings
    :param backend: storage backend. S3Backend by default.
    :raises UploadFailure: if the file cannot be read or the backend fails
    """
    backend = backend or create_backend(storage)
    acl = storage.access_perm or DEFAULT_ACL
    logger.info(f'Uploading {remote_name} to bucket {storage.bucket_name}')
    try:
        with open(local_path, 'rb') as f:
            backend.create_bucket(storage.bucket_name, storage.region)
            backend.put_object(storage.bucket_name, remote_name, f, acl)
    except (ClientError, BotoCoreError, S3UploadFailedError, OSError) as e:
        raise UploadFailure(str(e)) from e
    logger.info(f'Uploaded {remote_name} to s3://{storage.bucket_name}/{remote_name}')
