from typing import BinaryIO, Optional

import boto3
from botocore.exceptions import ClientError
from loguru import logger

from mongo_backup.storage.base import StorageBackend

# us-east-1 rejects an explicit LocationConstraint
DEFAULT_REGION = 'us-east-1'
EXISTING_BUCKET_CODES = ('BucketAlreadyOwnedByYou', 'BucketAlreadyExists')


class S3Backend(StorageBackend):
    """
    S3 backend for uploading backups with boto3.
    """

    def __init__(self, access_key_id: str, secret_access_key: str, region: str,
                 endpoint: Optional[str] = None):
        """
        :param access_key_id:
        :param secret_access_key:
        :param region:
        :param endpoint: custom endpoint for S3 compatible storages
        """
        self._region = region
        self.s3 = boto3.resource(
            's3',
            endpoint_url=endpoint,
            region_name=region,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            aws_session_token=None,
        )

    def create_bucket(self, bucket: str, region: str) -> None:
        params = {'Bucket': bucket}
        if region and region != DEFAULT_REGION:
            params['CreateBucketConfiguration'] = {'LocationConstraint': region}
        try:
            self.s3.create_bucket(**params)
            logger.info(f'Created bucket {bucket} in {region}')
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') not in EXISTING_BUCKET_CODES:
                raise
            logger.debug(f'Bucket {bucket} already exists')

    def put_object(self, bucket: str, key: str, body: BinaryIO, acl: str) -> None:
        # managed transfer, switches to multipart for large archives
        self.s3.Bucket(bucket).upload_fileobj(body, key, ExtraArgs={'ACL': acl})
