"""
Contains classes representing the configuration, connections and backups.
"""
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .converters import format_file_name


class ConnectionSpec:
    """
    Structured MongoDB connection settings.
    """

    def __init__(self, host: str, port: int, database: str,
                 username: Optional[str] = None, password: Optional[str] = None,
                 ssl: Optional[bool] = None,
                 authentication_database: Optional[str] = None):
        """
        :param host: hostname of the mongod/mongos
        :param port: port of the mongod/mongos
        :param database: database to dump
        :param username: default: None
        :param password: default: None
        :param ssl: default: None
        :param authentication_database: default: None
        """
        self.host = host
        self.port = port
        self.database = database
        self.username = username
        self.password = password
        self.ssl = ssl
        self.authentication_database = authentication_database

    def __repr__(self):
        return f'ConnectionSpec({self.host}:{self.port}/{self.database})'


class StorageSpec:
    """
    S3 destination and credentials.
    """

    def __init__(self, access_key: str, secret_key: str, region: str, bucket_name: str,
                 access_perm: Optional[str] = None, endpoint_url: Optional[str] = None):
        """
        :param access_key: AWS access key id
        :param secret_key: AWS secret access key
        :param region: region of the bucket
        :param bucket_name: bucket receiving the backups
        :param access_perm: canned ACL of uploaded objects. private by default.
        :param endpoint_url: custom endpoint for S3 compatible services
        """
        self.access_key = access_key
        self.secret_key = secret_key
        self.region = region
        self.bucket_name = bucket_name
        self.access_perm = access_perm
        self.endpoint_url = endpoint_url

    def __repr__(self):
        # never print the credentials
        return f'StorageSpec({self.bucket_name} @ {self.region})'


class Config:
    """
    Configuration of a single backup run.
    """

    def __init__(self, database: Union[ConnectionSpec, str, None],
                 storage: Optional[StorageSpec],
                 keep_local_backups: bool = False,
                 max_local_backups: Optional[int] = None,
                 timezone_offset: int = 0,
                 base_dir: Optional[Path] = None,
                 mongodump: str = 'mongodump'):
        """
        :param database: structured connection or a connection URI
        :param storage: S3 settings
        :param keep_local_backups: keep the artifact in base_dir/backups after the upload
        :param max_local_backups: max number of retained local backups. None = unlimited
        :param timezone_offset: hours if abs(value) < 16, minutes otherwise
        :param base_dir: folder containing the local backups folder. cwd by default.
        :param mongodump: name or path of the mongodump executable
        """
        self.database = database
        self.storage = storage
        self.keep_local_backups = keep_local_backups
        self.max_local_backups = max_local_backups
        self.timezone_offset = timezone_offset
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self.mongodump = mongodump


class CanonicalConnection:
    """
    Connection parameters both input shapes are normalized to.
    """

    def __init__(self, database: str, hosts: List[Tuple[str, int]],
                 scheme: str = 'mongodb',
                 username: Optional[str] = None, password: Optional[str] = None,
                 ssl: Optional[bool] = None,
                 authentication_database: Optional[str] = None):
        self.scheme = scheme
        self.username = username
        self.password = password
        self.database = database
        self.ssl = ssl
        self.authentication_database = authentication_database
        self.hosts = hosts

    @property
    def host(self) -> str:
        """
        First host. mongodump only gets the first one.
        """
        return self.hosts[0][0]

    @property
    def port(self) -> int:
        return self.hosts[0][1]

    def __eq__(self, other):
        if not isinstance(other, CanonicalConnection):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        hosts = ','.join(f'{host}:{port}' for host, port in self.hosts)
        return f'CanonicalConnection({self.scheme}://{hosts}/{self.database})'


class BackupArtifact:
    """
    The gzip archive created by one run.
    """

    def __init__(self, database: str, staging_dir: Path,
                 timestamp: Optional[datetime] = None,
                 file_name: Optional[str] = None):
        """
        :param database: name of the dumped database
        :param staging_dir: folder the archive is written to
        :param timestamp: local time of the backup
        :param file_name: name of the archive. Generated from database and timestamp if not set.
        """
        self.database = database
        self.staging_dir = Path(staging_dir)
        self.timestamp = timestamp if timestamp else datetime.now()
        self.file_name = file_name if file_name else format_file_name(database, self.timestamp)

    def __str__(self):
        return f'Backup {self.file_name}'

    @property
    def path(self) -> Path:
        """
        full path of the archive
        """
        return self.staging_dir / self.file_name

    @property
    def timestamp_str(self) -> str:
        """
        timestamp as string
        :return: timestamp as string
        """
        return self.timestamp.strftime('%Y-%m-%d %H:%M:%S')
