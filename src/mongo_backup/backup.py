"""
Runs one backup cycle: validate, resolve, dump, upload and clean up.
"""
from typing import Optional

from loguru import logger

from mongo_backup.mongodb.connection import resolve_connection
from mongo_backup.mongodb.dump import ProcessRunner, dump
from mongo_backup.paths import backup_timestamp, prepare_staging_directory, staging_directory
from mongo_backup.retention import reconcile
from mongo_backup.storage.base import StorageBackend
from mongo_backup.storage.upload import upload
from mongo_backup.utils.datatypes import BackupArtifact, Config
from mongo_backup.utils.exceptions import InvalidConfiguration
from mongo_backup.utils.validation import is_valid_config


def backup_and_upload(config: Config,
                      runner: Optional[ProcessRunner] = None,
                      backend: Optional[StorageBackend] = None) -> BackupArtifact:
    """
    Dump the configured database, upload the archive to S3 and apply the
    local retention rules.
    Errors of the dump or the upload are raised unchanged. The cleanup is
    skipped in that case and the archive stays on disk.
    Runs must not share a staging directory concurrently.
    :param config: config of the run
    :param runner: process runner for mongodump. SubprocessRunner by default.
    :param backend: storage backend. S3Backend by default.
    :return: the uploaded backup
    :raises InvalidConfiguration: before any side effect
    :raises ConnectionParseError: for malformed connection URIs
    :raises DumpFailure: if mongodump fails
    :raises UploadFailure: if the upload fails
    """
    if not is_valid_config(config):
        raise InvalidConfiguration()

    connection = resolve_connection(config.database)
    artifact = BackupArtifact(
        database=connection.database,
        staging_dir=staging_directory(config),
        timestamp=backup_timestamp(config.timezone_offset),
    )
    prepare_staging_directory(config)
    logger.info(f'Creating a new backup: {artifact}')

    dump(connection, artifact.path, runner=runner, executable=config.mongodump)
    upload(artifact.path, artifact.file_name, config.storage, backend=backend)

    removed = reconcile(config, artifact.path, artifact.staging_dir)
    logger.info(f'{artifact} finished. Removed {len(removed)} local file(s).')
    return artifact
