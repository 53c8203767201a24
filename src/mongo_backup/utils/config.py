"""
config handling for dynaconf
"""
import logging
import os
import sys
from importlib.resources import files
from pathlib import Path

from dynaconf import Dynaconf, Validator

from mongo_backup.utils.datatypes import Config, ConnectionSpec, StorageSpec


def parse_config(config_folder: Path) -> Dynaconf:
    """
    Parse the config files in config_folder with dynaconf.
    Creates default.toml in the folder if it does not exist yet.
    :param config_folder: folder containing default.toml and config.toml
    :return: Dynaconf settings
    """
    default_config = config_folder / 'default.toml'
    if not os.path.isfile(default_config):
        try:
            config_folder.mkdir(parents=True, exist_ok=True)
            with open(default_config, 'w', encoding='utf-8') as f:
                f.write(files('mongo_backup.data').joinpath('default.toml').read_text())
        except Exception as e:
            logging.critical(f'Failed to create default config {default_config}. '
                             'Consider creating the folder writeable for this user '
                             f'or choose a different path. Error: {e}')
            sys.exit(1)

    settings = Dynaconf(
        envvar_prefix='MONGO_BACKUP',
        settings_files=['default.toml', 'config.toml'],
        root_path=str(config_folder),
        merge_enabled=True,
        validators=[
            Validator('mongodb.port', cast=int, default=27017),
            Validator('backup.keep_local_backups', cast=bool, default=False),
            Validator('backup.max_local_backups', cast=int, default=0),
            Validator('backup.timezone_offset', cast=int, default=0),
            Validator('backup.mongodump', default='mongodump'),
        ]
    )
    return settings


def config_from_settings(settings: Dynaconf) -> Config:
    """
    Build the run config from the parsed settings.
    mongodb.uri takes precedence over the structured mongodb fields.
    :param settings: dynaconf settings
    :return: Config for backup_and_upload
    """
    uri = settings('mongodb.uri', default=None)
    if uri:
        database = uri
    else:
        database = ConnectionSpec(
            host=settings('mongodb.host', default='localhost'),
            port=int(settings('mongodb.port', default=27017)),
            database=settings('mongodb.database', default=None),
            username=settings('mongodb.username', default=None) or None,
            password=settings('mongodb.password', default=None) or None,
            ssl=bool(settings('mongodb.ssl', default=False)),
            authentication_database=settings('mongodb.authentication_database',
                                             default=None) or None,
        )
    storage = StorageSpec(
        access_key=settings('s3.access_key', default=None),
        secret_key=settings('s3.secret_key', default=None),
        region=settings('s3.region', default=None),
        bucket_name=settings('s3.bucket_name', default=None),
        access_perm=settings('s3.access_perm', default=None) or None,
        endpoint_url=settings('s3.endpoint_url', default=None) or None,
    )
    base_dir = settings('backup.dir', default=None)
    return Config(
        database=database,
        storage=storage,
        keep_local_backups=bool(settings('backup.keep_local_backups', default=False)),
        max_local_backups=int(settings('backup.max_local_backups', default=0)) or None,
        timezone_offset=int(settings('backup.timezone_offset', default=0)),
        base_dir=Path(base_dir) if base_dir else None,
        mongodump=settings('backup.mongodump', default='mongodump'),
    )
