"""
Staging directory and file name of backups.
"""
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

from mongo_backup.utils.converters import current_time, format_file_name
from mongo_backup.utils.datatypes import Config

LOCAL_BACKUP_FOLDER = 'backups'


def local_backup_dir(config: Config) -> Path:
    return config.base_dir / LOCAL_BACKUP_FOLDER


def staging_directory(config: Config) -> Path:
    """
    Folder the archive is written to.
    base_dir/backups if local backups are kept, the temp dir of the OS otherwise.
    """
    if config.keep_local_backups:
        return local_backup_dir(config).resolve()
    return Path(tempfile.gettempdir()).resolve()


def prepare_staging_directory(config: Config) -> None:
    """
    Create the local backup folder if local backups are kept.
    """
    if config.keep_local_backups:
        folder = local_backup_dir(config)
        if not folder.is_dir():
            logger.info(f'Creating local backup folder {folder}')
            folder.mkdir(parents=True, exist_ok=True)


def backup_timestamp(timezone_offset: int, now: Optional[datetime] = None) -> datetime:
    """
    Naive local time of the backup, second precision.
    """
    return current_time(timezone_offset, now).replace(tzinfo=None, microsecond=0)


def backup_file_name(database: str, timezone_offset: int,
                     now: Optional[datetime] = None) -> str:
    """
    <database>_<YYYY-MM-DDTHH-mm-ss>.gz in the configured timezone.
    Two backups of the same database within one second get the same name.
    :param database: name of the database
    :param timezone_offset: hours if abs(value) < 16, minutes otherwise
    :param now: clock reading. Current time by default.
    :return: file name
    """
    return format_file_name(database, backup_timestamp(timezone_offset, now))
