"""
helpers for converting values from one format to a different one
"""
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

# no colons -> safe as file name on every fs
TIMESTAMP_FORMAT = '%Y-%m-%dT%H-%M-%S'
FILE_SUFFIX = '.gz'


def offset_to_timezone(offset: int) -> timezone:
    """
    Convert the configured offset to a timezone.
    Values with a magnitude below 16 are hours, everything else minutes.
    :param offset: offset in hours or minutes
    :return: fixed offset timezone
    """
    minutes = offset * 60 if -16 < offset < 16 else offset
    return timezone(timedelta(minutes=minutes))


def current_time(offset: int = 0, now: Optional[datetime] = None) -> datetime:
    """
    Current time shifted by the given offset.
    :param offset: offset in hours or minutes
    :param now: aware or UTC reading of the clock. datetime.now() by default.
    :return: aware datetime in the offset timezone
    """
    tz = offset_to_timezone(offset)
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(tz)


def parse_timestamp(timestamp: str) -> datetime:
    """
    Convert the given timestamp string to a datetime object.
    Format: TIMESTAMP_FORMAT
    :param timestamp: timestamp to parse
    :return: parsed timestamp
    """
    return datetime.strptime(timestamp, TIMESTAMP_FORMAT)


def format_timestamp(timestamp: datetime) -> str:
    """
    Convert the given datetime object to the correct string.
    :param timestamp: datetime object
    :return: formatted time
    """
    return timestamp.strftime(TIMESTAMP_FORMAT)


def format_file_name(database: str, timestamp: datetime) -> str:
    """
    <database>_<timestamp>.gz
    """
    return f'{database}_{format_timestamp(timestamp)}{FILE_SUFFIX}'


def parse_file_name(file_path: str or Path) -> dict:
    """
    Parse the given file_path.
    database_YYYY-MM-DDTHH-mm-ss.gz
    :param file_path:
    :return: Dictionary with keys: database, timestamp, path
    """
    match = re.match(r'^(.+)_(\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2})\.gz$', Path(file_path).name)
    if not match:
        raise ValueError(f'Invalid file name: {file_path}')
    return {
        'database': match.group(1),
        'timestamp': parse_timestamp(match.group(2)),
        'path': Path(file_path),
    }
