"""
Checks whether a configuration is sufficient to start a backup.
"""
from typing import Optional

from .datatypes import Config, ConnectionSpec

MAX_PORT = 65535


def _is_valid_port(port) -> bool:
    # bool is an int subclass. True is not a port.
    if isinstance(port, bool) or not isinstance(port, int):
        return False
    return 0 < port <= MAX_PORT


def _is_valid_cap(cap) -> bool:
    # None and 0 = no cap
    if cap is None:
        return True
    return isinstance(cap, int) and not isinstance(cap, bool) and cap >= 0


def is_valid_config(config: Optional[Config]) -> bool:
    """
    Validate the structure of the config. Does not check reachability,
    credentials or the syntax of connection URIs. Those fail when dumping
    or uploading.
    :param config: config to check
    :return: True if a backup can be attempted with the config
    """
    if not config or not config.database or not config.storage:
        return False
    storage = config.storage
    if not (storage.access_key and storage.secret_key
            and storage.region and storage.bucket_name):
        return False
    if not _is_valid_cap(config.max_local_backups):
        return False

    database = config.database
    if isinstance(database, str):
        return True
    if isinstance(database, ConnectionSpec):
        return bool(database.host and database.database and _is_valid_port(database.port))
    return False
