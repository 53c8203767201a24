"""
Normalizes the accepted connection inputs to a CanonicalConnection.
"""
from typing import Union

from loguru import logger
from pymongo.errors import ConfigurationError
from pymongo.uri_parser import parse_uri

from mongo_backup.utils.datatypes import CanonicalConnection, ConnectionSpec
from mongo_backup.utils.exceptions import ConnectionParseError


def _uri_option(options, *names):
    """
    Case-insensitive lookup of a parsed URI option. First match of names wins.
    """
    lowered = {str(key).lower(): value for key, value in options.items()}
    for name in names:
        if name.lower() in lowered:
            return lowered[name.lower()]
    return None


def connection_from_uri(uri: str) -> CanonicalConnection:
    """
    Parse a connection URI with the URI parser of pymongo.
    mongodb+srv:// URIs are resolved with a DNS SRV lookup, DNS errors
    surface as ConnectionParseError.
    :param uri: mongodb:// or mongodb+srv:// URI
    :return: canonical connection
    :raises ConnectionParseError: if the URI is malformed or names no database
    """
    try:
        parsed = parse_uri(uri)
    except (ConfigurationError, ValueError) as e:
        raise ConnectionParseError(str(e)) from e

    if not parsed.get('database'):
        raise ConnectionParseError(f'No database in the connection URI: {uri.split("@")[-1]}')

    options = parsed.get('options') or {}
    return CanonicalConnection(
        scheme=uri.split('://', 1)[0],
        username=parsed.get('username'),
        password=parsed.get('password'),
        database=parsed['database'],
        ssl=_uri_option(options, 'tls', 'ssl'),
        authentication_database=_uri_option(options, 'authSource'),
        hosts=[(host, port) for host, port in parsed['nodelist']],
    )


def connection_from_spec(spec: ConnectionSpec) -> CanonicalConnection:
    """
    Map the structured fields. Empty credentials become None.
    """
    return CanonicalConnection(
        scheme='mongodb',
        username=spec.username or None,
        password=spec.password or None,
        database=spec.database,
        ssl=spec.ssl,
        authentication_database=spec.authentication_database,
        hosts=[(spec.host, spec.port)],
    )


def resolve_connection(database: Union[ConnectionSpec, str]) -> CanonicalConnection:
    """
    Resolve the database setting of the config to a CanonicalConnection.
    :param database: ConnectionSpec or connection URI
    :return: canonical connection
    """
    match database:
        case str():
            connection = connection_from_uri(database)
        case ConnectionSpec():
            connection = connection_from_spec(database)
        case _:
            raise TypeError(f'Unsupported connection type: {type(database).__name__}')
    logger.debug(f'Resolved connection: {connection}')
    return connection
