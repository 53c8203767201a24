"""
Creates the archive of a database with mongodump.
"""
import shlex
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from loguru import logger

from mongo_backup.utils.datatypes import CanonicalConnection
from mongo_backup.utils.exceptions import DumpFailure


class ProcessRunner(ABC):
    """
    ABC for running external processes.
    """

    @abstractmethod
    def run(self, args: List[str]) -> subprocess.CompletedProcess:
        """
        Run the command and wait until it exits.
        :param args: executable and its arguments
        :return: the completed process
        :raises OSError: if the process could not be spawned
        """
        pass


class SubprocessRunner(ProcessRunner):
    """
    Runs the command with subprocess. No shell and no timeout.
    """

    def run(self, args: List[str]) -> subprocess.CompletedProcess:
        return subprocess.run(args, capture_output=True, text=True, check=False)


def build_dump_command(connection: CanonicalConnection, destination: str or Path,
                       executable: str = 'mongodump') -> List[str]:
    """
    Build the mongodump command for the connection.
    Only the first host of the connection is used.
    :param connection: connection to dump
    :param destination: path of the archive
    :param executable: name or path of mongodump
    :return: argument list
    """
    command = [executable, '-h', str(connection.host), f'--port={connection.port}',
               '-d', connection.database]
    if connection.username and connection.password:
        command += ['-p', connection.password, '-u', connection.username]
    elif connection.username:
        # no -p: mongodump asks for the password itself
        command += ['-u', connection.username]
    command += ['--quiet', '--gzip', f'--archive={destination}']
    if connection.ssl:
        command.append('--ssl')
    if connection.authentication_database:
        command.append(f'--authenticationDatabase={connection.authentication_database}')
    return command


def format_command(command: List[str]) -> str:
    """
    Shell representation of the command with the password masked.
    """
    parts = []
    mask_next = False
    for arg in command:
        parts.append('******' if mask_next else shlex.quote(arg))
        mask_next = arg == '-p'
    return ' '.join(parts)


def dump(connection: CanonicalConnection, destination: str or Path,
         runner: ProcessRunner = None, executable: str = 'mongodump') -> None:
    """
    Dump the database of the connection to destination.
    Blocks until mongodump exits.
    :param connection: connection to dump
    :param destination: path of the gzip archive
    :param runner: process runner. SubprocessRunner by default.
    :param executable: name or path of mongodump
    :raises DumpFailure: if mongodump cannot be started or exits with a nonzero code
    """
    runner = runner or SubprocessRunner()
    command = build_dump_command(connection, destination, executable)
    logger.info(f'Dumping database {connection.database} to {destination}')
    logger.debug(f'Running: {format_command(command)}')
    try:
        result = runner.run(command)
    except OSError as e:
        raise DumpFailure(f'Failed to start {executable}: {e}') from e
    if result.returncode != 0:
        message = (result.stderr or '').strip() or f'{executable} exited with {result.returncode}'
        raise DumpFailure(message, returncode=result.returncode)
    logger.info(f'Dump of {connection.database} finished')
