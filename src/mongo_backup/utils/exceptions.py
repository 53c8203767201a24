"""
Errors raised by the backup pipeline. Every one of them ends the current run.
"""
from typing import Optional


class BackupError(Exception):
    """
    Base class for all pipeline errors.
    """


class InvalidConfiguration(BackupError):
    """
    The configuration is not sufficient to start a backup.
    Raised before any side effect.
    """

    def __init__(self, message: str = 'Invalid Configuration'):
        super().__init__(message)


class ConnectionParseError(BackupError):
    """
    The connection URI could not be parsed.
    """


class DumpFailure(BackupError):
    """
    mongodump could not be spawned or exited with a nonzero code.
    """

    def __init__(self, message: str, returncode: Optional[int] = None):
        """
        :param message: raw error output of the process or the OS error
        :param returncode: exit code, None if the process never started
        """
        super().__init__(message)
        self.returncode = returncode


class UploadFailure(BackupError):
    """
    The storage backend rejected the upload or the artifact could not be read.
    """
