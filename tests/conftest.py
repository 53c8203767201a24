"""
Shared pytest fixtures.

Provides fakes for the two external collaborators (mongodump and S3) and
factories for configs.
"""
import subprocess
import tempfile

import pytest

from mongo_backup.mongodb.dump import ProcessRunner
from mongo_backup.storage.base import StorageBackend
from mongo_backup.utils.datatypes import Config, ConnectionSpec, StorageSpec


class FakeRunner(ProcessRunner):
    """
    Records commands and writes a fake archive instead of running mongodump.
    """

    def __init__(self, returncode: int = 0, stderr: str = '', spawn_error: OSError = None):
        self.returncode = returncode
        self.stderr = stderr
        self.spawn_error = spawn_error
        self.commands = []

    def run(self, args):
        self.commands.append(list(args))
        if self.spawn_error:
            raise self.spawn_error
        for arg in args:
            if arg.startswith('--archive='):
                with open(arg.split('=', 1)[1], 'wb') as f:
                    f.write(b'archive')
        return subprocess.CompletedProcess(args, self.returncode, '', self.stderr)


class FakeBackend(StorageBackend):
    """
    In-memory storage backend.
    """

    def __init__(self, error: Exception = None):
        self.error = error
        self.buckets = {}
        self.calls = []

    def create_bucket(self, bucket, region):
        self.calls.append(('create_bucket', bucket, region))
        self.buckets.setdefault(bucket, {})

    def put_object(self, bucket, key, body, acl):
        self.calls.append(('put_object', bucket, key, acl))
        if self.error:
            raise self.error
        self.buckets[bucket][key] = body.read()


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def storage_spec():
    return StorageSpec(access_key='a', secret_key='b', region='us-east-1',
                       bucket_name='backups')


@pytest.fixture
def connection_spec():
    return ConnectionSpec(host='localhost', port=27017, database='sales')


@pytest.fixture
def temp_dir(tmp_path, monkeypatch):
    """
    Redirect the temp dir of the OS to an isolated folder.
    """
    folder = tmp_path / 'tmp'
    folder.mkdir()
    monkeypatch.setattr(tempfile, 'tempdir', str(folder))
    return folder


@pytest.fixture
def make_config(tmp_path, storage_spec):
    """
    Factory for configs with local backups below tmp_path.
    """
    def _make(database='mongodb://localhost:27017/sales', **kwargs):
        kwargs.setdefault('storage', storage_spec)
        kwargs.setdefault('base_dir', tmp_path)
        return Config(database=database, **kwargs)
    return _make
