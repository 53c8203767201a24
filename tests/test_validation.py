"""
Unit tests for the config validation (mongo_backup/utils/validation.py).
"""
import pytest

from mongo_backup.utils.datatypes import Config, ConnectionSpec, StorageSpec
from mongo_backup.utils.validation import is_valid_config


class TestIsValidConfig:
    """Test the structural checks of is_valid_config."""

    def test_uri_config_is_valid(self, make_config):
        assert is_valid_config(make_config())

    def test_structured_config_is_valid(self, make_config, connection_spec):
        assert is_valid_config(make_config(database=connection_spec))

    def test_none_is_invalid(self):
        assert not is_valid_config(None)

    def test_missing_storage_is_invalid(self, make_config):
        assert not is_valid_config(make_config(storage=None))

    def test_missing_database_is_invalid(self, make_config):
        assert not is_valid_config(make_config(database=None))
        assert not is_valid_config(make_config(database=''))

    @pytest.mark.parametrize('field', ['access_key', 'secret_key', 'region', 'bucket_name'])
    def test_empty_storage_field_is_invalid(self, make_config, field):
        storage = StorageSpec(access_key='a', secret_key='b', region='us-east-1',
                              bucket_name='backups')
        setattr(storage, field, '')
        assert not is_valid_config(make_config(storage=storage))

    def test_access_perm_is_optional(self, make_config):
        storage = StorageSpec('a', 'b', 'us-east-1', 'backups', access_perm=None)
        assert is_valid_config(make_config(storage=storage))

    def test_empty_host_is_invalid(self, make_config):
        spec = ConnectionSpec(host='', port=27017, database='sales')
        assert not is_valid_config(make_config(database=spec))

    def test_empty_database_name_is_invalid(self, make_config):
        spec = ConnectionSpec(host='localhost', port=27017, database='')
        assert not is_valid_config(make_config(database=spec))

    @pytest.mark.parametrize('port', [None, 0, -1, 65536, '27017', True])
    def test_invalid_port_is_rejected(self, make_config, port):
        spec = ConnectionSpec(host='localhost', port=port, database='sales')
        assert not is_valid_config(make_config(database=spec))

    @pytest.mark.parametrize('port', [1, 27017, 65535])
    def test_valid_port_is_accepted(self, make_config, port):
        spec = ConnectionSpec(host='localhost', port=port, database='sales')
        assert is_valid_config(make_config(database=spec))

    def test_uri_syntax_is_not_checked(self, make_config):
        assert is_valid_config(make_config(database='not a uri'))

    def test_unknown_database_type_is_invalid(self, storage_spec):
        assert not is_valid_config(Config(database={'host': 'localhost'}, storage=storage_spec))

    @pytest.mark.parametrize('cap', [-1, -5, True, '3'])
    def test_invalid_backup_cap_is_rejected(self, make_config, cap):
        assert not is_valid_config(make_config(max_local_backups=cap))

    @pytest.mark.parametrize('cap', [None, 0, 1, 10])
    def test_valid_backup_cap_is_accepted(self, make_config, cap):
        assert is_valid_config(make_config(max_local_backups=cap))
