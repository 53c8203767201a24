"""
Unit tests for staging directories and backup names (mongo_backup/paths.py).
"""
from datetime import datetime, timezone
from pathlib import Path

import pytest
from freezegun import freeze_time

from mongo_backup.paths import (backup_file_name, prepare_staging_directory,
                                staging_directory)
from mongo_backup.utils.converters import offset_to_timezone, parse_file_name


class TestStagingDirectory:
    """Test where archives are written to."""

    def test_temp_dir_without_local_backups(self, make_config, temp_dir):
        config = make_config(keep_local_backups=False)
        assert staging_directory(config) == temp_dir.resolve()

    def test_backup_folder_with_local_backups(self, make_config, tmp_path):
        config = make_config(keep_local_backups=True)
        assert staging_directory(config) == (tmp_path / 'backups').resolve()

    def test_prepare_creates_backup_folder(self, make_config, tmp_path):
        config = make_config(keep_local_backups=True)
        prepare_staging_directory(config)
        assert (tmp_path / 'backups').is_dir()

        # existing folder is fine
        prepare_staging_directory(config)
        assert (tmp_path / 'backups').is_dir()

    def test_prepare_does_nothing_without_local_backups(self, make_config, tmp_path):
        prepare_staging_directory(make_config(keep_local_backups=False))
        assert not (tmp_path / 'backups').exists()


class TestBackupFileName:
    """Test the generated file names."""

    @freeze_time('2024-01-15 12:30:45')
    def test_utc(self):
        assert backup_file_name('sales', 0) == 'sales_2024-01-15T12-30-45.gz'

    @freeze_time('2024-01-15 12:30:45')
    def test_small_offsets_are_hours(self):
        assert backup_file_name('sales', 2) == 'sales_2024-01-15T14-30-45.gz'
        assert backup_file_name('sales', -5) == 'sales_2024-01-15T07-30-45.gz'

    @freeze_time('2024-01-15 12:30:45')
    def test_large_offsets_are_minutes(self):
        assert backup_file_name('sales', 330) == 'sales_2024-01-15T18-00-45.gz'
        assert backup_file_name('sales', -300) == 'sales_2024-01-15T07-30-45.gz'

    def test_explicit_clock_reading(self):
        now = datetime(2023, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc)
        assert backup_file_name('db', 60, now) == 'db_2024-01-01T00-59-59.gz'

    def test_name_contains_no_colons(self):
        assert ':' not in backup_file_name('sales', 0)

    def test_name_can_be_parsed(self):
        now = datetime(2024, 3, 1, 8, 0, 0, tzinfo=timezone.utc)
        data = parse_file_name(Path('/tmp') / backup_file_name('my_db', 0, now))

        assert data['database'] == 'my_db'
        assert data['timestamp'] == datetime(2024, 3, 1, 8, 0, 0)

    def test_invalid_name_cannot_be_parsed(self):
        with pytest.raises(ValueError):
            parse_file_name('notes.txt')


@pytest.mark.parametrize('offset, minutes', [
    (0, 0), (15, 900), (-15, -900), (16, 16), (-16, -16), (300, 300),
])
def test_offset_unit_is_inferred(offset, minutes):
    assert offset_to_timezone(offset).utcoffset(None).total_seconds() == minutes * 60
