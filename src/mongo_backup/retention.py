"""
Cleanup of local backups after a successful upload.
"""
import os
from pathlib import Path
from typing import List

from loguru import logger

from mongo_backup.utils.datatypes import Config


def list_local_backups(folder: Path) -> List[Path]:
    """
    Plain files in folder, newest first by modification time.
    :param folder: local backup folder
    :return: list of files
    """
    files = [entry for entry in Path(folder).iterdir() if entry.is_file()]
    return sorted(files, key=lambda x: x.stat().st_mtime, reverse=True)


def clean_old_backups(folder: Path, max_local_backups: int) -> List[Path]:
    """
    Keep the newest max_local_backups files in folder and delete the others.
    :param folder: local backup folder
    :param max_local_backups: max files to keep
    :return: deleted files
    """
    removed = []
    for file in list_local_backups(folder)[max_local_backups:]:
        logger.info(f'Deleting a local backup: {file.name} (Max {max_local_backups} backups)')
        os.remove(file)
        removed.append(file)
    return removed


def reconcile(config: Config, artifact_path: Path, staging_dir: Path) -> List[Path]:
    """
    Remove the artifact or trim the local backups, depending on the config.
    :param config: config of the run
    :param artifact_path: archive created by this run
    :param staging_dir: folder containing the archive
    :return: deleted files
    """
    if not config.keep_local_backups:
        logger.debug(f'Removing {artifact_path}')
        os.remove(artifact_path)
        return [Path(artifact_path)]
    if config.max_local_backups:
        return clean_old_backups(staging_dir, config.max_local_backups)
    return []
