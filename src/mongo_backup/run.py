"""
Creates MongoDB backups with mongodump and uploads them to S3.
"""
import sys
from pathlib import Path

import click
from dynaconf import Dynaconf
from loguru import logger

from mongo_backup.backup import backup_and_upload
from mongo_backup.paths import local_backup_dir
from mongo_backup.retention import list_local_backups
from mongo_backup.utils.config import config_from_settings, parse_config
from mongo_backup.utils.converters import parse_file_name
from mongo_backup.utils.datatypes import Config
from mongo_backup.utils.exceptions import BackupError
from mongo_backup.utils.logging import setup_logging


class CtxArgs:
    """
    Cache object for arguments between click group and commands.
    """

    def __init__(self, config_folder: Path, settings: Dynaconf, config: Config):
        self.config_folder = Path(config_folder)
        self.settings = settings
        self.config = config


@click.group()
@click.option(
    '-c',
    '--config-folder',
    help='Folder where the config files are stored. /etc/mongo-backup by default.'
         ' Make sure that the user has read and write access to the folder.',
    default='/etc/mongo-backup',
)
@click.pass_context
@click.version_option(package_name='mongo_backup')
def main(ctx, config_folder):
    """
    Back up a MongoDB database to S3.
    """
    try:
        settings = parse_config(Path(config_folder))
        log_dir = settings('logging.dir', default=None)
        if log_dir:
            setup_logging(Path(log_dir), settings('logging.level', default='INFO'))
        config = config_from_settings(settings)
    except Exception as e:
        logger.exception(f'Error during config parsing! {e}')
        sys.exit(1)
    ctx.obj = CtxArgs(config_folder, settings, config)


@main.command('backup')
@click.pass_context
def backup_command(ctx):
    """
    Dump the database, upload the archive and clean up local backups.
    """
    args: CtxArgs = ctx.obj
    try:
        artifact = backup_and_upload(args.config)
    except BackupError as e:
        logger.critical(f'Backup failed! ({type(e).__name__}): {e}')
        sys.exit(1)
    click.secho(f'Uploaded {artifact.file_name} to {args.config.storage.bucket_name}',
                fg='green')


@main.command('list')
@click.pass_context
def list_command(ctx):
    """
    List the backups kept in the local backup folder.
    """
    args: CtxArgs = ctx.obj
    folder = local_backup_dir(args.config)
    backups = []
    if folder.is_dir():
        for file in list_local_backups(folder):
            try:
                backups.append(parse_file_name(file))
            except ValueError:
                logger.warning(f'Invalid file name in backup dir: {file.name}')
    if len(backups) == 0:
        click.secho('None! You have to create a backup first...', fg='red',
                    file=sys.stderr)
        sys.exit(1)

    output = click.style(f'Listing backups in {folder}:\n', fg='green', bold=True)
    for data in backups:
        output += click.style(f'{data["path"].name}', fg='cyan')
        output += click.style(
            f' @ {data["timestamp"].strftime("%Y-%m-%d %H:%M:%S")} ({data["database"]})\n',
            fg='yellow'
        )
    click.echo(output)


if __name__ == '__main__':
    main()
