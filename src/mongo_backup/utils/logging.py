import os
from pathlib import Path

from loguru import logger

LOG_FILE = 'mongo-backup.log'


def setup_logging(log_dir: Path, log_level: str) -> int:
    """
    Log to <log_dir>/mongo-backup.log in addition to stderr.
    The file is rotated at midnight and kept for 14 days. Variables are not
    dumped into tracebacks since they may contain credentials.
    :param log_dir: folder for the log file. Created if missing.
    :param log_level: minimum level of the file sink
    :return: loguru handler id of the sink
    """
    if not os.path.isdir(log_dir):
        os.makedirs(log_dir, exist_ok=True)
    format_string = '{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}'
    return logger.add(Path(log_dir) / LOG_FILE,
                      format=format_string,
                      rotation='00:00',
                      retention='14 days',
                      level=log_level,
                      backtrace=True,
                      diagnose=False)
