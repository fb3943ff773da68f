import logging
import logging.handlers
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Any

from tqdm import tqdm

FAILURE_LOGGER_NAME = 'lidarscene.failures'


class LogLevel(str, Enum):
    """Log level enum for configuration."""

    DEBUG = 'DEBUG'
    INFO = 'INFO'
    WARNING = 'WARNING'
    ERROR = 'ERROR'
    CRITICAL = 'CRITICAL'


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler for tqdm progress bars.

    Writes to stderr, next to the bars, so log messages don't break their display.
    """

    def emit(self, record: Any) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=sys.stderr)
            self.flush()
        except Exception:  # noqa: BLE001
            self.handleError(record)


def setup_logging(
    level: str | LogLevel = LogLevel.INFO,
    log_file: str | Path | None = None,
    log_format: str = '%(levelname)-7s | %(name)s | %(message)s',
    date_format: str = '%H:%M:%S',
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """
    Configure application-wide logging.

    Args:
        level: The minimum logging level to display
        log_file: Optional path to a log file (enables file logging)
        log_format: The format string for log messages
        date_format: The format string for timestamps
        max_bytes: Size at which the log file is rotated
        backup_count: Number of rotated log files to keep
    """
    if isinstance(level, str):
        level = LogLevel(level.upper())

    numeric_level = getattr(logging, level.value)

    handlers: list[logging.Handler] = [TqdmLoggingHandler()]

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
        )
        file_handler.setFormatter(logging.Formatter(log_format, date_format))
        handlers.append(file_handler)

    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        datefmt=date_format,
        handlers=handlers,
    )

    logger = logging.getLogger(__name__)
    logger.debug('Logging configured: level=%s, file=%s', level.value, log_file)


@contextmanager
def failure_log(path: Path) -> Iterator[logging.Logger]:
    """
    Logger writing bare lines to `path` for the duration of a batch.

    The file is truncated and created on entry, even if nothing gets logged.
    """
    logger = logging.getLogger(FAILURE_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    handler = logging.FileHandler(path, mode='w', encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)
    try:
        yield logger
    finally:
        logger.removeHandler(handler)
        handler.close()
