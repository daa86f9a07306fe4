"""Structured logging infrastructure with verbosity levels and progress tracking."""

import logging
import logging.handlers
import time
from typing import Optional

import colorlog

LOGGER_NAME = 'docc2html'
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


def resolve_log_level(verbose: bool = False, silent: bool = False,
                      level: Optional[str] = None) -> int:
    """
    Map the -v/-s switches or an explicit level name to a logging level.

    An explicit level wins, then verbose, then silent. The default is INFO.

    Raises:
        ValueError: If ``level`` is not a known level name
    """
    if level:
        if level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{level}'. Must be one of: {list(LOG_LEVELS)}")
        return getattr(logging, level.upper())
    if verbose:
        return logging.DEBUG
    if silent:
        return logging.ERROR
    return logging.INFO


def setup_logging(
    verbose: bool = False,
    silent: bool = False,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    level: Optional[str] = None
) -> logging.Logger:
    """
    Configure the ``docc2html`` logger.

    Calling it again replaces the handlers of the previous call.

    Args:
        verbose: Trace everything (DEBUG)
        silent: Only report errors (ERROR)
        log_file: Optional path to a rotating log file
        log_format: Optional custom log format string
        date_format: Optional custom date format string
        level: Optional explicit log level name, overrides verbose/silent

    Returns:
        Configured logger instance
    """
    log_level = resolve_log_level(verbose, silent, level)
    log_format = log_format or DEFAULT_LOG_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()

    console_handler = colorlog.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(colorlog.ColoredFormatter(
        fmt='%(log_color)s' + log_format,
        datefmt=date_format,
        log_colors=LOG_COLORS
    ))
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
        except OSError as e:
            logger.warning(f"Failed to set up file logging: {e}")
        else:
            file_handler.setLevel(log_level)
            file_handler.setFormatter(logging.Formatter(fmt=log_format, datefmt=date_format))
            logger.addHandler(file_handler)
            logger.debug(f"Logging to file: {log_file}")

    logger.debug(f"Log level: {logging.getLevelName(log_level)}")

    return logger


class ProgressTracker:
    """Counts processed items and logs one summary line when the block ends."""

    def __init__(self, total_items: int, item_type: str = "items"):
        """
        Initialize progress tracker.

        Args:
            total_items: Number of items the block will process
            item_type: Plural noun used in log lines (e.g., "archives")
        """
        self.total_items = total_items
        self.item_type = item_type
        self.successful_items = 0
        self.failed_items = 0
        self.start_time: Optional[float] = None
        self.logger = logging.getLogger(LOGGER_NAME)

    @property
    def processed_items(self) -> int:
        return self.successful_items + self.failed_items

    def __enter__(self) -> 'ProgressTracker':
        self.start_time = time.time()
        self.logger.debug(f"Processing {self.total_items} {self.item_type}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # An aborted block is reported by whoever handles the exception
        if self.start_time is None or exc_type is not None:
            return

        if self.failed_items == 0:
            log_method = self.logger.info
        elif self.failed_items == self.total_items:
            log_method = self.logger.error
        else:
            log_method = self.logger.warning

        log_method(
            f"{self.item_type.capitalize()}: {self.successful_items}/{self.total_items} "
            f"without errors, {self.failed_items} with errors "
            f"({time.time() - self.start_time:.1f}s)"
        )

    def increment(self, success: bool = True) -> None:
        """
        Count one processed item.

        Args:
            success: Whether the item was processed without errors
        """
        if success:
            self.successful_items += 1
        else:
            self.failed_items += 1

        self.logger.debug(
            f"Processed {self.processed_items}/{self.total_items} {self.item_type}"
            f"{'' if success else ' (with errors)'}"
        )


def log_section(title: str) -> None:
    """Log a banner header for a pipeline phase."""
    logger = logging.getLogger(LOGGER_NAME)

    separator = "=" * 60
    logger.info(separator)
    logger.info(f"  {title.upper()}")
    logger.info(separator)


def log_options(options, archive_paths, target_path) -> None:
    """
    Log the effective export settings.

    Args:
        options: ExportOptions in effect
        archive_paths: Archive bundle paths to export
        target_path: Output directory
    """
    logger = logging.getLogger(LOGGER_NAME)

    log_section("Configuration")

    for archive_path in archive_paths:
        logger.info(f"Archive: {archive_path}")
    logger.info(f"Target: {target_path}")
    for name, value in options.to_dict().items():
        logger.info(f"{name.replace('_', ' ').title()}: {value}")


__all__ = [
    'LOGGER_NAME',
    'LOG_LEVELS',
    'resolve_log_level',
    'setup_logging',
    'ProgressTracker',
    'log_section',
    'log_options'
]
