"""
Logging Configuration Module.

This module provides centralized logging configuration for the launcher,
including a rotating file handler and optional console output.

Standard output belongs to the child process, so console logging goes to
standard error and is only enabled in debug mode.
"""

import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

from src.app.constants import APP_VERSION
from src.core.paths import get_user_data_path

# Configuration
LOG_DIR_NAME = "logs"
LOG_FILENAME = "launcher.log"
MAX_BYTES = 1024 * 1024  # 1 MB
BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SafeRotatingFileHandler(RotatingFileHandler):
    """
    A RotatingFileHandler that handles Windows file locking errors gracefully.

    Two launchers started close together can hold the same log file open.
    On Windows rotation then fails with PermissionError; the handler keeps
    writing to the current file instead.
    """

    def doRollover(self) -> None:
        """Perform log file rotation, skipping it on Windows lock errors."""
        try:
            super().doRollover()
        except PermissionError:
            if sys.platform != "win32":
                raise


def setup_logging(
    debug_mode: bool = False,
    log_to_console: Optional[bool] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Configures the root logger with a rotating file handler
    and optional console handler.

    This function should be called once at launcher startup.

    Args:
        debug_mode (bool): If True, sets level to DEBUG. Defaults to False (INFO).
        log_to_console (bool): If True, adds a StreamHandler on stderr.
            Defaults to debug_mode.
        log_dir (str): Directory for the log file. Defaults to the user data
            directory.
    """
    if log_to_console is None:
        log_to_console = debug_mode

    # 1. Resolve Log Directory
    log_path: Optional[str]
    try:
        if log_dir is None:
            log_dir = get_user_data_path(LOG_DIR_NAME)
        os.makedirs(log_dir, exist_ok=True)
    except OSError as e:
        # Stay silent on stderr; failure paths must print a single diagnostic
        log_path = None
        file_error: Optional[OSError] = e
    else:
        log_path = os.path.join(log_dir, LOG_FILENAME)
        file_error = None

    # 2. Get Root Logger
    root_logger = logging.getLogger()

    # Remove existing handlers to avoid duplicates if called multiple times
    if root_logger.handlers:
        for handler in list(root_logger.handlers):
            handler.close()
        root_logger.handlers.clear()

    level = logging.DEBUG if debug_mode else logging.INFO
    root_logger.setLevel(level)

    # 3. Formatter
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # 4. File Handler (Safe Rotating - handles Windows file locking)
    if log_path is not None:
        try:
            file_handler = SafeRotatingFileHandler(
                log_path,
                maxBytes=MAX_BYTES,
                backupCount=BACKUP_COUNT,
                encoding="utf-8",
                delay=True,
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(level)
            root_logger.addHandler(file_handler)
        except OSError as e:
            file_error = e

    # 5. Console Handler
    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    # 6. Initial Log
    logging.info("=" * 60)
    logging.info(
        f"Launcher {APP_VERSION} session started at {datetime.now().isoformat()}"
    )
    logging.info("=" * 60)
    if file_error is not None:
        logging.debug(f"File logging disabled: {file_error}")


def get_logger(name: str) -> logging.Logger:
    """
    Convenience function to get a logger with the given name.

    Args:
        name (str): The name of the logger (usually __name__).

    Returns:
        logging.Logger: The logger instance.
    """
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """
    Explicitly closes all logging handlers to release file locks.
    """
    logging.shutdown()
