"""
CLI Utilities Module.

Common utility functions for CLI tools.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def resolve_in(base_dir: str, relative_path: str) -> str:
    """
    Resolves a path the way the child process would see it.

    Args:
        base_dir: Directory the launcher changes into.
        relative_path: Path relative to that directory.

    Returns:
        str: Normalised absolute path.
    """
    return os.path.normpath(os.path.join(os.path.abspath(base_dir), relative_path))


def validate_directory(path: str) -> bool:
    """
    Validate that a directory exists and can be entered.

    Args:
        path: Directory path.

    Returns:
        True if valid, False otherwise.
    """
    if not Path(path).is_dir():
        logger.error(f"Directory not found: {path}")
        return False
    if not os.access(path, os.X_OK):
        logger.error(f"Directory not accessible: {path}")
        return False
    return True


def validate_executable(path: str) -> bool:
    """
    Validate that a file exists and is executable.

    Args:
        path: File path.

    Returns:
        True if valid, False otherwise.
    """
    if not Path(path).is_file():
        logger.error(f"File not found: {path}")
        return False
    if not os.access(path, os.X_OK):
        logger.error(f"File is not executable: {path}")
        return False
    return True


def validate_file(path: str) -> bool:
    """
    Validate that a regular file exists.

    Args:
        path: File path.

    Returns:
        True if valid, False otherwise.
    """
    if not Path(path).is_file():
        logger.error(f"File not found: {path}")
        return False
    return True
