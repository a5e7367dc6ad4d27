"""
Path Utility Module.
Resolves the launcher's own location and the bundle paths derived from it.
Also manages the user data directory used for logs.
"""

import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from src.app.constants import (
    APP_NAME,
    CURRENT_DIR,
    DIAG_EMPTY_EXECUTABLE,
    RESOURCES_SUFFIX,
)
from src.core.errors import EnvironmentSetupError


def _separators() -> str:
    return os.sep + (os.altsep or "")


def resolve_executable_dir(executable_path: str) -> str:
    """
    Returns the directory portion of the executable path.

    Follows POSIX dirname: trailing separators are ignored, the last
    component is removed, a bare name yields "." and the root stays the
    root.

    Args:
        executable_path: The invocation path of the running program.

    Returns:
        str: The directory containing the executable.

    Raises:
        EnvironmentSetupError: If the path is empty.
    """
    if not executable_path:
        raise EnvironmentSetupError(DIAG_EMPTY_EXECUTABLE)

    seps = _separators()
    stripped = executable_path.rstrip(seps)
    if not stripped:
        # Path made only of separators
        return executable_path[0]

    head = os.path.dirname(stripped)
    if not head:
        return CURRENT_DIR

    trimmed = head.rstrip(seps)
    return trimmed or head[0]


def build_resources_dir(executable_dir: str) -> str:
    """
    Concatenates the executable directory and the fixed resources suffix.

    No normalisation and no existence check: the directory change surfaces
    a missing tree.

    Args:
        executable_dir: Directory returned by resolve_executable_dir.

    Returns:
        str: The working directory for the child process.
    """
    return executable_dir + RESOURCES_SUFFIX


def get_executable_argument(argv: Optional[Sequence[str]] = None) -> str:
    """
    Returns the path that identifies the running launcher.

    Frozen bundles report the real binary through sys.executable; otherwise
    argument 0 is used.
    """
    if getattr(sys, "frozen", False):
        return sys.executable

    if argv is None:
        argv = sys.argv
    return argv[0] if argv else ""


def get_user_data_path(filename: str = "") -> str:
    """
    Returns the absolute path to a file in the user's application data directory.
    Creates the directory if it doesn't exist.

    Args:
        filename: Optional filename to append to the directory path.

    Returns:
        str: Absolute path to the user data directory or file.
    """
    if sys.platform == "win32":
        base_dir = Path(
            os.environ.get("APPDATA", os.path.expanduser("~\\AppData\\Roaming"))
        )
    elif sys.platform == "darwin":
        base_dir = Path(os.path.expanduser("~/Library/Application Support"))
    else:
        base_dir = Path(os.path.expanduser("~/.local/share"))

    data_dir = base_dir / APP_NAME
    data_dir.mkdir(parents=True, exist_ok=True)

    if filename:
        return str(data_dir / filename)
    return str(data_dir)
