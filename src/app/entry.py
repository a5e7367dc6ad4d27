"""
Launcher Entry Point.

This module contains the main() function: it reads the launcher's own
path, loads the bundle configuration, sets up logging and runs the
launcher. Separated from the Launcher class to keep process-wide side
effects out of it.
"""

import sys
from typing import Optional, Sequence

from src.app.constants import DIAG_INVALID_CONFIG, EXIT_FAILURE
from src.app.launcher import Launcher
from src.core.config import load_config
from src.core.errors import EnvironmentSetupError
from src.core.logging_config import get_logger, setup_logging, shutdown_logging
from src.core.paths import get_executable_argument, resolve_executable_dir

logger = get_logger(__name__)


def run(argv: Optional[Sequence[str]] = None) -> int:
    """
    Runs the launcher for the given argument vector.

    Only argument 0 is consumed; further arguments are ignored.

    Args:
        argv: Argument vector. Defaults to sys.argv.

    Returns:
        int: Exit code for the launcher process.
    """
    executable_path = get_executable_argument(argv)

    try:
        executable_dir = resolve_executable_dir(executable_path)
    except EnvironmentSetupError as e:
        print(e.diagnostic, file=sys.stderr)
        return EXIT_FAILURE

    try:
        config = load_config(executable_dir)
    except (OSError, ValueError) as e:
        print(DIAG_INVALID_CONFIG.format(reason=e), file=sys.stderr)
        return EXIT_FAILURE

    setup_logging(debug_mode=config.debug)
    logger.info(f"Launcher invoked as {executable_path!r}")
    logger.debug(f"Configuration: {config.to_dict()}")

    try:
        return Launcher(config).run(executable_path)
    finally:
        shutdown_logging()


def main() -> None:
    """Launcher entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
