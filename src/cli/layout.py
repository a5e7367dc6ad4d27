#!/usr/bin/env python3
"""
Bundle Layout CLI.

Shows and checks the paths the launcher derives from its executable
location, without changing directory or starting the application.

Usage:
    python -m src.cli.layout show --executable Bundle.app/Contents/MacOS/app
    python -m src.cli.layout show --executable Bundle.app/Contents/MacOS/app \
        --json
    python -m src.cli.layout check --executable Bundle.app/Contents/MacOS/app
"""

import argparse
import json
import logging
import sys
from typing import Dict

from src.app.launcher import LaunchCommand
from src.cli.utils import (
    resolve_in,
    validate_directory,
    validate_executable,
    validate_file,
)
from src.core.config import load_config
from src.core.paths import build_resources_dir, resolve_executable_dir

# Setup logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def describe_layout(executable_path: str) -> Dict[str, str]:
    """
    Computes every path the launcher would use.

    Args:
        executable_path: Path to the launcher executable.

    Returns:
        dict: Executable directory, resources directory, resolved
            interpreter and script paths, and the command line.
    """
    executable_dir = resolve_executable_dir(executable_path)
    config = load_config(executable_dir)
    resources_dir = build_resources_dir(executable_dir)
    command = LaunchCommand()

    return {
        "executable_dir": executable_dir,
        "resources_dir": resources_dir,
        "interpreter": resolve_in(resources_dir, command.interpreter),
        "script": resolve_in(resources_dir, command.script),
        "command_line": command.command_line,
        "exit_policy": config.exit_policy,
    }


def show_layout(args: argparse.Namespace) -> int:
    """
    Print the derived bundle paths.

    Args:
        args: Command-line arguments.

    Returns:
        int: Exit code (0 for success, 1 for failure).
    """
    try:
        layout = describe_layout(args.executable)
    except Exception as e:
        logger.error(f"Failed to resolve layout: {e}")
        if args.verbose:
            raise
        return 1

    if args.json:
        print(json.dumps(layout, indent=2))
    else:
        print(f"Executable directory: {layout['executable_dir']}")
        print(f"Resources directory:  {layout['resources_dir']}")
        print(f"Interpreter:          {layout['interpreter']}")
        print(f"Script:               {layout['script']}")
        print(f"Command:              {layout['command_line']}")
        print(f"Exit policy:          {layout['exit_policy']}")
    return 0


def check_layout(args: argparse.Namespace) -> int:
    """
    Verify that the bundle contains what the launcher needs.

    Args:
        args: Command-line arguments.

    Returns:
        int: Exit code (0 if every check passes, 1 otherwise).
    """
    try:
        layout = describe_layout(args.executable)
    except Exception as e:
        logger.error(f"Failed to resolve layout: {e}")
        if args.verbose:
            raise
        return 1

    checks = [
        ("Resources directory", layout["resources_dir"], validate_directory),
        ("Interpreter", layout["interpreter"], validate_executable),
        ("Script", layout["script"], validate_file),
    ]

    failures = 0
    for label, path, validate in checks:
        if validate(path):
            print(f"✓ {label}: {path}")
        else:
            print(f"✗ {label}: {path}")
            failures += 1

    if failures:
        print(f"\n{failures} check(s) failed")
        return 1

    print("\n✓ Bundle layout is complete")
    return 0


def main():
    """Main entry point for the layout CLI tool."""
    parser = argparse.ArgumentParser(
        description="Inspect a launcher bundle layout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Show
    show_p = subparsers.add_parser("show", help="Print the derived paths")
    show_p.add_argument(
        "--executable", "-e", required=True, help="Path to the launcher executable"
    )
    show_p.add_argument("--json", action="store_true", help="Output as JSON")
    show_p.set_defaults(func=show_layout)

    # Check
    check_p = subparsers.add_parser("check", help="Verify the bundle layout")
    check_p.add_argument(
        "--executable", "-e", required=True, help="Path to the launcher executable"
    )
    check_p.set_defaults(func=check_layout)

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if hasattr(args, "func"):
        sys.exit(args.func(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
