"""
Launcher Error Types.

Each error carries the one-line diagnostic printed to standard error when
it terminates a launch.
"""


class LauncherError(Exception):
    """Base class for failures that stop the launcher before the child exits."""

    def __init__(self, diagnostic: str) -> None:
        super().__init__(diagnostic)
        self.diagnostic = diagnostic


class EnvironmentSetupError(LauncherError):
    """The resources directory could not be entered or the input was unusable."""


class LaunchError(LauncherError):
    """The child process could not be created or its output not relayed."""
