"""
Launcher Module.

Runs the bundled application: enter the resources directory next to the
executable, start the bundled interpreter on the entry script, relay its
standard output and map the outcome to an exit code.
"""

import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from typing import BinaryIO, List, Optional, TextIO, Tuple

from src.app.constants import (
    DIAG_CHDIR_FAILED,
    DIAG_CHILD_FAILED,
    DIAG_LAUNCH_FAILED,
    EXIT_FAILURE,
    EXIT_POLICY_PROPAGATE,
    EXIT_SUCCESS,
    INTERPRETER_PATH,
    LOG_INSIDE,
    LOG_RUNNING,
    SCRIPT_NAME,
    SIGNAL_EXIT_BASE,
)
from src.app.relay import relay_stream
from src.core.config import LauncherConfig
from src.core.errors import EnvironmentSetupError, LauncherError, LaunchError
from src.core.paths import build_resources_dir, resolve_executable_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchCommand:
    """
    The child command: an interpreter and the script it runs.

    Both parts are fixed and relative to the resources directory; they are
    kept as separate fields rather than one pre-joined string.
    """

    interpreter: str = INTERPRETER_PATH
    script: str = SCRIPT_NAME

    @property
    def argv(self) -> List[str]:
        return [self.interpreter, self.script]

    @property
    def command_line(self) -> str:
        return f"{self.interpreter} {self.script}"


@dataclass
class LaunchResult:
    """Outcome of a run that reached the child process."""

    working_dir: str
    command: LaunchCommand
    returncode: int
    bytes_relayed: int = 0
    exit_code: int = EXIT_SUCCESS


def exit_code_for(returncode: int, policy: str) -> int:
    """
    Maps a child return code to the launcher's exit code.

    Args:
        returncode: Popen.returncode; negative values mean killed by signal.
        policy: "replicate" or "propagate".

    Returns:
        int: 0 under "replicate"; the child's status under "propagate",
            with signal N reported as 128 + N.
    """
    if policy != EXIT_POLICY_PROPAGATE:
        return EXIT_SUCCESS
    if returncode < 0:
        return SIGNAL_EXIT_BASE - returncode
    return returncode


class Launcher:
    """
    Starts the bundled interpreter and relays its output.

    Streams default to the process's own at call time so that test
    harnesses which swap sys.stdout are honoured.
    """

    def __init__(
        self,
        config: Optional[LauncherConfig] = None,
        stdout: Optional[BinaryIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        """
        Initializes the launcher.

        Args:
            config: Launcher settings. Defaults to LauncherConfig().
            stdout: Binary sink for the child's output.
            stderr: Text stream for diagnostics.
        """
        self.config = config or LauncherConfig()
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> BinaryIO:
        if self._stdout is not None:
            return self._stdout
        return sys.stdout.buffer

    @property
    def stderr(self) -> TextIO:
        if self._stderr is not None:
            return self._stderr
        return sys.stderr

    def build_command(self) -> LaunchCommand:
        return LaunchCommand(INTERPRETER_PATH, SCRIPT_NAME)

    def resolve_working_dir(self, executable_path: str) -> str:
        """
        Computes the resources directory for an executable path.

        Raises:
            EnvironmentSetupError: If the executable path is empty.
        """
        executable_dir = resolve_executable_dir(executable_path)
        return build_resources_dir(executable_dir)

    def enter_working_dir(self, working_dir: str) -> None:
        """
        Changes the process working directory.

        Raises:
            EnvironmentSetupError: If the directory is missing or inaccessible.
        """
        try:
            os.chdir(working_dir)
        except OSError as e:
            raise EnvironmentSetupError(
                DIAG_CHDIR_FAILED.format(path=working_dir)
            ) from e
        logger.info(LOG_INSIDE, working_dir)

    def execute(self, command: LaunchCommand) -> Tuple[int, int]:
        """
        Runs the command and relays its standard output.

        The pipe is closed and the child reaped on every path; if relaying
        fails the child is killed first so the wait cannot block.

        Returns:
            tuple: (child return code, bytes relayed).

        Raises:
            LaunchError: If the child cannot be started or relaying fails.
        """
        logger.info(LOG_RUNNING, command.command_line)
        diagnostic = DIAG_LAUNCH_FAILED.format(command=command.command_line)

        try:
            process = subprocess.Popen(command.argv, stdout=subprocess.PIPE)
        except (OSError, ValueError) as e:
            raise LaunchError(diagnostic) from e

        with process:
            logger.debug(f"Child started with pid {process.pid}")
            try:
                relayed = relay_stream(
                    process.stdout, self.stdout, self.config.chunk_size
                )
            except (OSError, ValueError) as e:
                process.kill()
                raise LaunchError(diagnostic) from e

        logger.debug(f"Relayed {relayed} byte(s) from pid {process.pid}")
        return process.returncode, relayed

    def launch(self, executable_path: str) -> LaunchResult:
        """
        Performs a full launch without translating errors.

        Args:
            executable_path: The invocation path of the launcher.

        Returns:
            LaunchResult: The child's outcome and the chosen exit code.

        Raises:
            EnvironmentSetupError: If the resources directory is unusable.
            LaunchError: If the child cannot be started or relayed.
        """
        working_dir = self.resolve_working_dir(executable_path)
        self.enter_working_dir(working_dir)

        command = self.build_command()
        returncode, relayed = self.execute(command)

        if returncode != 0:
            logger.warning(f"Child exited with status {returncode}")
            print(DIAG_CHILD_FAILED.format(status=returncode), file=self.stderr)

        return LaunchResult(
            working_dir=working_dir,
            command=command,
            returncode=returncode,
            bytes_relayed=relayed,
            exit_code=exit_code_for(returncode, self.config.exit_policy),
        )

    def run(self, executable_path: str) -> int:
        """
        Launches the bundled application and returns the exit code.

        Environment and launch failures print one diagnostic line to
        standard error and return 1.

        Args:
            executable_path: The invocation path of the launcher.

        Returns:
            int: Exit code for the launcher process.
        """
        try:
            result = self.launch(executable_path)
        except LauncherError as e:
            logger.error(f"Launch aborted: {e.diagnostic}", exc_info=e.__cause__)
            print(e.diagnostic, file=self.stderr)
            return EXIT_FAILURE

        logger.info(
            f"Child exited with {result.returncode}; launcher exits with "
            f"{result.exit_code}"
        )
        return result.exit_code
