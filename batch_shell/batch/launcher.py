"""Child process launching and reaping.

Thin wrapper over subprocess.Popen. Children inherit the interpreter's
standard streams and environment, and argv[0] is looked up on PATH.
"""

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field

from batch_shell.config import ShellSettings
from batch_shell.exceptions import LaunchFailure, WaitFailure
from batch_shell.utils import get_logger

logger = get_logger(__name__)


@dataclass
class ProcessHandle:
    """Handle to one launched child."""

    argv: list[str]
    process: subprocess.Popen = field(repr=False)
    reaped: bool = False

    @property
    def pid(self) -> int:
        return self.process.pid


class ProcessLauncher:
    """Starts programs and waits for them to exit."""

    def __init__(self, settings: ShellSettings | None = None):
        """Initialize launcher.

        Args:
            settings: Shell settings providing the launch failure exit codes.
        """
        self.settings = settings or ShellSettings()

    def launch(self, argv: Sequence[str]) -> ProcessHandle:
        """Start a program.

        Args:
            argv: Program name followed by its arguments.

        Returns:
            Handle of the running child.

        Raises:
            LaunchFailure: If the program cannot be found or started. The
                exception carries the exit code to report for it.
        """
        argv = list(argv)
        if not argv:
            raise LaunchFailure("Empty command", exit_code=self.settings.not_found_exit_code)

        program = argv[0]
        try:
            process = subprocess.Popen(argv)
        except FileNotFoundError:
            raise LaunchFailure(
                f"command not found: {program}",
                exit_code=self.settings.not_found_exit_code,
                details={"argv": argv},
            ) from None
        except PermissionError:
            raise LaunchFailure(
                f"permission denied: {program}",
                exit_code=self.settings.not_executable_exit_code,
                details={"argv": argv},
            ) from None
        except (OSError, ValueError) as e:
            raise LaunchFailure(
                f"failed to execute '{program}': {e}",
                exit_code=self.settings.not_found_exit_code,
                details={"argv": argv},
            ) from None

        logger.debug(f"Launched pid {process.pid}: {argv}")
        return ProcessHandle(argv=argv, process=process)

    def wait(self, handle: ProcessHandle) -> int:
        """Block until a child exits.

        Args:
            handle: Handle returned by launch().

        Returns:
            Exit status: 0-255 for a normal exit, -N if killed by signal N.

        Raises:
            WaitFailure: If the handle was already reaped or cannot be waited on.
        """
        if handle.reaped:
            raise WaitFailure(
                f"process {handle.pid} has already been reaped",
                details={"argv": handle.argv},
            )

        try:
            status = handle.process.wait()
        except OSError as e:
            handle.reaped = True
            raise WaitFailure(
                f"wait for process {handle.pid} failed: {e}",
                details={"argv": handle.argv},
            ) from None

        handle.reaped = True

        logger.debug(f"Reaped pid {handle.pid} with status {status}")
        return status
