"""Running the external mv and rm tools.

Used by the subprocess relocation strategy and by the cross-device fallback.
"""

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of an external command.

    Attributes:
        args: Command line that was run.
        returncode: Exit status.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def detail(self) -> str:
        """Diagnostic for a failed command: its stderr, or the exit status."""
        message = self.stderr.strip()
        if message:
            return message
        program = self.args[0] if self.args else "command"
        return f"{program} exited with status {self.returncode}"


def run_command(
    args: Sequence[str],
    *,
    timeout: float | None = None,
    cwd: str | None = None,
) -> CommandResult:
    """Run a command to completion and capture its output.

    A non-zero exit status is reported through the result, not raised.

    Args:
        args: Program and arguments.
        timeout: Seconds to wait. No limit when None.
        cwd: Working directory for the command.

    Raises:
        subprocess.TimeoutExpired: If the command outlives the timeout.
        FileNotFoundError: If the program is not installed.
    """
    argv = tuple(args)
    logger.debug("Running %s", " ".join(argv))
    completed = subprocess.run(
        argv,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(
        args=argv,
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
