"""External build tool invocation.

The packager talks to the build tool through the CommandExecutor protocol,
so tests and callers can substitute their own implementation.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_BUILDER = "docker"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished external command."""

    args: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


class CommandExecutor(Protocol):
    """Runs a build tool command and captures its outcome."""

    @property
    def program(self) -> str:
        """Name or path of the executable being run."""
        ...

    def run(self, args: list[str], cwd: Path) -> CommandResult:
        """Run the program with arguments and wait for it to exit.

        Args:
            args: Arguments passed after the program name
            cwd: Working directory for the child process

        Returns:
            CommandResult with exit status and captured output

        Raises:
            FileNotFoundError: If the program cannot be found
            subprocess.TimeoutExpired: If a deadline is configured and exceeded
        """
        ...


class SubprocessExecutor:
    """Runs the build tool as a local child process.

    Args:
        program: Build tool executable (default: docker)
        timeout: Optional deadline in seconds; the child is killed when it
            is exceeded. None waits indefinitely.
    """

    def __init__(self, program: str = DEFAULT_BUILDER, timeout: float | None = None):
        self._program = program
        self.timeout = timeout

    @property
    def program(self) -> str:
        return self._program

    def run(self, args: list[str], cwd: Path) -> CommandResult:
        command = [self._program, *args]
        logger.info(f"Running: {' '.join(command)}")

        result = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=self.timeout,
            check=False,
        )

        return CommandResult(
            args=command,
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )

    def __repr__(self) -> str:
        return (
            f"SubprocessExecutor(program={self._program!r}, timeout={self.timeout!r})"
        )
