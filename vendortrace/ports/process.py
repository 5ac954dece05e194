"""Process execution port interface.

Defines the capability the core needs from the process environment: run an
external command in a directory and collect its exit status and output.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from vendortrace.domain.entities import CommandResult


class ProcessRunner(Protocol):
    """Protocol for running external commands."""

    def run(self, args: Sequence[str], cwd: Path | None = None) -> CommandResult:
        """Run a command and wait for it to exit.

        Args:
            args: Program and arguments.
            cwd: Working directory for the command (None for current).

        Returns:
            CommandResult with exit status and captured stdout/stderr.
            A non-zero exit status is reported, not raised.

        Raises:
            CommandTimeoutError: If the command does not finish in time.
            FileAccessError: If the program cannot be started.
        """
        ...
