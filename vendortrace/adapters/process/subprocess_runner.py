"""Subprocess adapter implementing the ProcessRunner port."""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from vendortrace.domain.entities import CommandResult
from vendortrace.domain.exceptions import CommandTimeoutError, FileAccessError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300.0


class SubprocessRunner:
    """Run external commands with subprocess, capturing stdout and stderr.

    Non-zero exit statuses are returned to the caller, which decides what
    they mean (e.g. diff uses status 1 for "files differ").
    """

    def __init__(self, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        """Initialize the runner.

        Args:
            timeout: Seconds to wait for each command, or None to wait forever.
        """
        self.timeout = timeout

    def run(self, args: Sequence[str], cwd: Path | None = None) -> CommandResult:
        """Run a command and wait for it to exit.

        Args:
            args: Program and arguments.
            cwd: Working directory for the command (None for current).

        Returns:
            CommandResult with exit status and captured output.

        Raises:
            CommandTimeoutError: If the command exceeds the timeout.
            FileAccessError: If the program cannot be started.
        """
        cmd = list(args)
        try:
            completed = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandTimeoutError(
                f"Command timed out after {self.timeout}s: {' '.join(cmd)}",
                hint="Increase [process] timeout in the configuration",
            ) from e
        except OSError as e:
            raise FileAccessError(f"Failed to run {cmd[0]}: {e}") from e

        if completed.returncode != 0:
            logger.debug(f"{cmd[0]} exited with status {completed.returncode}")
        return CommandResult(
            args=tuple(cmd),
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
