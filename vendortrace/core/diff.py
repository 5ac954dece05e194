"""Unified diff comparison built on an external line-diff tool."""

import logging
from pathlib import Path
from typing import BinaryIO

from vendortrace.domain.exceptions import DiffToolError
from vendortrace.ports.process import ProcessRunner

logger = logging.getLogger(__name__)

# Stands in for a file that does not exist on one side of the comparison
NULL_PATH = Path("/dev/null")


def unified_diff(
    runner: ProcessRunner,
    out: BinaryIO,
    path: Path | None,
    local_file: Path,
    diff_command: str = "diff",
) -> bool:
    """Compare two files with 'diff -u', writing the diff to out.

    Args:
        runner: Process runner used to invoke the diff tool.
        out: Binary sink for the diff text; written even on failure.
        path: Left-hand file, or None if it does not exist.
        local_file: Right-hand file.
        diff_command: Diff executable.

    Returns:
        True if the files differ, False if they are identical.

    Raises:
        DiffToolError: If the tool exits with a status other than 0 or 1.
    """
    left = NULL_PATH if path is None else path
    result = runner.run([diff_command, "-u", str(left), str(local_file)])
    out.write(result.stdout)

    # Exit codes for diff are:
    # 0: no differences were found
    # 1: some differences were found
    # >1: trouble
    if result.returncode == 0:
        return False
    if result.returncode == 1:
        return True

    msg = f"{diff_command} exited with status {result.returncode}"
    stderr = result.stderr_text()
    if stderr:
        msg += f": {stderr}"
    logger.debug(msg)
    raise DiffToolError(msg, returncode=result.returncode)
