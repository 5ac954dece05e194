"""Factory functions for working trees and their dependencies.

This module centralizes the creation of working trees, keeping the CLI and
use cases free from direct knowledge of the backend classes. The backend
is selected once, here, from the repository's VCS kind.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import ExitStack
from pathlib import Path

from vendortrace.adapters.hashing import GitHasher, Sha256Hasher
from vendortrace.adapters.process import SubprocessRunner
from vendortrace.adapters.vcs import GitWorkingTree, HgWorkingTree
from vendortrace.core.working_tree import BaseWorkingTree
from vendortrace.domain.config import VendorTraceConfig
from vendortrace.domain.entities import RepoRoot
from vendortrace.domain.exceptions import UnknownBackendError
from vendortrace.ports.hashing import Hasher
from vendortrace.ports.process import ProcessRunner

logger = logging.getLogger(__name__)

# Prefix for temporary checkout directories
CHECKOUT_PREFIX = "vendortrace."

# Backend kind -> (working tree class, hasher class)
BACKENDS: dict[str, tuple[type[BaseWorkingTree], type[Hasher]]] = {
    "git": (GitWorkingTree, GitHasher),
    "hg": (HgWorkingTree, Sha256Hasher),
}


def create_process_runner(config: VendorTraceConfig | None = None) -> ProcessRunner:
    """Create the default subprocess-based runner.

    Args:
        config: Configuration providing the command timeout.

    Returns:
        ProcessRunner instance.
    """
    config = config or VendorTraceConfig.default()
    return SubprocessRunner(timeout=config.process.timeout)


def create_working_tree(
    project: RepoRoot,
    runner: ProcessRunner | None = None,
    config: VendorTraceConfig | None = None,
) -> BaseWorkingTree:
    """Create a local checkout of a repository.

    A fresh temporary directory is created and the repository is cloned
    into it. The directory is removed again if anything fails before the
    working tree is returned; afterwards the working tree owns it.

    Args:
        project: Repository to clone and its backend kind.
        runner: Process runner (default: SubprocessRunner).
        config: Configuration (defaults if None).

    Returns:
        Working tree for the repository's backend. Close it when done.

    Raises:
        UnknownBackendError: If project.vcs is not supported.
        CheckoutError: If cloning fails.
    """
    config = config or VendorTraceConfig.default()
    runner = runner or create_process_runner(config)

    with ExitStack() as cleanup:
        directory = Path(tempfile.mkdtemp(prefix=CHECKOUT_PREFIX))
        cleanup.callback(shutil.rmtree, directory, ignore_errors=True)

        backend = BACKENDS.get(project.vcs)
        if backend is None:
            raise UnknownBackendError(project.vcs)
        tree_cls, hasher_cls = backend

        logger.info(f"Cloning {project.repo} ({project.vcs}) into {directory}")
        tree_cls.clone(runner, project.repo, directory)
        working_tree = tree_cls(directory, runner, hasher_cls(), config)

        # Success: the working tree now owns the directory
        cleanup.pop_all()
        return working_tree
