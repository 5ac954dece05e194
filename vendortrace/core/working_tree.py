"""Working tree base class shared by every version control backend.

A working tree owns one temporary checkout directory. Backend subclasses
supply the command sequences (tag listing, syncing, revision queries and
per-ref file listing); this class provides everything built on top of them:
version tag ordering, normalization, hashing of local files, diffing and
the checkout's lifecycle.

A single instance is not safe for concurrent use: syncing mutates the
checkout. Use one working tree per concurrent task.
"""

import logging
import shutil
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, ClassVar, Self

from vendortrace.core.diff import unified_diff
from vendortrace.core.normalize import strip_import_comment
from vendortrace.core.versioning.tags import version_tags
from vendortrace.domain.config import VendorTraceConfig
from vendortrace.domain.entities import (
    CommandResult,
    FileHash,
    FileHashes,
    NormalizedContent,
)
from vendortrace.domain.exceptions import FileAccessError, WorkingTreeClosedError
from vendortrace.ports.hashing import Hasher
from vendortrace.ports.process import ProcessRunner

logger = logging.getLogger(__name__)

# Metadata directories never treated as part of a source tree
VCS_METADATA_DIRS = frozenset({".git", ".hg", ".svn", ".bzr"})


def format_command_error(result: CommandResult, context: str) -> str:
    """Format a failed command with its exit status and stderr.

    Args:
        result: The failed command's result.
        context: Human-readable description of what was being done.

    Returns:
        Formatted error message.
    """
    msg = f"{context} ({result.args[0]} exit code {result.returncode})"
    stderr = result.stderr_text()
    if stderr:
        msg += f": {stderr}"
    else:
        msg += f" (no error output from {result.args[0]})"
    return msg


def join_sub_path(sub_path: str, path: str) -> str:
    """Join a repository sub-path and a path relative to it."""
    sub_path = sub_path.strip("/")
    return f"{sub_path}/{path}" if sub_path else path


class BaseWorkingTree(ABC):
    """A local checkout of an upstream repository.

    Subclasses set ``command`` to the backend executable and implement the
    abstract methods. Instances are created by
    ``vendortrace.adapters.factory.create_working_tree`` and should be
    closed (or used as a context manager) to remove the checkout.
    """

    command: ClassVar[str]

    def __init__(
        self,
        directory: Path,
        runner: ProcessRunner,
        hasher: Hasher,
        config: VendorTraceConfig | None = None,
    ) -> None:
        """Wrap an existing checkout.

        Args:
            directory: Checkout directory, owned by this instance from now on.
            runner: Process runner for backend and diff commands.
            hasher: Backend-specific content hasher.
            config: Configuration (defaults if None).
        """
        self._dir = directory
        self._runner = runner
        self._hasher = hasher
        self._config = config or VendorTraceConfig.default()
        self._synced_ref: str | None = None
        self._closed = False

    # ------------------------------------------------------------------
    # Backend primitives
    # ------------------------------------------------------------------

    @classmethod
    @abstractmethod
    def clone(cls, runner: ProcessRunner, repo: str, directory: Path) -> None:
        """Create a local clone of repo in directory.

        Raises:
            CheckoutError: If the backend command fails.
        """

    @abstractmethod
    def _checkout(self, ref: str) -> None:
        """Update the checkout to ref (tag or revision)."""

    @abstractmethod
    def _tags(self) -> list[str]:
        """List all tags in the repository."""

    @abstractmethod
    def revision_from_tag(self, tag: str) -> str:
        """Resolve a tag to its revision.

        Raises:
            NotFoundError: If the tag cannot be resolved.
        """

    @abstractmethod
    def revisions(self) -> list[str]:
        """List all revisions, newest first."""

    @abstractmethod
    def reachable_tag(self, rev: str) -> str:
        """Get the most recent tag reachable from rev.

        Raises:
            VersionNotFoundError: If no tag is reachable.
        """

    @abstractmethod
    def time_from_revision(self, rev: str) -> datetime:
        """Get the commit timestamp of rev (UTC)."""

    @abstractmethod
    def _list_file_hashes(self, ref: str, sub_path: str) -> FileHashes:
        """Hash the files under sub_path at ref, without normalization."""

    # ------------------------------------------------------------------
    # Shared behaviour
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        """Checkout directory."""
        return self._dir

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def closed(self) -> bool:
        return self._closed

    def _require_open(self) -> None:
        if self._closed:
            raise WorkingTreeClosedError(f"Working tree {self._dir} is closed")

    def _run(self, args: Sequence[str]) -> CommandResult:
        """Run the backend command in the checkout directory."""
        self._require_open()
        cmd = [self.command, *args]
        logger.debug(f"Running {' '.join(cmd)} in {self._dir}")
        return self._runner.run(cmd, cwd=self._dir)

    def tag_sync(self, tag: str) -> None:
        """Sync the checkout to a tag.

        Raises:
            CheckoutError: If the tag does not exist or the backend fails.
        """
        self._require_open()
        self._checkout(tag)
        self._synced_ref = tag

    def rev_sync(self, rev: str) -> None:
        """Sync the checkout to a revision.

        Raises:
            CheckoutError: If the revision does not exist or the backend fails.
        """
        self._require_open()
        self._checkout(rev)
        self._synced_ref = rev

    def _ensure_synced(self, ref: str) -> None:
        if self._synced_ref != ref:
            self.rev_sync(ref)

    def version_tags(self) -> list[str]:
        """List tags parseable as semantic versions, highest first."""
        self._require_open()
        return version_tags(self._tags())

    def _is_source_file(self, path: str) -> bool:
        return self._config.normalize.enabled and Path(path).suffix in set(
            self._config.normalize.extensions
        )

    def file_hashes_from_ref(self, ref: str, sub_path: str = "") -> FileHashes:
        """Hash every regular file under sub_path as it existed at ref.

        Source files whose import annotation is stripped (or that lack a
        final newline) are rehashed from their normalized content, which
        requires syncing the checkout to ref.

        Args:
            ref: Tag or revision.
            sub_path: Directory relative to the repository root.

        Returns:
            FileHashes with paths relative to sub_path.
        """
        self._require_open()
        hashes = self._list_file_hashes(ref, sub_path)
        sources = [fh for fh in hashes if self._is_source_file(fh.path)]
        if not sources:
            return hashes

        self._ensure_synced(ref)
        updated: list[FileHash] = []
        for fh in sources:
            normalized = self.strip_import_comment(join_sub_path(sub_path, fh.path))
            if normalized.changed:
                updated.append(self._hasher.hash_bytes(fh.path, normalized.content))
        if updated:
            logger.debug(f"Rehashed {len(updated)} normalized file(s) at {ref}")
        return hashes.replace(updated)

    def hash(self, relative_path: str, abs_path: Path) -> FileHash:
        """Hash a file outside the checkout as though it were at relative_path."""
        self._require_open()
        return self._hasher.hash(relative_path, abs_path)

    def file_hashes_from_dir(self, directory: Path) -> FileHashes:
        """Hash a local directory (e.g. a vendored copy) the same way as refs.

        VCS metadata directories and symbolic links are skipped; source
        files are normalized before hashing when normalization is enabled.

        Args:
            directory: Root of the local tree.

        Returns:
            FileHashes with paths relative to directory.

        Raises:
            FileAccessError: If the directory or a file cannot be read.
        """
        self._require_open()
        if not directory.is_dir():
            raise FileAccessError(f"Not a directory: {directory}")

        hashes: list[FileHash] = []
        for abs_path in directory.rglob("*"):
            rel = abs_path.relative_to(directory)
            if VCS_METADATA_DIRS.intersection(rel.parts):
                continue
            if abs_path.is_symlink() or not abs_path.is_file():
                continue
            relative_path = rel.as_posix()
            if self._is_source_file(relative_path):
                normalized = strip_import_comment(
                    abs_path, self._config.normalize.extensions
                )
                hashes.append(self._hasher.hash_bytes(relative_path, normalized.content))
            else:
                hashes.append(self._hasher.hash(relative_path, abs_path))
        return FileHashes.from_iterable(hashes)

    def strip_import_comment(self, path: str) -> NormalizedContent:
        """Normalize a checkout file by removing its import annotation.

        Args:
            path: Path relative to the checkout root.

        Returns:
            NormalizedContent; unchanged raw bytes for non-source files.

        Raises:
            FileAccessError: If the file cannot be read.
        """
        self._require_open()
        return strip_import_comment(self._dir / path, self._config.normalize.extensions)

    def diff(self, out: BinaryIO, path: str | None, local_file: Path) -> bool:
        """Write a unified diff of a checkout path against local_file.

        Source files on either side are compared after import-annotation
        stripping, so files that hash as equal also diff as equal. Changed
        content is diffed from a temporary copy that is removed afterwards.

        Args:
            out: Binary sink for the diff text.
            path: Path relative to the checkout (absolute paths are used as
                given), or None if the file does not exist upstream.
            local_file: Local file to compare against.

        Returns:
            True if changes were found, False if not.

        Raises:
            DiffToolError: If the diff tool reports trouble.
            FileAccessError: If a source file cannot be read.
        """
        self._require_open()
        left: Path | None = None
        if path is not None:
            left = Path(path)
            if not left.is_absolute():
                left = self._dir / left

        with tempfile.TemporaryDirectory(prefix="vendortrace-diff.") as scratch:
            if left is not None:
                left = self._normalized_copy(left, Path(scratch) / "upstream")
            right = self._normalized_copy(local_file, Path(scratch) / "local")
            return unified_diff(
                self._runner,
                out,
                left,
                right,
                diff_command=self._config.process.diff_command,
            )

    def _normalized_copy(self, source: Path, scratch: Path) -> Path:
        """Return source, or a stripped copy of it written under scratch."""
        if not self._is_source_file(source.name) or not source.is_file():
            return source
        normalized = strip_import_comment(source, self._config.normalize.extensions)
        if not normalized.changed:
            return source
        scratch.mkdir()
        copy = scratch / source.name
        copy.write_bytes(normalized.content)
        return copy

    def close(self) -> None:
        """Remove the local checkout. Safe to call more than once.

        Raises:
            FileAccessError: If the directory cannot be removed.
        """
        if self._closed:
            return
        try:
            if self._dir.exists():
                shutil.rmtree(self._dir)
        except OSError as e:
            raise FileAccessError(f"Failed to remove checkout {self._dir}: {e}") from e
        self._closed = True
        logger.debug(f"Removed checkout {self._dir}")

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
