"""Version Control System (VCS) port interfaces.

Describable is the narrow capability needed to compute pseudo-versions.
WorkingTree is the full contract of a local checkout of an upstream
repository; each supported backend provides one implementation.
"""

from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Protocol, Self

from vendortrace.domain.entities import FileHash, FileHashes, NormalizedContent


class Describable(Protocol):
    """Protocol for objects that can describe a revision."""

    def reachable_tag(self, rev: str) -> str:
        """Get the most recent tag reachable from rev.

        Tags that parse as semantic versions are preferred.

        Raises:
            VersionNotFoundError: If no tag is reachable.
        """
        ...

    def time_from_revision(self, rev: str) -> datetime:
        """Get the commit timestamp of rev (timezone-aware)."""
        ...


class WorkingTree(Describable, Protocol):
    """Protocol for a disposable local checkout and operations over it."""

    @property
    def path(self) -> Path:
        """Checkout directory."""
        ...

    def tag_sync(self, tag: str) -> None:
        """Sync the checkout to a tag.

        Raises:
            CheckoutError: If the tag does not exist or the backend fails.
        """
        ...

    def rev_sync(self, rev: str) -> None:
        """Sync the checkout to a revision.

        Raises:
            CheckoutError: If the revision does not exist or the backend fails.
        """
        ...

    def revision_from_tag(self, tag: str) -> str:
        """Resolve a tag to its revision.

        Raises:
            NotFoundError: If the tag cannot be resolved.
        """
        ...

    def revisions(self) -> list[str]:
        """List all revisions, newest first."""
        ...

    def version_tags(self) -> list[str]:
        """List tags parseable as semantic versions, highest first."""
        ...

    def file_hashes_from_ref(self, ref: str, sub_path: str = "") -> FileHashes:
        """Hash every regular file under sub_path as it existed at ref.

        Paths in the result are relative to sub_path.
        """
        ...

    def hash(self, relative_path: str, abs_path: Path) -> FileHash:
        """Hash a file outside the checkout as though it were at relative_path."""
        ...

    def file_hashes_from_dir(self, directory: Path) -> FileHashes:
        """Hash a local directory the same way refs are hashed."""
        ...

    def strip_import_comment(self, path: str) -> NormalizedContent:
        """Normalize a checkout file by removing its import annotation."""
        ...

    def diff(self, out: BinaryIO, path: str | None, local_file: Path) -> bool:
        """Write a unified diff of a checkout path against local_file.

        Source files are compared after import-annotation stripping.

        Returns:
            True if the files differ.

        Raises:
            DiffToolError: If the diff tool reports trouble.
        """
        ...

    def close(self) -> None:
        """Remove the checkout. Safe to call more than once."""
        ...

    def __enter__(self) -> Self: ...

    def __exit__(self, *exc_info: object) -> None: ...
