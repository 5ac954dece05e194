"""Hashing port interface.

A hasher reduces one file's bytes, together with its repository path, to a
fixed-size digest. Backends use different algorithms; only digests from the
same hasher are comparable.
"""

from pathlib import Path
from typing import Protocol

from vendortrace.domain.entities import FileHash


class Hasher(Protocol):
    """Protocol for per-file content fingerprinting."""

    @property
    def name(self) -> str:
        """Short algorithm name, e.g. "git-blob" or "sha256"."""
        ...

    def hash(self, relative_path: str, abs_path: Path) -> FileHash:
        """Hash a file on disk as though it were stored at relative_path.

        Args:
            relative_path: Path recorded in the returned FileHash.
            abs_path: File to read.

        Returns:
            FileHash for the file content.

        Raises:
            FileAccessError: If the file cannot be read.
        """
        ...

    def hash_bytes(self, relative_path: str, data: bytes) -> FileHash:
        """Hash in-memory content as though it were stored at relative_path."""
        ...
