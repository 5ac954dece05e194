"""Domain entities and value objects.

Core domain models representing the business concepts of vendortrace.
These are plain dataclasses; the only third-party dependency is blake3,
used to fingerprint whole file-hash collections.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

import blake3

# Number of revision characters kept in pseudo-versions and display output
REVISION_PREFIX_LEN = 12


@dataclass(frozen=True)
class RepoRoot:
    """A resolved upstream repository.

    Attributes:
        repo: Clone URL or local path of the repository.
        vcs: Backend kind, e.g. "git" or "hg".
    """

    repo: str
    vcs: str = "git"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of running an external command.

    Attributes:
        args: The command line that was run.
        returncode: Process exit status.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    args: tuple[str, ...]
    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        """True if the command exited with status 0."""
        return self.returncode == 0

    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace").strip()


@dataclass(frozen=True)
class FileHash:
    """Content fingerprint of one file.

    Attributes:
        path: Path relative to the hashed subtree, using "/" separators.
        digest: Lowercase hex digest; its length depends on the hasher.
    """

    path: str
    digest: str


@dataclass(frozen=True)
class FileHashes:
    """Ordered collection of file hashes for a subtree.

    Entries are kept sorted by path so that two collections built from
    byte-identical trees with the same hasher compare equal element-wise.

    Raises:
        ValueError: If the same path appears more than once.
    """

    entries: tuple[FileHash, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.entries, key=lambda fh: fh.path))
        seen: set[str] = set()
        for fh in ordered:
            if fh.path in seen:
                raise ValueError(f"Duplicate path in file hashes: {fh.path}")
            seen.add(fh.path)
        object.__setattr__(self, "entries", ordered)

    @classmethod
    def from_iterable(cls, hashes: Iterable[FileHash]) -> FileHashes:
        return cls(tuple(hashes))

    def __iter__(self) -> Iterator[FileHash]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, path: object) -> bool:
        return any(fh.path == path for fh in self.entries)

    def get(self, path: str) -> FileHash | None:
        """Look up the hash recorded for a path, or None."""
        for fh in self.entries:
            if fh.path == path:
                return fh
        return None

    def paths(self) -> list[str]:
        return [fh.path for fh in self.entries]

    def as_dict(self) -> dict[str, str]:
        """Map each path to its digest."""
        return {fh.path: fh.digest for fh in self.entries}

    def replace(self, updated: Sequence[FileHash]) -> FileHashes:
        """Return a copy with the given entries substituted by path."""
        by_path = {fh.path: fh for fh in self.entries}
        for fh in updated:
            by_path[fh.path] = fh
        return FileHashes(tuple(by_path.values()))

    def fingerprint(self) -> str:
        """Compute a single digest covering every path and file digest.

        Returns:
            Hex-encoded blake3 hash of the collection.
        """
        hasher = blake3.blake3()
        for fh in self.entries:
            hasher.update(f"{fh.path}\0{fh.digest}\n".encode("utf-8"))
        return hasher.hexdigest()

    def is_subset_of(self, other: FileHashes) -> bool:
        """Check that every entry here exists in other with an equal digest.

        Args:
            other: Collection that may contain extra files.

        Returns:
            True if all paths in this collection match in other.
        """
        theirs = other.as_dict()
        return all(theirs.get(fh.path) == fh.digest for fh in self.entries)

    def mismatches(self, other: FileHashes) -> list[str]:
        """List paths whose digest differs from, or is missing in, other."""
        theirs = other.as_dict()
        return [fh.path for fh in self.entries if theirs.get(fh.path) != fh.digest]


@dataclass(frozen=True)
class NormalizedContent:
    """File content after import-annotation stripping.

    Attributes:
        changed: Whether the emitted content differs from the file on disk.
        content: The bytes to hash or compare.
    """

    changed: bool
    content: bytes


@dataclass(frozen=True)
class Reference:
    """An upstream point in history that matches a vendored tree.

    Attributes:
        tag: Matching tag, or None when only a revision matched.
        revision: Revision identifier.
        version: The tag itself, or a pseudo-version for untagged revisions.
    """

    tag: str | None
    revision: str
    version: str

    @property
    def short_revision(self) -> str:
        return self.revision[:REVISION_PREFIX_LEN]
