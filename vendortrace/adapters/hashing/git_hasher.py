"""Git blob hashing.

Computes the same object ID 'git hash-object' would, so local files can be
compared directly with the blob IDs listed by 'git ls-tree'.
"""

import hashlib
from pathlib import Path

from vendortrace.domain.entities import FileHash
from vendortrace.domain.exceptions import FileAccessError


class GitHasher:
    """Hasher producing git blob SHA-1 object IDs."""

    name = "git-blob"

    def hash_bytes(self, relative_path: str, data: bytes) -> FileHash:
        header = f"blob {len(data)}\0".encode("ascii")
        digest = hashlib.sha1(header + data, usedforsecurity=False).hexdigest()
        return FileHash(path=relative_path, digest=digest)

    def hash(self, relative_path: str, abs_path: Path) -> FileHash:
        try:
            data = abs_path.read_bytes()
        except OSError as e:
            raise FileAccessError(f"Failed to hash {abs_path}: {e}") from e
        return self.hash_bytes(relative_path, data)
