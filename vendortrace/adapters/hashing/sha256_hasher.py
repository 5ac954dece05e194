"""Plain SHA-256 content hashing, for backends without a native blob ID."""

import hashlib
from pathlib import Path

from vendortrace.domain.entities import FileHash
from vendortrace.domain.exceptions import FileAccessError

# Read size used when streaming files through the digest
CHUNK_SIZE = 64 * 1024


class Sha256Hasher:
    """Hasher producing SHA-256 digests of file content.

    The path does not contribute to the digest.
    """

    name = "sha256"

    def hash_bytes(self, relative_path: str, data: bytes) -> FileHash:
        return FileHash(path=relative_path, digest=hashlib.sha256(data).hexdigest())

    def hash(self, relative_path: str, abs_path: Path) -> FileHash:
        digest = hashlib.sha256()
        try:
            with abs_path.open("rb") as f:
                while chunk := f.read(CHUNK_SIZE):
                    digest.update(chunk)
        except OSError as e:
            raise FileAccessError(f"Failed to hash {abs_path}: {e}") from e
        return FileHash(path=relative_path, digest=digest.hexdigest())
