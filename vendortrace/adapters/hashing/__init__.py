"""Content hashing strategies."""

from vendortrace.adapters.hashing.git_hasher import GitHasher
from vendortrace.adapters.hashing.sha256_hasher import Sha256Hasher

__all__ = ["GitHasher", "Sha256Hasher"]
