"""Cache use cases: hashing and persistence."""

from .compile_cache import CompileCache
from .hasher import MISSING_DIGEST, digest_bytes, digest_file, is_missing

__all__ = ["CompileCache", "MISSING_DIGEST", "digest_bytes", "digest_file", "is_missing"]
