"""
Summary: Content digests used for change detection of sources and shared inputs.
Why: Staleness must never confuse a missing file with an empty one.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Final

from glowc.config.settings import FILE_HASH_CHUNK_SIZE
from glowc.platform.logging import logger

# Returned for unreadable paths; no SHA-256 hex digest is ever empty.
MISSING_DIGEST: Final[str] = ""


def digest_bytes(data: bytes) -> str:
    """Return the hex SHA-256 digest of ``data``."""

    return hashlib.sha256(data).hexdigest()


def digest_file(path: Path | None) -> str:
    """Return the hex SHA-256 digest of the file at ``path``.

    Returns ``MISSING_DIGEST`` when the path is absent, not a file, or cannot
    be read.
    """

    if path is None or not path.is_file():
        return MISSING_DIGEST

    sha256_hash = hashlib.sha256()
    try:
        with open(path, "rb") as handle:
            for byte_block in iter(lambda: handle.read(FILE_HASH_CHUNK_SIZE), b""):
                sha256_hash.update(byte_block)
    except OSError as exc:
        logger.debug("Could not read %s for hashing: %s", path, exc)
        return MISSING_DIGEST
    return sha256_hash.hexdigest()


def is_missing(digest: str) -> bool:
    """Return True when ``digest`` is the missing-file sentinel."""

    return digest == MISSING_DIGEST


__all__ = ["MISSING_DIGEST", "digest_bytes", "digest_file", "is_missing"]
