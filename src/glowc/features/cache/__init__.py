# Where: glowc.features.cache
# What: Expose the compile cache, hasher and staleness predicate.
# Why: Provide a cohesive import surface for the build orchestrator.

from .domain import CacheEntry, CurrentInputs, StaleReason, is_stale, staleness_reasons
from .usecases import MISSING_DIGEST, CompileCache, digest_bytes, digest_file, is_missing

__all__ = [
    "CacheEntry",
    "CompileCache",
    "CurrentInputs",
    "MISSING_DIGEST",
    "StaleReason",
    "digest_bytes",
    "digest_file",
    "is_missing",
    "is_stale",
    "staleness_reasons",
]
