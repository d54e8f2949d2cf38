"""Summary: Cache domain records and staleness rules.
Why: Keep the rebuild predicate free of I/O so it can be tested in isolation."""

from .models import CacheEntry, CurrentInputs, PathExists, StaleReason, is_stale, staleness_reasons

__all__ = [
    "CacheEntry",
    "CurrentInputs",
    "PathExists",
    "StaleReason",
    "is_stale",
    "staleness_reasons",
]
