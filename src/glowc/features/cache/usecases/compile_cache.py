"""
Summary: Persistent map from artifact identity to the inputs that built it.
Why: Loaded wholesale at pass start and saved once at pass end; I/O trouble is never fatal.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Final

from glowc.config.file_ops import write_text_atomic
from glowc.platform.logging import log_event
from glowc.shared import BuildEvent

from ..domain.models import CacheEntry

_ENTRIES_KEY: Final[str] = "entries"


class CompileCache:
    """In-memory cache entries keyed by logical source path."""

    def __init__(self, entries: dict[str, CacheEntry] | None = None) -> None:
        self._entries: dict[str, CacheEntry] = dict(entries or {})

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CacheEntry]:
        return iter(list(self._entries.values()))

    def __contains__(self, source_path: object) -> bool:
        return source_path in self._entries

    def get(self, source_path: str) -> CacheEntry | None:
        """Return the entry recorded for ``source_path`` if any."""

        if not source_path:
            return None
        return self._entries.get(source_path)

    def put(self, entry: CacheEntry) -> bool:
        """Insert or replace ``entry``; entries without a source path are ignored."""

        if not entry.source_path:
            return False
        self._entries[entry.source_path] = entry
        return True

    @classmethod
    def load(cls, storage_path: Path) -> "CompileCache":
        """Read a persisted cache, returning an empty one on any problem.

        Individual malformed records are dropped; the rest of the file is kept.
        """

        cache = cls()
        if not storage_path.exists():
            return cache

        try:
            payload: Any = json.loads(storage_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            log_event(
                logging.WARNING,
                BuildEvent.CACHE_WARNING,
                "Failed to read compile cache %s: %s",
                storage_path,
                exc,
                cache_path=storage_path,
            )
            return cache

        records = payload.get(_ENTRIES_KEY) if isinstance(payload, dict) else None
        if not isinstance(records, list):
            log_event(
                logging.WARNING,
                BuildEvent.CACHE_WARNING,
                "Ignoring compile cache %s: no entry list",
                storage_path,
                cache_path=storage_path,
            )
            return cache

        dropped = 0
        for record in records:
            entry = CacheEntry.from_record(record) if isinstance(record, dict) else None
            if entry is None:
                dropped += 1
                continue
            _ = cache.put(entry)

        if dropped:
            log_event(
                logging.DEBUG,
                BuildEvent.CACHE_WARNING,
                "Dropped %d unrecognised compile cache record(s) from %s",
                dropped,
                storage_path,
                cache_path=storage_path,
            )
        return cache

    def save(self, storage_path: Path) -> bool:
        """Persist every entry; on failure the previous file stays untouched."""

        payload = {
            _ENTRIES_KEY: [
                entry.to_record()
                for entry in sorted(self._entries.values(), key=lambda item: item.source_path)
            ]
        }
        try:
            write_text_atomic(storage_path, json.dumps(payload, indent=2) + "\n")
        except OSError as exc:
            log_event(
                logging.WARNING,
                BuildEvent.CACHE_WARNING,
                "Failed to write compile cache %s: %s",
                storage_path,
                exc,
                cache_path=storage_path,
            )
            return False
        return True


__all__ = ["CompileCache"]
