"""Where: src/glowc/features/cache/domain/models.py
What: Cache entry record and the pure staleness predicate.
Why: Rebuild decisions must be recomputed from scratch every pass, never trusted from presence.
Assumptions: - Paths inside entries are logical (project-relative POSIX) strings.
Trade-offs: - Reasons are collected exhaustively so logs explain every rebuild.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar, Final


class StaleReason(StrEnum):
    """Why an artifact must be rebuilt."""

    NO_ENTRY = "no_entry"
    SOURCE_CHANGED = "source_changed"
    TEMPLATE_CHANGED = "template_changed"
    CORE_LIBRARY_CHANGED = "core_library_changed"
    GENERATOR_CHANGED = "generator_changed"
    OUTPUT_PATH_CHANGED = "output_path_changed"
    SIDECAR_PATH_CHANGED = "sidecar_path_changed"
    OUTPUT_MISSING = "output_missing"
    SIDECAR_MISSING = "sidecar_missing"


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """What produced an artifact's outputs during its last successful build."""

    source_path: str
    output_path: str
    sidecar_path: str
    source_digest: str
    template_digest: str
    core_lib_digest: str
    generator_version: str

    # Persisted field names, in file order.
    FIELD_NAMES: ClassVar[dict[str, str]] = {
        "source_path": "sourcePath",
        "output_path": "outputPath",
        "sidecar_path": "sidecarPath",
        "source_digest": "sourceDigest",
        "template_digest": "templateDigest",
        "core_lib_digest": "coreLibDigest",
        "generator_version": "generatorVersion",
    }

    def to_record(self) -> dict[str, str]:
        """Serialize to the persisted camelCase record."""

        return {persisted: getattr(self, attr) for attr, persisted in self.FIELD_NAMES.items()}

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CacheEntry | None":
        """Parse a persisted record.

        Returns ``None`` for anything that is not an exact, string-valued
        record: missing or unrecognised fields make the entry absent.
        """

        expected = set(cls.FIELD_NAMES.values())
        if set(record.keys()) != expected:
            return None
        values: dict[str, str] = {}
        for attr, persisted in cls.FIELD_NAMES.items():
            value = record[persisted]
            if not isinstance(value, str):
                return None
            values[attr] = value
        if not values["source_path"]:
            return None
        return cls(**values)


@dataclass(frozen=True, slots=True)
class CurrentInputs:
    """Freshly computed digests and paths for one artifact in this pass."""

    source_digest: str
    template_digest: str
    core_lib_digest: str
    generator_version: str
    output_path: str
    sidecar_path: str


PathExists = Callable[[str], bool]

_DIGEST_CHECKS: Final[tuple[tuple[str, StaleReason], ...]] = (
    ("source_digest", StaleReason.SOURCE_CHANGED),
    ("template_digest", StaleReason.TEMPLATE_CHANGED),
    ("core_lib_digest", StaleReason.CORE_LIBRARY_CHANGED),
    ("generator_version", StaleReason.GENERATOR_CHANGED),
)


def staleness_reasons(
    entry: CacheEntry | None,
    current: CurrentInputs,
    *,
    path_exists: PathExists,
) -> list[StaleReason]:
    """Return every reason ``entry`` no longer describes ``current``.

    An empty list means the artifact is fresh.
    """

    if entry is None:
        return [StaleReason.NO_ENTRY]

    reasons: list[StaleReason] = []
    for attr, reason in _DIGEST_CHECKS:
        # A missing-file sentinel never matches, even against itself.
        cached = getattr(entry, attr)
        fresh = getattr(current, attr)
        if not fresh or cached != fresh:
            reasons.append(reason)

    if entry.output_path != current.output_path:
        reasons.append(StaleReason.OUTPUT_PATH_CHANGED)
    if entry.sidecar_path != current.sidecar_path:
        reasons.append(StaleReason.SIDECAR_PATH_CHANGED)
    if not entry.output_path or not path_exists(entry.output_path):
        reasons.append(StaleReason.OUTPUT_MISSING)
    if not entry.sidecar_path or not path_exists(entry.sidecar_path):
        reasons.append(StaleReason.SIDECAR_MISSING)
    return reasons


def is_stale(
    entry: CacheEntry | None,
    current: CurrentInputs,
    *,
    path_exists: PathExists,
) -> bool:
    """Return True when the artifact described by ``current`` must be rebuilt."""

    return bool(staleness_reasons(entry, current, path_exists=path_exists))


__all__ = [
    "CacheEntry",
    "CurrentInputs",
    "PathExists",
    "StaleReason",
    "is_stale",
    "staleness_reasons",
]
