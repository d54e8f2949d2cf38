"""Where: src/glowc/config/settings.py
What: Fixed compiler constants shared by every feature slice.
Why: Keep artifact naming and generation identity in one importable place.
Assumptions: - Bumping GENERATOR_VERSION invalidates every cached artifact.
Trade-offs: - Values are constants, not config, so two machines never disagree.
"""

from __future__ import annotations

from typing import Final

# Generation identity ----------------------------------------------------------

# Tag recorded in every cache entry; bump whenever generated output changes shape.
GENERATOR_VERSION: Final[str] = "1"


# Artifact naming --------------------------------------------------------------

SOURCE_EXTENSION: Final[str] = ".glow"
OUTPUT_SUFFIX: Final[str] = ".shader"
SIDECAR_SUFFIX: Final[str] = "_thumbnail.png"

DEFAULT_EFFECTS_DIR: Final[str] = "Effects"
DEFAULT_GENERATED_DIR: Final[str] = "Effects_Generated"
CACHE_FILE_NAME: Final[str] = ".glowcache.json"

TEMPLATE_FILE_NAME: Final[str] = "EffectTemplate.shader.txt"
CORE_LIBRARY_FILE_NAME: Final[str] = "Core.hlsl"


# Hashing and previews ---------------------------------------------------------

FILE_HASH_CHUNK_SIZE: Final[int] = 64 * 1024
DEFAULT_THUMBNAIL_WIDTH: Final[int] = 512


__all__ = [
    "GENERATOR_VERSION",
    "SOURCE_EXTENSION",
    "OUTPUT_SUFFIX",
    "SIDECAR_SUFFIX",
    "DEFAULT_EFFECTS_DIR",
    "DEFAULT_GENERATED_DIR",
    "CACHE_FILE_NAME",
    "TEMPLATE_FILE_NAME",
    "CORE_LIBRARY_FILE_NAME",
    "FILE_HASH_CHUNK_SIZE",
    "DEFAULT_THUMBNAIL_WIDTH",
]
