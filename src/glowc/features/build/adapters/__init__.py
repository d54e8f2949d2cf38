"""Adapters for the build feature's collaborator ports."""

from .filesystem_adapter import LocalFilesystemAdapter
from .importers import CommandImporter, FileImporter
from .thumbnails import CommandThumbnailRenderer, PlaceholderThumbnailRenderer

__all__ = [
    "CommandImporter",
    "CommandThumbnailRenderer",
    "FileImporter",
    "LocalFilesystemAdapter",
    "PlaceholderThumbnailRenderer",
]
