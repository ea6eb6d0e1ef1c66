"""
soundcatalog - sound catalog and playback core for a soundboard.

This package keeps a catalog of short audio clips, organizes them into
user-defined categories, drives each clip through its load states, and
projects a filtered, sorted view for display and playback.
"""

from soundcatalog.api.soundboard import Soundboard, UploadReport
from soundcatalog.api.sound import Sound
from soundcatalog.core.events import CatalogEvent
from soundcatalog.core.models import (
    ALL_CATEGORIES,
    CatalogConfig,
    Category,
    LoadState,
    Provenance,
    SortMode,
    StatusSummary,
    UploadFile,
    ViewCriteria,
)
from soundcatalog.core.exceptions import (
    SoundboardError,
    ValidationError,
    EmptyNameError,
    DuplicateNameError,
    UnsupportedFormatError,
    NotEditableError,
    NotDeletableError,
    SoundNotFoundError,
    AudioNotReadyError,
    NotLoadedError,
)

__version__ = "0.1.0"

__all__ = [
    "Soundboard",
    "UploadReport",
    "Sound",
    "CatalogEvent",
    "ALL_CATEGORIES",
    "CatalogConfig",
    "Category",
    "LoadState",
    "Provenance",
    "SortMode",
    "StatusSummary",
    "UploadFile",
    "ViewCriteria",
    "SoundboardError",
    "ValidationError",
    "EmptyNameError",
    "DuplicateNameError",
    "UnsupportedFormatError",
    "NotEditableError",
    "NotDeletableError",
    "SoundNotFoundError",
    "AudioNotReadyError",
    "NotLoadedError",
]
