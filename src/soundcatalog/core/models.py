"""Data models and configuration classes."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

DEFAULT_PALETTE = (
    "blue",
    "green",
    "red",
    "yellow",
    "purple",
    "pink",
    "indigo",
    "teal",
    "orange",
    "lime",
    "cyan",
    "gray",
)


class LoadState(Enum):
    """Load state of a sound's clip."""

    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class Provenance(Enum):
    """Where a sound came from."""

    PROVISIONED = "provisioned"
    """Listed in the startup manifest."""

    UPLOADED = "uploaded"
    """Added by the user at runtime."""


class SortMode(Enum):
    """Ordering applied by the view projection."""

    INSERTION = "insertion"
    NAME_ASCENDING = "name-asc"
    NAME_DESCENDING = "name-desc"
    CATEGORY_THEN_NAME = "category"


@dataclass
class CatalogConfig:
    """Configuration for the soundboard."""

    palette: tuple[str, ...] = DEFAULT_PALETTE
    """Color tags assigned to new sounds, in cycling order."""

    accepted_media_type: str = "audio/ogg"
    """The only media type accepted for uploads."""

    clip_extension: str = ".ogg"
    """Extension stripped from file names when deriving display names."""

    sounds_dir: str = "sounds"
    """Directory that provisioned clip file names are relative to."""

    manifest_path: str = "sounds/sounds.json"
    """JSON array of provisioned clip file names."""

    uncategorized_id: str = "uncategorized"
    """Id of the sentinel category."""

    uncategorized_name: str = "Uncategorized"
    """Display name of the sentinel category."""

    def __post_init__(self):
        if not self.palette:
            raise ValueError("palette must contain at least one color")
        self.palette = tuple(self.palette)

    def locator_for(self, file_name: str) -> str:
        """Locator of a provisioned clip."""
        if not self.sounds_dir:
            return file_name
        return f"{self.sounds_dir.rstrip('/')}/{file_name}"


@dataclass
class Category:
    """A named group of sounds."""

    id: str
    name: str
    is_deletable: bool = True
    is_editable: bool = True


@dataclass
class UploadFile:
    """A user-selected file handed over by file acquisition."""

    name: str
    """Original file name."""

    media_type: str
    """Declared media type (e.g. "audio/ogg")."""

    locator: str
    """Ephemeral reference the audio engine can load."""


@dataclass
class LoadResult:
    """Outcome of loading one clip."""

    handle: Optional[Any] = None
    """Player handle, present when the clip is ready."""

    error: Optional[str] = None
    """Failure reason, present when the clip could not be loaded."""

    @property
    def ok(self) -> bool:
        return self.handle is not None and self.error is None

    @classmethod
    def ready(cls, handle: Any) -> "LoadResult":
        return cls(handle=handle)

    @classmethod
    def failed(cls, reason: str) -> "LoadResult":
        return cls(error=reason)


@dataclass(frozen=True)
class StatusSummary:
    """Catalog-wide load counts."""

    loading: int
    failed: int
    ready: int
    total: int

    @property
    def message(self) -> Optional[str]:
        """
        Status line for the user.

        Returns:
            None while any sound is still loading, otherwise a short summary.
        """
        if self.loading:
            return None
        if self.failed:
            return f"Some sounds failed. {self.ready}/{self.total} ready. Check console."
        if self.total == 0:
            return "No sounds loaded."
        if self.ready == self.total:
            return f"All {self.ready} sounds loaded & ready!"
        return f"{self.ready}/{self.total} sounds processed."


@dataclass
class ClipFormat:
    """PCM layout of a decoded clip."""

    sample_rate: int
    """Sample rate in Hz."""

    channels: int
    """Number of channels (1=mono, 2=stereo)."""

    sample_width: int
    """Bytes per sample (2 for 16-bit)."""

    @property
    def frame_size(self) -> int:
        """Frame size in bytes."""
        return self.channels * self.sample_width


@dataclass
class ClipData:
    """Decoded clip."""

    format: ClipFormat
    """PCM layout."""

    data: bytes
    """Raw interleaved PCM data."""

    duration_seconds: float
    """Duration in seconds."""

    @property
    def num_frames(self) -> int:
        """Number of audio frames."""
        return len(self.data) // self.format.frame_size


ALL_CATEGORIES = "all"


@dataclass(frozen=True)
class ViewCriteria:
    """Filter, search and sort selection for the projected view."""

    category_filter: str = ALL_CATEGORIES
    """Category id to keep, or ALL_CATEGORIES."""

    search_term: str = ""
    """Case-insensitive substring matched against sound names."""

    sort_mode: SortMode = SortMode.INSERTION
