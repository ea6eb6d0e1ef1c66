"""Protocol interfaces for the audio collaborators."""

from typing import Any, Dict, Mapping, Protocol

from soundcatalog.core.models import ClipData, LoadResult


class IAudioEngine(Protocol):
    """Interface for the audio engine that loads and plays clips."""

    async def batch_load(self, locators: Mapping[str, str]) -> Dict[str, LoadResult]:
        """
        Load several clips at once.

        Args:
            locators: Locator per sound id.

        Returns:
            LoadResult per sound id. Missing ids count as failed.

        Raises:
            Exception: Any engine-level failure; the whole batch is then failed.
        """
        ...

    async def load_one(self, locator: str) -> LoadResult:
        """Load a single clip."""
        ...

    def start(self, handle: Any) -> None:
        """Start a loaded buffer from the beginning (restarts if playing)."""
        ...

    def stop(self, handle: Any) -> None:
        """Stop a buffer."""
        ...

    def is_playing(self, handle: Any) -> bool:
        """Check whether a buffer is currently playing."""
        ...

    def is_subsystem_active(self) -> bool:
        """Check whether the audio subsystem has been activated."""
        ...

    async def activate(self) -> None:
        """
        Activate the audio subsystem.

        Raises:
            EngineUnavailableError: If the subsystem cannot be activated.
        """
        ...

    def shutdown(self) -> None:
        """Release every buffer and the output device."""
        ...


class ILocatorStore(Protocol):
    """Interface for the owner of ephemeral upload locators."""

    def revoke(self, locator: str) -> None:
        """Release the resource behind an upload locator."""
        ...


class IClipFormat(Protocol):
    """Interface for clip decoders."""

    @property
    def extensions(self) -> tuple[str, ...]:
        """
        File extensions supported by this format (e.g., ('.ogg', '.oga')).

        Returns:
            Tuple of supported file extensions (lowercase, with dot).
        """
        ...

    def can_load(self, path: str) -> bool:
        """Check if this format can load the given file."""
        ...

    def load(self, path: str) -> ClipData:
        """
        Decode a clip file.

        Args:
            path: Path to the clip.

        Returns:
            ClipData with format and PCM data.

        Raises:
            ClipFormatError: If the clip cannot be decoded.
            FileNotFoundError: If file does not exist.
        """
        ...
