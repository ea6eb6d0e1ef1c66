"""Exception classes for soundcatalog."""


class SoundboardError(Exception):
    """Base exception for soundboard errors."""
    pass


class ValidationError(SoundboardError):
    """Raised when user input is rejected."""
    pass


class EmptyNameError(ValidationError):
    """Raised when a name is blank after trimming."""
    pass


class DuplicateNameError(ValidationError):
    """Raised when a category name is already taken (case-insensitive)."""
    pass


class UnsupportedFormatError(ValidationError):
    """Raised when an uploaded file has a media type that is not accepted."""

    def __init__(self, file_name: str, media_type: str, accepted: str):
        self.file_name = file_name
        self.media_type = media_type
        self.accepted = accepted
        super().__init__(
            f'File "{file_name}" has media type {media_type!r}, '
            f"only {accepted!r} is accepted"
        )


class InvalidColorError(ValidationError):
    """Raised when a color tag is not part of the palette."""
    pass


class CategoryError(SoundboardError):
    """Base exception for category capability errors."""
    pass


class NotEditableError(CategoryError):
    """Raised when renaming a category that cannot be renamed."""
    pass


class NotDeletableError(CategoryError):
    """Raised when deleting a category that cannot be deleted or does not exist."""
    pass


class CategoryNotFoundError(CategoryError):
    """Raised when a category id is unknown."""
    pass


class SoundNotFoundError(SoundboardError):
    """Raised when a sound id is unknown."""
    pass


class PlaybackError(SoundboardError):
    """Base exception for playback errors."""
    pass


class AudioNotReadyError(PlaybackError):
    """Raised when playing before the audio subsystem has been activated."""
    pass


class NotLoadedError(PlaybackError):
    """Raised when playing a sound whose clip is not ready."""
    pass


class InvalidTransitionError(SoundboardError):
    """Raised when a sound is moved along a load-state edge that does not exist."""
    pass


class EngineUnavailableError(SoundboardError):
    """Raised by an engine when the audio subsystem cannot be activated."""
    pass


class ClipLoadError(SoundboardError):
    """Raised when a single clip cannot be loaded into a playable buffer."""
    pass


class ClipFormatError(ClipLoadError):
    """Raised when a clip is not in a supported format or cannot be decoded."""
    pass
