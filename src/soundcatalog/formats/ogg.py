"""OGG clip decoder."""

from pathlib import Path

from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError

from soundcatalog.core.exceptions import ClipFormatError
from soundcatalog.core.interfaces import IClipFormat
from soundcatalog.core.models import ClipData, ClipFormat
from soundcatalog.utils.log import get_logger

logger = get_logger(__name__)


class OggFormat(IClipFormat):
    """OGG Vorbis decoder implementing IClipFormat."""

    media_type = "audio/ogg"

    @property
    def extensions(self) -> tuple[str, ...]:
        """Supported file extensions."""
        return (".ogg", ".oga")

    def can_load(self, path: str) -> bool:
        """Check if file can be loaded as OGG."""
        path_obj = Path(path)
        if not path_obj.is_file():
            return False

        if path_obj.suffix.lower() not in self.extensions:
            return False

        # Every Ogg page starts with the "OggS" capture pattern
        try:
            with open(path_obj, "rb") as f:
                return f.read(4) == b"OggS"
        except OSError:
            return False

    def load(self, path: str) -> ClipData:
        """
        Decode an OGG file to 16-bit PCM.

        Args:
            path: Path to OGG file.

        Returns:
            ClipData with format and PCM data.

        Raises:
            ClipFormatError: If the clip cannot be decoded.
            FileNotFoundError: If file does not exist.
        """
        path_obj = Path(path)
        if not path_obj.is_file():
            raise FileNotFoundError(f"OGG file not found: {path}")

        try:
            audio = AudioSegment.from_file(str(path_obj), format="ogg")
        except CouldntDecodeError as e:
            raise ClipFormatError(f"Failed to decode OGG file {path}: {e}") from e
        except FileNotFoundError as e:
            # The clip exists, so this is pydub failing to spawn ffmpeg
            raise ClipFormatError(
                "ffmpeg is required to decode OGG clips with pydub; "
                "make sure 'ffmpeg' and 'ffprobe' are on your PATH"
            ) from e

        if audio.sample_width != 2:
            audio = audio.set_sample_width(2)
        if audio.channels > 2:
            logger.warning(f"{path} has {audio.channels} channels, downmixing to stereo")
            audio = audio.set_channels(2)

        clip_format = ClipFormat(
            sample_rate=audio.frame_rate,
            channels=audio.channels,
            sample_width=audio.sample_width,
        )
        duration_seconds = len(audio) / 1000.0  # pydub reports milliseconds

        logger.info(
            f"Loaded OGG: {clip_format.channels}ch, {clip_format.sample_rate}Hz, "
            f"{duration_seconds:.2f}s"
        )
        return ClipData(format=clip_format, data=audio.raw_data, duration_seconds=duration_seconds)


# Format instance for registration
ogg_format = OggFormat()
