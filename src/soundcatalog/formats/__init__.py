"""Clip decoders and manifest reading."""

from pathlib import Path
from typing import Dict, Optional

from soundcatalog.core.exceptions import ClipFormatError
from soundcatalog.core.interfaces import IClipFormat
from soundcatalog.core.models import ClipData
from soundcatalog.formats.manifest import load_manifest
from soundcatalog.formats.ogg import ogg_format
from soundcatalog.utils.log import get_logger

logger = get_logger(__name__)

# Registry of all available formats
_format_registry: Dict[str, IClipFormat] = {}


def register_format(format: IClipFormat) -> None:
    """
    Register a clip format for each of its extensions.

    Args:
        format: Format instance implementing IClipFormat.
    """
    for ext in format.extensions:
        ext_lower = ext.lower()
        if ext_lower in _format_registry:
            logger.warning(
                f"Format with extension {ext_lower} already registered, "
                f"overwriting with {type(format).__name__}"
            )
        _format_registry[ext_lower] = format
    logger.debug(f"Registered format {type(format).__name__} for extensions: {format.extensions}")


def get_format_for_file(path: str) -> Optional[IClipFormat]:
    """
    Get the format handler for a file by its extension.

    Returns:
        IClipFormat instance if one is registered, None otherwise.
    """
    return _format_registry.get(Path(path).suffix.lower())


def load_clip(path: str) -> ClipData:
    """
    Decode a clip file with the matching format.

    Raises:
        ClipFormatError: If no format handles the extension.
        FileNotFoundError: If file does not exist.
    """
    format = get_format_for_file(path)
    if format is None:
        raise ClipFormatError(
            f"No suitable format handler found for file: {path}. "
            f"Supported extensions: {', '.join(sorted(_format_registry))}"
        )
    return format.load(path)


register_format(ogg_format)

__all__ = ["get_format_for_file", "load_clip", "load_manifest", "register_format"]
