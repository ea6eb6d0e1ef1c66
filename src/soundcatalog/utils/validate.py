"""Validation and naming utilities."""

import re
from typing import Optional, Sequence

from soundcatalog.core.exceptions import EmptyNameError, InvalidColorError

_SEPARATORS = re.compile(r"[-_]")
_WORD_START = re.compile(r"\b\w")


def clean_name(name: Optional[str]) -> str:
    """Trim a user-supplied name. None counts as empty."""
    return (name or "").strip()


def require_name(name: Optional[str], what: str = "Name") -> str:
    """Trim a name and reject it when nothing is left."""
    cleaned = clean_name(name)
    if not cleaned:
        raise EmptyNameError(f"{what} cannot be empty")
    return cleaned


def validate_color(color: str, palette: Sequence[str]) -> str:
    """Check that a color tag belongs to the palette."""
    if color not in palette:
        raise InvalidColorError(
            f"Unknown color {color!r}; expected one of: {', '.join(palette)}"
        )
    return color


def display_name_from_file(file_name: str, extension: str = ".ogg") -> str:
    """
    Turn a clip file name into a display name.

    "--Air-Horn.ogg" -> "Air Horn", "boo_sound.ogg" -> "Boo Sound".

    Args:
        file_name: Source file name.
        extension: Clip extension to strip (case-insensitive).

    Returns:
        Human-readable name.
    """
    name = file_name
    if extension and name.lower().endswith(extension.lower()):
        name = name[: -len(extension)]
    if name.startswith("--"):
        name = name[2:]
    name = _SEPARATORS.sub(" ", name)
    # Only the first letter of each word changes; "DJ" stays "DJ"
    return _WORD_START.sub(lambda m: m.group(0).upper(), name)
