"""Filtered and sorted view of the catalog."""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from soundcatalog.api.sound import Sound
from soundcatalog.core.models import ALL_CATEGORIES, LoadState, SortMode, ViewCriteria
from soundcatalog.core.registry import CategoryRegistry


def _name_key(name: str) -> tuple[str, str]:
    # Case-insensitive first, exact text breaks ties so the order is total
    return (name.casefold(), name)


def project(
    sounds: Iterable[Sound],
    categories: CategoryRegistry,
    criteria: Optional[ViewCriteria] = None,
) -> List[Sound]:
    """
    Derive the display list from catalog state.

    Pure: neither the input sequence nor the sounds are modified, and the
    same inputs always give the same output.

    Args:
        sounds: Sounds in insertion order.
        categories: Registry used to resolve category names.
        criteria: Filter, search and sort selection (defaults to everything,
            insertion order).

    Returns:
        New list of the matching sounds in display order.
    """
    criteria = criteria or ViewCriteria()
    result = list(sounds)

    if criteria.category_filter != ALL_CATEGORIES:
        result = [s for s in result if s.category_id == criteria.category_filter]

    term = criteria.search_term.lower()
    if term:
        result = [s for s in result if term in s.name.lower()]

    mode = criteria.sort_mode
    if mode is SortMode.NAME_ASCENDING:
        result.sort(key=lambda s: _name_key(s.name))
    elif mode is SortMode.NAME_DESCENDING:
        result.sort(key=lambda s: _name_key(s.name), reverse=True)
    elif mode is SortMode.CATEGORY_THEN_NAME:
        result.sort(
            key=lambda s: _name_key(categories.name_of(s.category_id)) + _name_key(s.name)
        )
    elif mode is not SortMode.INSERTION:
        raise ValueError(f"Unknown sort mode: {mode!r}")

    return result


@dataclass(frozen=True)
class SoundTile:
    """What the render surface needs to draw one sound button."""

    sound_id: str
    name: str
    color: str
    category_name: str
    load_state: LoadState
    disabled: bool
    error_hint: Optional[str] = None


def to_tiles(sounds: Iterable[Sound], categories: CategoryRegistry) -> List[SoundTile]:
    """Describe projected sounds for display."""
    tiles = []
    for sound in sounds:
        state = sound.load_state
        error_hint = None
        if state is LoadState.FAILED:
            error_hint = f"Error loading {sound.locator or 'uploaded file'}."
        tiles.append(
            SoundTile(
                sound_id=sound.id,
                name=sound.name,
                color=sound.color,
                category_name=categories.name_of(sound.category_id),
                load_state=state,
                disabled=state in (LoadState.LOADING, LoadState.FAILED),
                error_hint=error_hint,
            )
        )
    return tiles
