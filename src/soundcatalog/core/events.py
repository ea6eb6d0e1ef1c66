"""Catalog events for the observer pattern.

Events are emitted after a mutation has fully completed, so a subscriber
that recomputes the projection always sees consistent state:
- Sound events: registrations, edits and load progress
- Category events: create, rename, delete
- View events: filter/search/sort changes
- Audio events: activation and playback
"""

from enum import Enum
from typing import Any, Callable, List

from soundcatalog.utils.log import get_logger

logger = get_logger(__name__)


class CatalogEvent(Enum):
    """Things that happen to the catalog."""

    SOUNDS_REGISTERED = "sounds_registered"    # New sounds were added (payload: list of sounds)
    UPLOAD_REJECTED = "upload_rejected"        # An uploaded file was refused (payload: warning text)
    SOUND_UPDATED = "sound_updated"            # Name, color or category changed (payload: sound)
    LOAD_STARTED = "load_started"              # Sounds moved to LOADING (payload: list of sounds)
    LOAD_FINISHED = "load_finished"            # A load batch settled (payload: StatusSummary)
    CATEGORY_CREATED = "category_created"      # payload: category
    CATEGORY_RENAMED = "category_renamed"      # payload: category
    CATEGORY_DELETED = "category_deleted"      # payload: (category, reassigned sounds)
    CRITERIA_CHANGED = "criteria_changed"      # payload: ViewCriteria
    AUDIO_PROMPT = "audio_prompt"              # User must activate audio (payload: prompt text)
    AUDIO_ACTIVATED = "audio_activated"        # Audio subsystem is running
    PLAYBACK_STOPPED = "playback_stopped"      # payload: number of buffers stopped


Listener = Callable[[CatalogEvent, Any], None]


class EventBus:
    """Synchronous fan-out of catalog events to subscribers."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: CatalogEvent, payload: Any = None) -> None:
        """Deliver an event to every listener."""
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception:
                logger.exception(f"Listener failed while handling {event.value}")

    def count(self) -> int:
        return len(self._listeners)
