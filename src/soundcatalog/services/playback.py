"""Service for starting and stopping sounds."""

from soundcatalog.api.sound import Sound
from soundcatalog.core.context import CatalogContext
from soundcatalog.core.events import CatalogEvent
from soundcatalog.core.exceptions import AudioNotReadyError, NotLoadedError
from soundcatalog.core.interfaces import IAudioEngine
from soundcatalog.utils.log import get_logger

logger = get_logger(__name__)


class PlaybackController:
    """
    Service for playback of catalog sounds.

    Responsibilities:
    - Refuse to play before audio is active or before a clip is ready
    - Start ready buffers from the beginning
    - Stop playing buffers and count them
    """

    def __init__(self, context: CatalogContext, engine: IAudioEngine):
        """
        Initialize playback controller.

        Args:
            context: Shared catalog state.
            engine: Audio engine owning the buffers.
        """
        self._context = context
        self._engine = engine

    def play(self, sound_id: str) -> Sound:
        """
        Play a sound from the start. Restarts it if it is already playing.

        Args:
            sound_id: Sound to play.

        Returns:
            The sound that was started.

        Raises:
            SoundNotFoundError: If the id is unknown.
            AudioNotReadyError: If the audio subsystem is not active.
            NotLoadedError: If the sound is not READY.
        """
        sound = self._context.catalog.require(sound_id)
        if not self._engine.is_subsystem_active():
            raise AudioNotReadyError("Audio not active. Click screen to enable.")
        if not sound.is_ready:
            raise NotLoadedError(
                f"Cannot play sound {sound.name!r}: {sound.load_state.value}"
            )

        self._engine.start(sound.player)
        logger.debug(f"Started sound {sound.name!r}")
        return sound

    def stop(self, sound_id: str) -> bool:
        """
        Stop a sound if it is playing.

        Returns:
            True if a playing buffer was stopped.
        """
        sound = self._context.catalog.find(sound_id)
        if sound is None:
            logger.debug(f"stop: sound {sound_id} not found")
            return False
        stopped = self._stop_sound(sound)
        if stopped:
            self._context.events.emit(CatalogEvent.PLAYBACK_STOPPED, 1)
        return stopped

    def stop_all(self) -> int:
        """
        Stop every playing sound.

        Returns:
            Number of buffers that were actually playing.
        """
        if not self._engine.is_subsystem_active():
            return 0

        stopped = 0
        for sound in self._context.catalog:
            try:
                if self._stop_sound(sound):
                    stopped += 1
            except Exception as e:
                logger.warning(f"Error stopping sound {sound.id}: {e}")
        self._context.events.emit(CatalogEvent.PLAYBACK_STOPPED, stopped)
        logger.debug(f"Stopped {stopped} sound(s)")
        return stopped

    def is_playing(self, sound_id: str) -> bool:
        sound = self._context.catalog.find(sound_id)
        if sound is None or not sound.is_ready:
            return False
        return self._engine.is_playing(sound.player)

    def _stop_sound(self, sound: Sound) -> bool:
        if not sound.is_ready or not self._engine.is_subsystem_active():
            return False
        if not self._engine.is_playing(sound.player):
            return False
        self._engine.stop(sound.player)
        return True


def stop_all_message(stopped: int) -> str:
    """Status text after a stop-all."""
    return "All sounds stopped." if stopped > 0 else "No sounds were playing."
