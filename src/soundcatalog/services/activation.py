"""Service for activating the audio subsystem."""

from typing import Optional

from soundcatalog.core.context import CatalogContext
from soundcatalog.core.events import CatalogEvent
from soundcatalog.core.exceptions import EngineUnavailableError
from soundcatalog.core.interfaces import IAudioEngine
from soundcatalog.utils.log import get_logger

logger = get_logger(__name__)

PROMPT_ENABLE = "Click anywhere or a button to enable audio."
PROMPT_RETRY = "Failed to start audio. Please try again."


class AudioActivationService:
    """
    Service for the audio activation handshake.

    Responsibilities:
    - Ask the user to activate audio until the engine reports it active
    - Turn activation failures into a prompt instead of an error
    - Shut the engine down
    """

    def __init__(self, context: CatalogContext, engine: IAudioEngine):
        """
        Initialize activation service.

        Args:
            context: Shared catalog state (for events).
            engine: Audio engine to activate.
        """
        self._context = context
        self._engine = engine
        self._prompt: Optional[str] = None

    def check(self) -> bool:
        """
        Check whether audio is active, raising the prompt if it is not.

        Returns:
            True if the subsystem is already active.
        """
        if self._engine.is_subsystem_active():
            self._prompt = None
            return True
        self._set_prompt(PROMPT_ENABLE)
        return False

    async def activate(self) -> bool:
        """
        Try to activate audio (call on a user gesture).

        This method is idempotent and safe to call multiple times.

        Returns:
            True if the subsystem is active afterwards.
        """
        if self._engine.is_subsystem_active():
            logger.debug("Audio already active")
            self._prompt = None
            return True

        try:
            await self._engine.activate()
        except EngineUnavailableError as e:
            logger.error(f"Error starting audio on gesture: {e}")
            self._set_prompt(PROMPT_RETRY)
            return False

        if not self._engine.is_subsystem_active():
            logger.warning("Engine did not report active after activation")
            self._set_prompt(PROMPT_RETRY)
            return False

        self._prompt = None
        logger.info("Audio subsystem activated")
        self._context.events.emit(CatalogEvent.AUDIO_ACTIVATED)
        return True

    def shutdown(self) -> None:
        """Shut the engine down. Errors are logged, not raised."""
        try:
            self._engine.shutdown()
        except Exception as e:
            logger.warning(f"Error during engine shutdown: {e}")
        logger.info("Audio engine shut down")

    @property
    def needs_prompt(self) -> bool:
        """True while the user still has to activate audio."""
        return self._prompt is not None

    @property
    def prompt(self) -> Optional[str]:
        return self._prompt

    @property
    def is_active(self) -> bool:
        return self._engine.is_subsystem_active()

    def _set_prompt(self, text: str) -> None:
        self._prompt = text
        self._context.events.emit(CatalogEvent.AUDIO_PROMPT, text)
