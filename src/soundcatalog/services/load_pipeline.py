"""Service that drives sounds through their load states."""

from typing import Iterable, List, Optional

from soundcatalog.api.sound import Sound
from soundcatalog.core.context import CatalogContext
from soundcatalog.core.events import CatalogEvent
from soundcatalog.core.exceptions import EngineUnavailableError
from soundcatalog.core.interfaces import IAudioEngine, ILocatorStore
from soundcatalog.core.models import LoadResult, LoadState, Provenance, StatusSummary
from soundcatalog.utils.log import get_logger

logger = get_logger(__name__)


class LoadPipeline:
    """
    Service for loading clips into playable buffers.

    Responsibilities:
    - Batch-load provisioned sounds that have not been loaded yet
    - Load uploaded sounds one at a time, releasing failed uploads
    - Hold uploads back until the audio subsystem is active
    - Keep one engine failure from failing unrelated sounds
    - Publish the catalog status after every batch
    """

    def __init__(
        self,
        context: CatalogContext,
        engine: IAudioEngine,
        locator_store: Optional[ILocatorStore] = None,
    ):
        """
        Initialize the load pipeline.

        Args:
            context: Shared catalog state.
            engine: Audio engine that loads clips.
            locator_store: Owner of upload locators (released on failure).
        """
        self._context = context
        self._engine = engine
        self._locator_store = locator_store
        self._waiting: List[Sound] = []

    def pending(self) -> List[Sound]:
        """Provisioned sounds that can be handed to the next batch."""
        return [
            sound
            for sound in self._context.catalog
            if sound.provenance is Provenance.PROVISIONED
            and sound.load_state is LoadState.NOT_LOADED
            and sound.locator
        ]

    def waiting(self) -> List[Sound]:
        """Uploads parked until the audio subsystem is active."""
        return list(self._waiting)

    async def load(self, sounds: Iterable[Sound]) -> StatusSummary:
        """
        Load sounds using the strategy their provenance calls for.

        Returns:
            Catalog status once every load has settled.
        """
        provisioned = []
        uploaded = []
        for sound in sounds:
            if sound.provenance is Provenance.PROVISIONED:
                provisioned.append(sound)
            elif sound.provenance is Provenance.UPLOADED:
                uploaded.append(sound)
            else:
                raise ValueError(f"Unknown provenance: {sound.provenance!r}")

        if not provisioned and not uploaded:
            logger.debug("Nothing to load")
            return self._publish()
        if provisioned:
            await self._load_batch(provisioned)
        if uploaded:
            await self.load_uploaded(uploaded)
        return self._context.catalog.status()

    async def load_provisioned(self) -> StatusSummary:
        """
        Load every pending provisioned sound in a single engine batch.

        Returns:
            Catalog status after the batch.
        """
        return await self.load(self.pending())

    async def resume(self) -> StatusSummary:
        """
        Load pending provisioned sounds and every parked upload.

        Call once the audio subsystem has been activated.
        """
        parked, self._waiting = self._waiting, []
        return await self.load(self.pending() + parked)

    async def load_uploaded(self, sounds: Iterable[Sound]) -> StatusSummary:
        """
        Load uploaded sounds individually, in order.

        Each sound must already be LOADING (uploads are registered that way).
        While the audio subsystem is inactive, uploads stay LOADING and are
        parked for resume(). A failed upload has its locator revoked since it
        is never retried.

        Returns:
            Catalog status after all of them settled.
        """
        for sound in sounds:
            if sound.load_state is not LoadState.LOADING:
                logger.debug(f"Skipping upload {sound.id} in state {sound.load_state.value}")
                continue
            if not self._engine.is_subsystem_active():
                self._park(sound)
                continue
            try:
                result = await self._engine.load_one(sound.locator)
            except EngineUnavailableError as e:
                logger.info(f"Audio unavailable while loading {sound.name!r}: {e}")
                self._park(sound)
                continue
            except Exception as e:
                logger.warning(f"Error loading uploaded sound {sound.name!r}: {e}")
                result = LoadResult.failed(str(e))
            self._settle(sound, result)
            if sound.load_state is LoadState.FAILED:
                self._release(sound)
        return self._publish()

    async def _load_batch(self, sounds: List[Sound]) -> None:
        batch = [s for s in sounds if s.load_state is LoadState.NOT_LOADED and s.locator]
        if not batch:
            return
        if not self._engine.is_subsystem_active():
            logger.info(f"Audio not active, leaving {len(batch)} sound(s) unloaded")
            return
        # Claim every sound before suspending so no other batch can select them
        for sound in batch:
            sound.mark_loading()
        self._context.events.emit(CatalogEvent.LOAD_STARTED, list(batch))
        logger.info(f"Loading {len(batch)} sound file(s)...")

        locators = {sound.id: sound.locator for sound in batch}
        try:
            results = await self._engine.batch_load(locators)
        except Exception:
            logger.exception("Engine failed while loading a batch of sounds")
            for sound in batch:
                sound.mark_failed()
            self._publish()
            return

        for sound in batch:
            result = results.get(sound.id)
            if result is None:
                result = LoadResult.failed("engine returned no result")
            self._settle(sound, result)
        self._publish()

    def _settle(self, sound: Sound, result: LoadResult) -> None:
        if result.ok:
            sound.mark_ready(result.handle)
            logger.debug(f"Sound {sound.name!r} ready")
        else:
            sound.mark_failed()
            logger.warning(
                f"Failed to load sound {sound.name!r} from {sound.locator}: {result.error}"
            )

    def _release(self, sound: Sound) -> None:
        if self._locator_store is None:
            return
        try:
            self._locator_store.revoke(sound.locator)
        except Exception as e:
            logger.warning(f"Could not release upload locator for {sound.name!r}: {e}")

    def _publish(self) -> StatusSummary:
        status = self._context.catalog.status()
        self._context.events.emit(CatalogEvent.LOAD_FINISHED, status)
        return status

    def _park(self, sound: Sound) -> None:
        if sound not in self._waiting:
            logger.debug(f"Upload {sound.name!r} waits for audio activation")
            self._waiting.append(sound)
