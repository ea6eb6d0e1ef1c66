"""Soundboard - main public API."""

import asyncio
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, List, Optional, Sequence

from soundcatalog.api.sound import Sound
from soundcatalog.core.context import CatalogContext
from soundcatalog.core.events import CatalogEvent, Listener
from soundcatalog.core.exceptions import UnsupportedFormatError
from soundcatalog.core.interfaces import IAudioEngine, ILocatorStore
from soundcatalog.core.models import (
    ALL_CATEGORIES,
    CatalogConfig,
    Category,
    SortMode,
    StatusSummary,
    UploadFile,
    ViewCriteria,
)
from soundcatalog.formats.manifest import load_manifest
from soundcatalog.services.activation import AudioActivationService
from soundcatalog.services.load_pipeline import LoadPipeline
from soundcatalog.services.playback import PlaybackController, stop_all_message
from soundcatalog.services.projection import SoundTile, project, to_tiles
from soundcatalog.utils.log import get_logger

logger = get_logger(__name__)

_UNSET: Any = object()


@dataclass
class UploadReport:
    """Outcome of an upload batch."""

    accepted: List[Sound] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    status: Optional[StatusSummary] = None


class Soundboard:
    """
    Main soundboard facade.

    Owns the catalog context and wires the services together. Every
    mutation emits a CatalogEvent once the state is consistent; the
    render surface subscribes and decides when to redraw.
    """

    def __init__(
        self,
        config: Optional[CatalogConfig] = None,
        engine: Optional[IAudioEngine] = None,
        locator_store: Optional[ILocatorStore] = None,
    ):
        """
        Initialize Soundboard.

        Args:
            config: Catalog configuration.
            engine: Optional engine implementation (default: DeviceAudioEngine).
            locator_store: Owner of upload locators, released when an upload fails.
        """
        self._context = CatalogContext.create(config)
        self._engine = engine
        if self._engine is None:
            # Lazy import to avoid loading PortAudio on import
            from soundcatalog.backends.device_backend import DeviceAudioEngine
            self._engine = DeviceAudioEngine()

        self._activation = AudioActivationService(self._context, self._engine)
        self._pipeline = LoadPipeline(self._context, self._engine, locator_store)
        self._playback = PlaybackController(self._context, self._engine)

    # Lifecycle

    async def startup(self, manifest: Optional[Sequence[str]] = None) -> List[Sound]:
        """
        Register the provisioned sounds and load them if audio is active.

        Args:
            manifest: Clip file names; read from config.manifest_path when None.

        Returns:
            The registered sounds.
        """
        if manifest is None:
            loop = asyncio.get_running_loop()
            manifest = await loop.run_in_executor(
                None, load_manifest, self._context.config.manifest_path
            )

        catalog = self._context.catalog
        sounds = [catalog.register_provisioned(file_name) for file_name in manifest]
        logger.info(f"Registered {len(sounds)} provisioned sound(s)")
        self._context.events.emit(CatalogEvent.SOUNDS_REGISTERED, sounds)

        if self._activation.check():
            await self._pipeline.load(sounds)
        return sounds

    async def activate_audio(self) -> bool:
        """
        Activate audio on a user gesture, then load pending sounds.

        Provisioned sounds not loaded yet and uploads that arrived before
        activation are loaded now.

        Returns:
            True if audio is active.
        """
        if not await self._activation.activate():
            return False
        await self._pipeline.resume()
        return True

    async def load_pending(self) -> StatusSummary:
        """Load provisioned sounds still NOT_LOADED and any parked uploads."""
        return await self._pipeline.resume()

    def shutdown(self) -> None:
        """Stop playback and release the engine."""
        self._playback.stop_all()
        self._activation.shutdown()

    # Uploads

    async def upload(self, files: Iterable[UploadFile]) -> UploadReport:
        """
        Add uploaded clips and load them one by one.

        Rejected files produce a warning each; they never abort the batch.
        Before audio is activated, accepted uploads stay LOADING and the
        activation prompt is raised; they load on activate_audio().

        Returns:
            Accepted sounds, warnings and the status after loading.
        """
        report = UploadReport()
        for file in files:
            try:
                report.accepted.append(self._context.catalog.register_uploaded(file))
            except UnsupportedFormatError as e:
                warning = f'File "{file.name}" is not an OGG file and was skipped.'
                logger.warning(str(e))
                report.warnings.append(warning)
                self._context.events.emit(CatalogEvent.UPLOAD_REJECTED, warning)

        if report.accepted:
            self._context.events.emit(CatalogEvent.SOUNDS_REGISTERED, list(report.accepted))
            self._activation.check()
        report.status = await self._pipeline.load(report.accepted)
        return report

    # Playback

    def play(self, sound_id: str) -> Sound:
        """Play a sound. See PlaybackController.play."""
        return self._playback.play(sound_id)

    def stop(self, sound_id: str) -> bool:
        return self._playback.stop(sound_id)

    def stop_all(self) -> int:
        return self._playback.stop_all()

    @staticmethod
    def stop_all_message(stopped: int) -> str:
        return stop_all_message(stopped)

    def is_playing(self, sound_id: str) -> bool:
        return self._playback.is_playing(sound_id)

    # Editing

    def update_sound(
        self,
        sound_id: str,
        *,
        name: Optional[str] = None,
        color: Optional[str] = None,
        category_id: Optional[str] = None,
        new_category_name: Optional[str] = None,
    ) -> Sound:
        """Edit a sound. See SoundCatalog.update_metadata."""
        known = {category.id for category in self._context.categories}
        sound = self._context.catalog.update_metadata(
            sound_id,
            name=name,
            color=color,
            category_id=category_id,
            new_category_name=new_category_name,
        )
        created = self._context.categories.get(sound.category_id)
        if created is not None and created.id not in known:
            self._context.events.emit(CatalogEvent.CATEGORY_CREATED, created)
        self._context.events.emit(CatalogEvent.SOUND_UPDATED, sound)
        return sound

    def create_category(self, name: str) -> Category:
        category = self._context.categories.create(name)
        self._context.events.emit(CatalogEvent.CATEGORY_CREATED, category)
        return category

    def rename_category(self, category_id: str, new_name: str) -> Category:
        category = self._context.categories.rename(category_id, new_name)
        self._context.events.emit(CatalogEvent.CATEGORY_RENAMED, category)
        return category

    def delete_category(self, category_id: str) -> List[Sound]:
        """
        Delete a category; its sounds move to the sentinel category.

        If the view was filtered on the deleted category, the filter falls
        back to all categories.

        Returns:
            The sounds that were reassigned.
        """
        category = self._context.categories.get(category_id)
        reassigned = self._context.categories.delete(category_id, self._context.catalog)
        if self._context.criteria.category_filter == category_id:
            self._context.criteria = replace(
                self._context.criteria, category_filter=ALL_CATEGORIES
            )
            self._context.events.emit(CatalogEvent.CRITERIA_CHANGED, self._context.criteria)
        self._context.events.emit(CatalogEvent.CATEGORY_DELETED, (category, reassigned))
        return reassigned

    def categories(self) -> List[Category]:
        return self._context.categories.list()

    def category_name(self, category_id: str) -> str:
        return self._context.categories.name_of(category_id)

    # View

    def set_criteria(
        self,
        *,
        category_filter: str = _UNSET,
        search_term: str = _UNSET,
        sort_mode: SortMode = _UNSET,
    ) -> ViewCriteria:
        """
        Change any of the filter, search term and sort mode.

        An unknown category filter falls back to all categories.
        """
        changes = {}
        if category_filter is not _UNSET:
            if category_filter != ALL_CATEGORIES and category_filter not in self._context.categories:
                logger.warning(f"Unknown category filter {category_filter!r}, showing all")
                category_filter = ALL_CATEGORIES
            changes["category_filter"] = category_filter
        if search_term is not _UNSET:
            changes["search_term"] = search_term or ""
        if sort_mode is not _UNSET:
            changes["sort_mode"] = SortMode(sort_mode)

        self._context.criteria = replace(self._context.criteria, **changes)
        self._context.events.emit(CatalogEvent.CRITERIA_CHANGED, self._context.criteria)
        return self._context.criteria

    def view(self, criteria: Optional[ViewCriteria] = None) -> List[Sound]:
        """Sounds to display under the given (or current) criteria."""
        return project(
            self._context.catalog, self._context.categories, criteria or self._context.criteria
        )

    def tiles(self, criteria: Optional[ViewCriteria] = None) -> List[SoundTile]:
        return to_tiles(self.view(criteria), self._context.categories)

    def status(self) -> StatusSummary:
        return self._context.catalog.status()

    @property
    def audio_prompt(self) -> Optional[str]:
        """Text asking the user to activate audio, None once active."""
        return self._activation.prompt

    # Plumbing

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Receive CatalogEvents. Returns an unsubscribe function."""
        return self._context.events.subscribe(listener)

    def sound(self, sound_id: str) -> Optional[Sound]:
        return self._context.catalog.find(sound_id)

    @property
    def sounds(self) -> List[Sound]:
        return self._context.catalog.sounds

    @property
    def context(self) -> CatalogContext:
        return self._context

    @property
    def engine(self) -> IAudioEngine:
        return self._engine
