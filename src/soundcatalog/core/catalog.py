"""Sound catalog."""

import uuid
from typing import Iterator, List, Optional

from soundcatalog.api.sound import Sound
from soundcatalog.core.exceptions import (
    CategoryNotFoundError,
    SoundNotFoundError,
    UnsupportedFormatError,
)
from soundcatalog.core.models import (
    CatalogConfig,
    LoadState,
    Provenance,
    StatusSummary,
    UploadFile,
)
from soundcatalog.core.registry import CategoryRegistry
from soundcatalog.utils.log import get_logger
from soundcatalog.utils.validate import (
    clean_name,
    display_name_from_file,
    validate_color,
)

logger = get_logger(__name__)


class SoundCatalog:
    """
    Ordered collection of sounds.

    Responsibilities:
    - Create sounds from manifest entries and uploads
    - Keep every sound pointing at a registered category
    - Apply metadata edits
    - Summarize load states
    """

    def __init__(self, categories: CategoryRegistry, config: Optional[CatalogConfig] = None):
        """
        Initialize the catalog.

        Args:
            categories: Registry used to validate and create categories.
            config: Catalog configuration (defaults to CatalogConfig()).
        """
        self._categories = categories
        self._config = config or CatalogConfig()
        self._sounds: List[Sound] = []
        self._provisioned_colors = 0

    def register_provisioned(self, file_name: str) -> Sound:
        """
        Add a sound listed in the startup manifest.

        The sound starts NOT_LOADED; the load pipeline picks it up later.

        Args:
            file_name: Clip file name from the manifest.

        Returns:
            The new sound.
        """
        palette = self._config.palette
        color = palette[self._provisioned_colors % len(palette)]
        self._provisioned_colors += 1

        sound = Sound(
            id=str(uuid.uuid4()),
            name=self._display_name(file_name),
            locator=self._config.locator_for(file_name),
            color=color,
            category_id=self._categories.sentinel_id,
            provenance=Provenance.PROVISIONED,
            original_name=file_name,
        )
        self._sounds.append(sound)
        logger.debug(f"Registered provisioned sound {sound.name!r} ({sound.id})")
        return sound

    def register_uploaded(self, file: UploadFile) -> Sound:
        """
        Add a sound from a user upload.

        The sound starts LOADING because uploads are loaded right away.

        Args:
            file: Uploaded file record.

        Returns:
            The new sound.

        Raises:
            UnsupportedFormatError: If the media type is not accepted.
        """
        accepted = self._config.accepted_media_type
        if file.media_type != accepted:
            raise UnsupportedFormatError(file.name, file.media_type, accepted)

        palette = self._config.palette
        sound = Sound(
            id=str(uuid.uuid4()),
            name=self._display_name(file.name),
            locator=file.locator,
            color=palette[len(self._sounds) % len(palette)],
            category_id=self._categories.sentinel_id,
            provenance=Provenance.UPLOADED,
            original_name=file.name,
            load_state=LoadState.LOADING,
        )
        self._sounds.append(sound)
        logger.info(f"Registered uploaded sound {sound.name!r} ({sound.id})")
        return sound

    def find(self, sound_id: str) -> Optional[Sound]:
        """
        Get a sound.

        Returns:
            Sound if found, None otherwise.
        """
        for sound in self._sounds:
            if sound.id == sound_id:
                return sound
        return None

    def require(self, sound_id: str) -> Sound:
        """
        Get a sound that must exist.

        Raises:
            SoundNotFoundError: If the id is unknown.
        """
        sound = self.find(sound_id)
        if sound is None:
            raise SoundNotFoundError(f"Sound not found: {sound_id}")
        return sound

    def update_metadata(
        self,
        sound_id: str,
        *,
        name: Optional[str] = None,
        color: Optional[str] = None,
        category_id: Optional[str] = None,
        new_category_name: Optional[str] = None,
    ) -> Sound:
        """
        Edit a sound's name, color and category.

        A non-blank new_category_name wins over category_id: the category
        with that name (case-insensitive) is used, or created if missing.
        A blank name keeps the current one.

        Args:
            sound_id: Sound to edit.
            name: New display name.
            color: New color tag from the palette.
            category_id: Existing category to move the sound to.
            new_category_name: Category to move the sound to, created on demand.

        Returns:
            The edited sound.

        Raises:
            SoundNotFoundError: If the sound id is unknown.
            InvalidColorError: If the color is not in the palette.
            CategoryNotFoundError: If category_id is not registered.
        """
        sound = self.require(sound_id)

        # Validate everything before touching the sound
        if color is not None:
            validate_color(color, self._config.palette)

        target_category = None
        category_name = clean_name(new_category_name)
        if category_name:
            target_category = self._categories.find_by_name(category_name)
            if target_category is None:
                target_category = self._categories.create(category_name)
        elif category_id is not None:
            target_category = self._categories.get(category_id)
            if target_category is None:
                raise CategoryNotFoundError(f"Category not found: {category_id}")

        if name is not None:
            sound.name = clean_name(name) or sound.name
        if color is not None:
            sound.color = color
        if target_category is not None:
            sound.category_id = target_category.id

        logger.debug(f"Updated sound {sound.id}: {sound!r}")
        return sound

    def status(self) -> StatusSummary:
        """Count sounds per load state."""
        loading = failed = ready = 0
        for sound in self._sounds:
            if sound.load_state is LoadState.LOADING:
                loading += 1
            elif sound.load_state is LoadState.FAILED:
                failed += 1
            elif sound.load_state is LoadState.READY:
                ready += 1
        return StatusSummary(
            loading=loading, failed=failed, ready=ready, total=len(self._sounds)
        )

    @property
    def sounds(self) -> List[Sound]:
        """Snapshot of all sounds in insertion order."""
        return list(self._sounds)

    def count(self) -> int:
        return len(self._sounds)

    def __iter__(self) -> Iterator[Sound]:
        return iter(list(self._sounds))

    def __len__(self) -> int:
        return len(self._sounds)

    def _display_name(self, file_name: str) -> str:
        return display_name_from_file(file_name, self._config.clip_extension).strip() or file_name
