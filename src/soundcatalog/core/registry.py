"""Category registry."""

import uuid
from typing import Dict, Iterable, Iterator, List, Optional

from soundcatalog.api.sound import Sound
from soundcatalog.core.exceptions import (
    CategoryNotFoundError,
    DuplicateNameError,
    NotDeletableError,
    NotEditableError,
)
from soundcatalog.core.models import Category
from soundcatalog.utils.log import get_logger
from soundcatalog.utils.validate import require_name

logger = get_logger(__name__)

UNKNOWN_CATEGORY_NAME = "Unknown"


class CategoryRegistry:
    """
    Registry of sound categories.

    Responsibilities:
    - Keep category names unique (case-insensitive)
    - Guarantee the sentinel category always exists
    - Reassign sounds to the sentinel before a category is removed
    """

    def __init__(self, sentinel_id: str = "uncategorized", sentinel_name: str = "Uncategorized"):
        """
        Initialize the registry with its sentinel category.

        Args:
            sentinel_id: Id of the category that can never be removed or renamed.
            sentinel_name: Display name of the sentinel category.
        """
        self._sentinel_id = sentinel_id
        self._categories: Dict[str, Category] = {
            sentinel_id: Category(
                id=sentinel_id,
                name=sentinel_name,
                is_deletable=False,
                is_editable=False,
            )
        }

    @property
    def sentinel_id(self) -> str:
        return self._sentinel_id

    def create(self, name: str) -> Category:
        """
        Create a new category.

        Args:
            name: Category name (trimmed).

        Returns:
            The new category.

        Raises:
            EmptyNameError: If the name is blank.
            DuplicateNameError: If another category already uses the name.
        """
        name = require_name(name, "Category name")
        self._check_unique(name)
        category = Category(id=str(uuid.uuid4()), name=name)
        self._categories[category.id] = category
        logger.info(f"Created category {category.name!r} ({category.id})")
        return category

    def rename(self, category_id: str, new_name: str) -> Category:
        """
        Rename a category in place.

        Raises:
            CategoryNotFoundError: If the id is unknown.
            NotEditableError: If the category cannot be renamed.
            EmptyNameError: If the new name is blank.
            DuplicateNameError: If another category already uses the name.
        """
        category = self._categories.get(category_id)
        if category is None:
            raise CategoryNotFoundError(f"Category not found: {category_id}")
        if not category.is_editable:
            raise NotEditableError(f'Category "{category.name}" cannot be renamed')

        new_name = require_name(new_name, "Category name")
        self._check_unique(new_name, exclude_id=category_id)
        old_name = category.name
        category.name = new_name
        logger.info(f"Renamed category {old_name!r} to {new_name!r}")
        return category

    def delete(self, category_id: str, sounds: Iterable[Sound]) -> List[Sound]:
        """
        Delete a category, moving its sounds to the sentinel category first.

        Runs without suspending, so no caller can observe a sound that
        points to a removed category.

        Args:
            category_id: Category to delete.
            sounds: Every sound in the catalog.

        Returns:
            The sounds that were reassigned.

        Raises:
            NotDeletableError: If the category is protected or does not exist.
        """
        category = self._categories.get(category_id)
        if category is None:
            raise NotDeletableError(f"Category not found: {category_id}")
        if not category.is_deletable:
            raise NotDeletableError(f'Cannot delete the "{category.name}" category')

        reassigned = []
        for sound in sounds:
            if sound.category_id == category_id:
                sound.category_id = self._sentinel_id
                reassigned.append(sound)
        del self._categories[category_id]
        logger.info(
            f"Deleted category {category.name!r}, moved {len(reassigned)} sound(s) "
            f"to {self._sentinel_id!r}"
        )
        return reassigned

    def get(self, category_id: str) -> Optional[Category]:
        """
        Get a category.

        Returns:
            Category if found, None otherwise.
        """
        return self._categories.get(category_id)

    def find_by_name(self, name: str) -> Optional[Category]:
        """Find a category by name, ignoring case and surrounding spaces."""
        wanted = name.strip().casefold()
        for category in self._categories.values():
            if category.name.casefold() == wanted:
                return category
        return None

    def name_of(self, category_id: str) -> str:
        """Category name, or "Unknown" if the id is not registered."""
        category = self._categories.get(category_id)
        return category.name if category is not None else UNKNOWN_CATEGORY_NAME

    def list(self) -> List[Category]:
        """All categories in creation order, sentinel first."""
        return list(self._categories.values())

    def count(self) -> int:
        return len(self._categories)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._categories

    def __iter__(self) -> Iterator[Category]:
        return iter(list(self._categories.values()))

    def _check_unique(self, name: str, exclude_id: Optional[str] = None) -> None:
        existing = self.find_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateNameError(f'Category "{existing.name}" already exists')
