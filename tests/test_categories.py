"""Tests for the category registry."""

import pytest
from soundcatalog.core.exceptions import (
    CategoryNotFoundError,
    DuplicateNameError,
    EmptyNameError,
    NotDeletableError,
    NotEditableError,
)
from soundcatalog.core.context import CatalogContext
from soundcatalog.core.registry import CategoryRegistry


def create_test_context(*file_names: str) -> CatalogContext:
    """Create a context with provisioned sounds."""
    context = CatalogContext.create()
    for file_name in file_names:
        context.catalog.register_provisioned(file_name)
    return context


def test_sentinel_exists():
    """Test that a new registry holds only the protected sentinel."""
    registry = CategoryRegistry()

    assert registry.count() == 1
    sentinel = registry.get("uncategorized")
    assert sentinel.name == "Uncategorized"
    assert not sentinel.is_deletable
    assert not sentinel.is_editable


def test_create_category():
    """Test creating a category."""
    registry = CategoryRegistry()

    category = registry.create("  SFX  ")

    assert category.name == "SFX"
    assert category.is_deletable and category.is_editable
    assert registry.get(category.id) is category
    assert [c.name for c in registry.list()] == ["Uncategorized", "SFX"]


def test_create_duplicate_name_case_insensitive():
    """Test that names must be unique ignoring case."""
    registry = CategoryRegistry()
    registry.create("Memes")

    with pytest.raises(DuplicateNameError):
        registry.create("MEMES")
    with pytest.raises(DuplicateNameError):
        registry.create("uncategorized")
    assert registry.count() == 2


def test_create_empty_name():
    """Test that blank names are rejected."""
    registry = CategoryRegistry()

    with pytest.raises(EmptyNameError):
        registry.create("   ")
    assert registry.count() == 1


def test_rename_category():
    """Test renaming a category in place."""
    registry = CategoryRegistry()
    category = registry.create("Horns")

    registry.rename(category.id, "Air Horns")

    assert registry.name_of(category.id) == "Air Horns"


def test_rename_to_own_name_with_new_case():
    """Test that a category does not collide with itself."""
    registry = CategoryRegistry()
    category = registry.create("horns")

    registry.rename(category.id, "Horns")

    assert category.name == "Horns"


def test_rename_errors():
    """Test rename validation."""
    registry = CategoryRegistry()
    first = registry.create("One")
    registry.create("Two")

    with pytest.raises(NotEditableError):
        registry.rename("uncategorized", "Misc")
    with pytest.raises(DuplicateNameError):
        registry.rename(first.id, "two")
    with pytest.raises(EmptyNameError):
        registry.rename(first.id, "")
    with pytest.raises(CategoryNotFoundError):
        registry.rename("missing", "Three")
    assert first.name == "One"
    assert registry.name_of("uncategorized") == "Uncategorized"


def test_delete_reassigns_sounds():
    """Test that deleting a category moves its sounds to the sentinel."""
    context = create_test_context("a.ogg", "b.ogg", "c.ogg")
    sfx = context.categories.create("SFX")
    other = context.categories.create("Other")
    a, b, c = context.catalog.sounds
    a.category_id = sfx.id
    b.category_id = sfx.id
    c.category_id = other.id

    reassigned = context.categories.delete(sfx.id, context.catalog)

    assert reassigned == [a, b]
    assert a.category_id == "uncategorized"
    assert b.category_id == "uncategorized"
    assert c.category_id == other.id
    assert context.categories.get(sfx.id) is None


def test_delete_protected_or_missing():
    """Test that the sentinel and unknown ids cannot be deleted."""
    context = create_test_context("a.ogg")

    with pytest.raises(NotDeletableError):
        context.categories.delete("uncategorized", context.catalog)
    with pytest.raises(NotDeletableError):
        context.categories.delete("missing", context.catalog)
    assert "uncategorized" in context.categories


def test_name_of_unknown():
    """Test the fallback name for unknown ids."""
    registry = CategoryRegistry()

    assert registry.name_of("nope") == "Unknown"


def test_names_stay_unique_over_operation_sequence():
    """Test uniqueness and sentinel survival across mixed operations."""
    context = create_test_context("a.ogg", "b.ogg")
    registry = context.categories
    names = ["Drums", "drums", "FX", "Voice", "fx ", "Misc", "VOICE"]
    created = []
    for name in names:
        try:
            created.append(registry.create(name))
        except DuplicateNameError:
            pass
    for category in created[:2]:
        try:
            registry.rename(category.id, "Misc")
        except DuplicateNameError:
            pass
    context.catalog.sounds[0].category_id = created[0].id
    registry.delete(created[0].id, context.catalog)
    registry.create("Drums")

    lowered = [c.name.casefold() for c in registry.list()]
    assert len(lowered) == len(set(lowered))
    assert registry.get("uncategorized").name == "Uncategorized"
    for sound in context.catalog:
        assert sound.category_id in registry
