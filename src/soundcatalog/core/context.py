"""Process-wide catalog state."""

from dataclasses import dataclass, field
from typing import Optional

from soundcatalog.core.catalog import SoundCatalog
from soundcatalog.core.events import EventBus
from soundcatalog.core.models import CatalogConfig, ViewCriteria
from soundcatalog.core.registry import CategoryRegistry


@dataclass
class CatalogContext:
    """
    Everything the soundboard mutates, owned in one place.

    Created once at startup and handed to every service.
    """

    config: CatalogConfig
    categories: CategoryRegistry
    catalog: SoundCatalog
    events: EventBus = field(default_factory=EventBus)
    criteria: ViewCriteria = field(default_factory=ViewCriteria)

    @classmethod
    def create(cls, config: Optional[CatalogConfig] = None) -> "CatalogContext":
        """Build an empty context holding only the sentinel category."""
        config = config or CatalogConfig()
        categories = CategoryRegistry(config.uncategorized_id, config.uncategorized_name)
        catalog = SoundCatalog(categories, config)
        return cls(config=config, categories=categories, catalog=catalog)
