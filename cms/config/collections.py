"""
Collection Registry

Process-wide, read-only lookup from collection slug to its definition.

The registry is built once at startup (normally from settings) and handed
to every CmsService instance. Nothing mutates it afterwards, so any number of
concurrent requests can read from it.

Usage:
======
    from cms.config.settings import settings
    from cms.config.collections import CollectionRegistry

    registry = CollectionRegistry.from_settings(settings)
    blog = registry.resolve("blog")
    print(blog.labels.plural)  # "Blogs"

    registry.resolve("nope")   # raises CollectionNotFoundError
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from cms.config.settings import Settings
from cms.core.exceptions import CollectionNotFoundError, ValidationError
from cms.schemas.collection import CollectionDefinition


class CollectionRegistry:
    """
    Immutable mapping of collection slug -> CollectionDefinition.

    Example:
        registry = CollectionRegistry.from_config({
            "blog": {"slug": "blog", "labels": {"singular": "Blog", "plural": "Blogs"}},
        })
        "blog" in registry      # True
        registry.slugs()        # ("blog",)
    """

    def __init__(self, collections: Mapping[str, CollectionDefinition]) -> None:
        for key, definition in collections.items():
            if key != definition.slug:
                raise ValidationError(
                    f'Collection key "{key}" does not match its slug "{definition.slug}"',
                    details={"key": key, "slug": definition.slug},
                )
        self._collections: Mapping[str, CollectionDefinition] = MappingProxyType(
            dict(collections)
        )

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Union[CollectionDefinition, Mapping[str, Any]]],
    ) -> "CollectionRegistry":
        """
        Build a registry from raw configuration.

        Args:
            config: Slug -> definition, either as CollectionDefinition instances
                or plain dicts with "slug" and "labels"

        Raises:
            ValidationError: If any definition is malformed or keyed wrongly
        """
        definitions: dict[str, CollectionDefinition] = {}
        for key, raw in config.items():
            if isinstance(raw, CollectionDefinition):
                definitions[key] = raw
                continue
            try:
                definitions[key] = CollectionDefinition.model_validate(raw)
            except PydanticValidationError as exc:
                raise ValidationError(
                    f'Invalid definition for collection "{key}"',
                    details={"errors": exc.errors(include_url=False)},
                ) from exc
        return cls(definitions)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CollectionRegistry":
        """Build the registry from settings.CMS_COLLECTIONS."""
        return cls.from_config(settings.CMS_COLLECTIONS)

    def resolve(self, slug: str) -> CollectionDefinition:
        """
        Look up a collection by slug.

        Raises:
            CollectionNotFoundError: If the slug is not configured
        """
        definition = self._collections.get(slug)
        if definition is None:
            raise CollectionNotFoundError(slug)
        return definition

    def slugs(self) -> tuple[str, ...]:
        return tuple(self._collections)

    def __contains__(self, slug: object) -> bool:
        return slug in self._collections

    def __iter__(self) -> Iterator[CollectionDefinition]:
        return iter(self._collections.values())

    def __len__(self) -> int:
        return len(self._collections)

    def __repr__(self) -> str:
        return f"<CollectionRegistry(collections={list(self._collections)})>"
