"""
CMS Service

Business logic for content entries: the operations request handlers call.

Responsibilities:
=================
- Validate input before touching the store (ValidationError)
- Resolve collection slugs through the injected CollectionRegistry
- Advisory duplicate-slug checks, with store constraint violations mapped to
  UniqueConstraintViolationError
- Status lifecycle and published_at bookkeeping
- Multi-statement mutations inside atomic(session)
- Per-request memoization of reads (cleared by every mutation)
- Shaping rows into CmsEntryResult

Usage:
======
    from cms.services.cms_service import CmsService

    service = CmsService(db, registry)
    entry = await service.create_entry(
        "blog",
        slug="hello-world",
        title="Hello",
        content={"type": "doc", "content": []},
        fields={"excerpt": "First post"},
        created_by=user_id,
    )
    await service.update_entry(entry.id, status="published")
    posts = await service.list_entries("blog", limit=10)
"""

from typing import Any, Mapping, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cms.config.collections import CollectionRegistry
from cms.core.exceptions import (
    EntryNotFoundError,
    DuplicateSlugError,
    InvalidStatusTransitionError,
    MediaNotFoundError,
    UniqueConstraintViolationError,
    UpdateRaceLostError,
    ValidationError,
)
from cms.core.logging import logger
from cms.db.session import atomic
from cms.models.base import utcnow
from cms.models.enums import STATUS_ALL, CmsEntryStatus, can_transition
from cms.models.media import Media
from cms.repositories.base import BaseRepository
from cms.repositories.cms_entry_repository import CmsEntryRepository
from cms.repositories.relations import to_entry_media_result, to_entry_result
from cms.schemas.cms import (
    CmsEntryMediaResult,
    CmsEntryResult,
    CmsIncludeRelations,
    CreateCmsEntryRequest,
    UpdateCmsEntryRequest,
)
from cms.schemas.common import PaginatedResponse, PaginationMeta, PaginationParams
from cms.services.request_cache import RequestCache, request_cached


StatusFilter = Union[CmsEntryStatus, str]
IncludeRelations = Union[CmsIncludeRelations, Mapping[str, bool], None]


# ═══════════════════════════════════════════════════════════════════════════════
# INPUT NORMALIZATION
# ═══════════════════════════════════════════════════════════════════════════════


def _validate(model: type[BaseModel], data: Mapping[str, Any], message: str) -> Any:
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(message, details={"errors": exc.errors(include_url=False)}) from exc


def parse_status_filter(status: StatusFilter) -> Optional[CmsEntryStatus]:
    """
    Normalize a query status.

    Returns:
        The status to filter on, or None for the "all" wildcard

    Raises:
        ValidationError: If the value is neither a status nor "all"
    """
    if status == STATUS_ALL:
        return None
    try:
        return CmsEntryStatus(status)
    except ValueError as exc:
        raise ValidationError(
            f'Invalid status "{status}"',
            details={"allowed": [s.value for s in CmsEntryStatus] + [STATUS_ALL]},
        ) from exc


def parse_entry_id(entry_id: Union[UUID, str]) -> UUID:
    if isinstance(entry_id, UUID):
        return entry_id
    try:
        return UUID(str(entry_id))
    except ValueError as exc:
        raise ValidationError(f"Malformed id '{entry_id}'", details={"id": str(entry_id)}) from exc


def parse_include(include: IncludeRelations) -> Optional[CmsIncludeRelations]:
    if include is None or isinstance(include, CmsIncludeRelations):
        return include
    return _validate(CmsIncludeRelations, include, "Invalid include_relations")


def _check_non_negative(**values: Optional[int]) -> None:
    for name, value in values.items():
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValidationError(
                f"{name} must be a non-negative integer",
                details={name: value},
            )


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == "23505" or getattr(orig, "pgcode", None) == "23505":
        return True
    return "unique" in str(orig).lower()


class CmsService:
    """
    Service for content entry operations.

    One instance per request: it holds that request's session and read cache.

    Handles:
    - Listing, counting and paging entries of a collection
    - Fetching one entry by slug or id, with optional relations
    - Creating, updating and deleting entries
    - Attaching media to entries
    """

    def __init__(self, session: AsyncSession, registry: CollectionRegistry) -> None:
        """
        Initialize CmsService.

        Args:
            session: Async database session
            registry: Collection registry built at startup
        """
        self.session = session
        self.registry = registry
        self.entry_repo = CmsEntryRepository(session)
        self.media_repo = BaseRepository(Media, session)
        self.cache = RequestCache()

    # ═══════════════════════════════════════════════════════════════════════════
    # QUERIES
    # ═══════════════════════════════════════════════════════════════════════════

    @request_cached
    async def list_entries(
        self,
        collection_slug: str,
        *,
        status: StatusFilter = CmsEntryStatus.PUBLISHED,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        include_relations: IncludeRelations = None,
    ) -> list[CmsEntryResult]:
        """
        List entries of a collection, newest first.

        Args:
            collection_slug: Collection to list
            status: Status to match; "all" disables the filter (default: published)
            limit: Maximum entries to return; unbounded when None
            offset: Entries to skip
            include_relations: Relations to load with each entry

        Returns:
            Entries ordered by created_at descending

        Raises:
            CollectionNotFoundError: Unknown collection
            ValidationError: Bad status, limit or offset

        Example:
            posts = await service.list_entries(
                "blog", limit=10, include_relations={"media": True}
            )
        """
        status_filter = parse_status_filter(status)
        _check_non_negative(limit=limit, offset=offset)
        include = parse_include(include_relations)
        collection = self.registry.resolve(collection_slug)

        entries = await self.entry_repo.list_by_collection(
            collection.slug,
            status_filter,
            limit=limit,
            offset=offset,
            include=include,
        )
        return [to_entry_result(entry, include) for entry in entries]

    @request_cached
    async def count_entries(
        self,
        collection_slug: str,
        *,
        status: StatusFilter = CmsEntryStatus.PUBLISHED,
    ) -> int:
        """Count entries matching the same filter as list_entries()."""
        status_filter = parse_status_filter(status)
        collection = self.registry.resolve(collection_slug)
        return await self.entry_repo.count_by_collection(collection.slug, status_filter)

    async def list_entries_page(
        self,
        collection_slug: str,
        *,
        page: int = 1,
        per_page: int = 20,
        status: StatusFilter = CmsEntryStatus.PUBLISHED,
        include_relations: IncludeRelations = None,
    ) -> PaginatedResponse[CmsEntryResult]:
        """
        Page-number pagination over list_entries().

        Returns:
            PaginatedResponse with the page's entries and pagination metadata
        """
        params = _validate(
            PaginationParams,
            {"page": page, "per_page": per_page},
            "Invalid pagination parameters",
        )

        entries = await self.list_entries(
            collection_slug,
            status=status,
            limit=params.limit,
            offset=params.offset,
            include_relations=include_relations,
        )
        total = await self.count_entries(collection_slug, status=status)

        return PaginatedResponse[CmsEntryResult](
            data=entries,
            pagination=PaginationMeta.create(page=params.page, per_page=params.per_page, total=total),
        )

    @request_cached
    async def get_entry_by_slug(
        self,
        collection_slug: str,
        slug: str,
        *,
        status: StatusFilter = CmsEntryStatus.PUBLISHED,
        include_relations: IncludeRelations = None,
    ) -> Optional[CmsEntryResult]:
        """
        Get one entry of a collection by slug.

        Returns:
            The entry, or None when nothing matches (including a status mismatch)

        Raises:
            CollectionNotFoundError: Unknown collection
        """
        status_filter = parse_status_filter(status)
        include = parse_include(include_relations)
        collection = self.registry.resolve(collection_slug)

        entry = await self.entry_repo.get_by_slug(collection.slug, slug, status_filter, include)
        if entry is None:
            return None
        return to_entry_result(entry, include)

    @request_cached
    async def get_entry_by_id(
        self,
        entry_id: Union[UUID, str],
        *,
        include_relations: IncludeRelations = None,
    ) -> Optional[CmsEntryResult]:
        """
        Get one entry by id, bypassing collection and status filters.

        Intended for admin/edit screens.
        """
        record_id = parse_entry_id(entry_id)
        include = parse_include(include_relations)

        entry = await self.entry_repo.get_with_relations(record_id, include)
        if entry is None:
            return None
        return to_entry_result(entry, include)

    # ═══════════════════════════════════════════════════════════════════════════
    # MUTATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_entry(
        self,
        collection_slug: str,
        *,
        slug: str,
        title: str,
        content: Any,
        fields: dict[str, Any],
        created_by: Union[UUID, str],
        status: Optional[Union[CmsEntryStatus, str]] = None,
    ) -> CmsEntryResult:
        """
        Create an entry in a collection.

        Flow:
        1. Validate input
        2. Resolve the collection
        3. Reject a slug already used in the collection (DuplicateSlugError)
        4. Insert; a concurrent insert of the same slug surfaces as
           UniqueConstraintViolationError

        Returns:
            The persisted entry with generated id and timestamps
        """
        request: CreateCmsEntryRequest = _validate(
            CreateCmsEntryRequest,
            {
                "slug": slug,
                "title": title,
                "content": content,
                "fields": fields,
                "created_by": created_by,
                "status": status,
            },
            "Invalid entry data",
        )
        collection = self.registry.resolve(collection_slug)
        entry_status = request.status or CmsEntryStatus.DRAFT

        existing = await self.entry_repo.find_by_collection_and_slug(collection.slug, request.slug)
        if existing is not None:
            raise DuplicateSlugError(collection.slug, request.slug)

        now = utcnow()
        try:
            async with atomic(self.session):
                entry = await self.entry_repo.create(
                    collection=collection.slug,
                    slug=request.slug,
                    title=request.title,
                    content=request.content,
                    fields=request.fields,
                    status=entry_status,
                    created_by=request.created_by,
                    updated_by=request.created_by,
                    published_at=now if entry_status == CmsEntryStatus.PUBLISHED else None,
                    created_at=now,
                    updated_at=now,
                )
        except IntegrityError as exc:
            if not _is_unique_violation(exc):
                raise
            logger.warning(
                "CMS slug taken by concurrent insert",
                collection=collection.slug,
                slug=request.slug,
            )
            raise UniqueConstraintViolationError(collection.slug, request.slug) from exc

        self.cache.clear()
        logger.info(
            "CMS entry created",
            entry_id=str(entry.id),
            collection=collection.slug,
            slug=entry.slug,
            status=entry.status.value,
        )
        return to_entry_result(entry)

    async def update_entry(self, entry_id: Union[UUID, str], **changes: Any) -> CmsEntryResult:
        """
        Apply a partial update to an entry.

        Accepted keys: slug, title, content, fields, status, updated_by.
        Attributes not supplied keep their values; updated_at always advances.
        The first transition to published sets published_at; later
        re-publishing keeps the original value.

        Status moves draft -> published -> archived -> published. A published
        or archived entry never returns to draft: unpublishing means archiving,
        so published_at stays meaningful. Draft cannot skip straight to archived.

        Raises:
            ValidationError: Unknown key, null value or malformed value
            InvalidStatusTransitionError: Status change not allowed
            EntryNotFoundError: No entry with this id
            DuplicateSlugError: New slug already used in the collection
            UniqueConstraintViolationError: Store rejected the new slug
            UpdateRaceLostError: Entry deleted while the update was in flight
        """
        record_id = parse_entry_id(entry_id)
        request: UpdateCmsEntryRequest = _validate(
            UpdateCmsEntryRequest, changes, "Invalid entry update"
        )
        values = request.model_dump(exclude_unset=True)

        existing = await self.entry_repo.get(record_id)
        if existing is None:
            raise EntryNotFoundError(str(record_id))

        new_slug = values.get("slug")
        if new_slug is not None and new_slug != existing.slug:
            conflict = await self.entry_repo.find_by_collection_and_slug(existing.collection, new_slug)
            if conflict is not None and conflict.id != existing.id:
                raise DuplicateSlugError(existing.collection, new_slug)

        new_status = values.get("status")
        if new_status is not None:
            if not can_transition(existing.status, new_status):
                raise InvalidStatusTransitionError(existing.status.value, new_status.value)
            if new_status == CmsEntryStatus.PUBLISHED and existing.published_at is None:
                values["published_at"] = utcnow()

        values["updated_at"] = utcnow()

        try:
            async with atomic(self.session):
                affected = await self.entry_repo.update_fields(record_id, values)
        except IntegrityError as exc:
            if not _is_unique_violation(exc):
                raise
            raise UniqueConstraintViolationError(existing.collection, new_slug or existing.slug) from exc

        self.cache.clear()

        if affected == 0:
            raise UpdateRaceLostError(str(record_id))

        updated = await self.entry_repo.get(record_id)
        if updated is None:
            raise UpdateRaceLostError(str(record_id))

        logger.info(
            "CMS entry updated",
            entry_id=str(record_id),
            collection=updated.collection,
            slug=updated.slug,
            changed=sorted(key for key in values if key != "updated_at"),
        )
        return to_entry_result(updated)

    async def delete_entry(self, entry_id: Union[UUID, str]) -> None:
        """
        Delete an entry and its media associations.

        Both deletes run in one atomic unit. Media assets are not deleted.

        Raises:
            EntryNotFoundError: No entry with this id
        """
        record_id = parse_entry_id(entry_id)

        existing = await self.entry_repo.get(record_id)
        if existing is None:
            raise EntryNotFoundError(str(record_id))

        async with atomic(self.session):
            links_deleted = await self.entry_repo.delete_media_links(record_id)
            deleted = await self.entry_repo.delete_entry_row(record_id)
            if deleted == 0:
                raise EntryNotFoundError(str(record_id))

        self.cache.clear()
        logger.info(
            "CMS entry deleted",
            entry_id=str(record_id),
            collection=existing.collection,
            slug=existing.slug,
            media_links_deleted=links_deleted,
        )

    async def attach_media(
        self,
        entry_id: Union[UUID, str],
        media_id: Union[UUID, str],
        *,
        caption: Optional[str] = None,
        position: Optional[int] = None,
    ) -> CmsEntryMediaResult:
        """
        Attach an existing media asset to an entry.

        Position defaults to the end of the entry's media list.

        Raises:
            EntryNotFoundError: No entry with this id
            MediaNotFoundError: No media asset with this id
            ValidationError: Negative position
        """
        record_id = parse_entry_id(entry_id)
        asset_id = parse_entry_id(media_id)
        _check_non_negative(position=position)

        if not await self.entry_repo.exists(record_id):
            raise EntryNotFoundError(str(record_id))
        if not await self.media_repo.exists(asset_id):
            raise MediaNotFoundError(str(asset_id))

        if position is None:
            position = await self.entry_repo.next_media_position(record_id)

        async with atomic(self.session):
            link = await self.entry_repo.add_media_link(record_id, asset_id, position, caption)

        self.cache.clear()
        logger.info(
            "CMS media attached",
            entry_id=str(record_id),
            media_id=str(asset_id),
            position=position,
        )
        return to_entry_media_result(link)
