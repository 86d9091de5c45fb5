"""
CmsEntry Repository

Database operations for the polymorphic cms_entries table and its media links.

Common Operations:
==================
- list_by_collection()          → Filtered, ordered, paginated entry list
- count_by_collection()         → Count with the same filter
- get_by_slug()                 → One entry by (collection, slug) + status filter
- get_with_relations()          → One entry by id, relations optional
- find_by_collection_and_slug() → Unfiltered lookup for duplicate checks
- update_fields()               → UPDATE ... WHERE id, returns affected rows
- delete_media_links() / delete_entry_row()
- add_media_link() / next_media_position()

Filtering:
==========
Every collection query is a conjunction built by build_entry_filters():

    collection = :collection
    [AND status = :status]     -- omitted when status is None ("all")
    [AND slug = :slug]

Lists are ordered by created_at DESC. Read statements use populate_existing
so entries already held by the session are refreshed, including relation
collections that may have changed since.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement, Select

from cms.models.cms_entry import CmsEntry
from cms.models.cms_entry_media import CmsEntryMedia
from cms.models.enums import CmsEntryStatus
from cms.repositories.base import BaseRepository
from cms.repositories.relations import apply_relations
from cms.schemas.cms import CmsIncludeRelations


def build_entry_filters(
    collection: str,
    status: Optional[CmsEntryStatus],
    slug: Optional[str] = None,
) -> list[ColumnElement[bool]]:
    """
    Build the WHERE conditions for a collection query.

    Args:
        collection: Collection slug
        status: Status to match, or None for any status
        slug: Exact slug to match, if any

    Returns:
        Conditions to AND together
    """
    conditions: list[ColumnElement[bool]] = [CmsEntry.collection == collection]

    if slug is not None:
        conditions.append(CmsEntry.slug == slug)

    if status is not None:
        conditions.append(CmsEntry.status == status)

    return conditions


class CmsEntryRepository(BaseRepository[CmsEntry]):
    """
    Repository for CmsEntry database operations.

    Knows nothing about the collection registry or error mapping; callers
    pass already-validated values (see CmsService).
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize CmsEntryRepository.

        Args:
            session: Async database session
        """
        super().__init__(CmsEntry, session)

    def _select(self, include: Optional[CmsIncludeRelations] = None) -> Select:
        stmt = select(CmsEntry).execution_options(populate_existing=True)
        return apply_relations(stmt, include)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_by_collection(
        self,
        collection: str,
        status: Optional[CmsEntryStatus],
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        include: Optional[CmsIncludeRelations] = None,
    ) -> list[CmsEntry]:
        """
        List entries of a collection, newest first.

        No limit is applied unless one is given.

        SQL Generated:
            SELECT * FROM cms_entries
            WHERE collection = 'blog' AND status = 'published'
            ORDER BY created_at DESC
            LIMIT 10 OFFSET 20
        """
        stmt = (
            self._select(include)
            .where(*build_entry_filters(collection, status))
            .order_by(CmsEntry.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_collection(
        self,
        collection: str,
        status: Optional[CmsEntryStatus],
    ) -> int:
        """
        Count entries matching the same filter as list_by_collection().

        SQL Generated:
            SELECT COUNT(*) FROM cms_entries WHERE collection = 'blog' AND status = 'published'
        """
        result = await self.session.execute(
            select(func.count())
            .select_from(CmsEntry)
            .where(*build_entry_filters(collection, status))
        )
        return result.scalar() or 0

    async def get_by_slug(
        self,
        collection: str,
        slug: str,
        status: Optional[CmsEntryStatus],
        include: Optional[CmsIncludeRelations] = None,
    ) -> Optional[CmsEntry]:
        """Get one entry by (collection, slug), honouring the status filter."""
        result = await self.session.execute(
            self._select(include)
            .where(*build_entry_filters(collection, status, slug=slug))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_with_relations(
        self,
        entry_id: UUID,
        include: Optional[CmsIncludeRelations] = None,
    ) -> Optional[CmsEntry]:
        """Get one entry by id with no collection or status filtering."""
        result = await self.session.execute(
            self._select(include).where(CmsEntry.id == entry_id)
        )
        return result.scalar_one_or_none()

    async def find_by_collection_and_slug(
        self,
        collection: str,
        slug: str,
    ) -> Optional[CmsEntry]:
        """
        Find the entry holding a slug in a collection, whatever its status.

        Used for duplicate-slug checks before writes.
        """
        return await self.get_by_slug(collection, slug, status=None)

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATE METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def update_fields(self, entry_id: UUID, values: dict[str, Any]) -> int:
        """
        Apply column values to one entry.

        Returns:
            Number of rows updated (0 when the entry no longer exists)

        SQL Generated:
            UPDATE cms_entries SET title = 'New', updated_at = '...' WHERE id = '...'
        """
        result = await self.session.execute(
            update(CmsEntry)
            .where(CmsEntry.id == entry_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete_media_links(self, entry_id: UUID) -> int:
        """Delete all media associations of an entry. Media rows are kept."""
        result = await self.session.execute(
            delete(CmsEntryMedia)
            .where(CmsEntryMedia.entry_id == entry_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_entry_row(self, entry_id: UUID) -> int:
        """Delete the entry row itself. Returns rows deleted."""
        result = await self.session.execute(
            delete(CmsEntry)
            .where(CmsEntry.id == entry_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    # ═══════════════════════════════════════════════════════════════════════════
    # MEDIA LINKS
    # ═══════════════════════════════════════════════════════════════════════════

    async def next_media_position(self, entry_id: UUID) -> int:
        """Position one past the current last media item (0 for none)."""
        result = await self.session.execute(
            select(func.max(CmsEntryMedia.position)).where(CmsEntryMedia.entry_id == entry_id)
        )
        current = result.scalar()
        return 0 if current is None else current + 1

    async def add_media_link(
        self,
        entry_id: UUID,
        media_id: UUID,
        position: int,
        caption: Optional[str] = None,
    ) -> CmsEntryMedia:
        link = CmsEntryMedia(
            entry_id=entry_id,
            media_id=media_id,
            position=position,
            caption=caption,
        )
        self.session.add(link)
        await self.session.flush()
        await self.session.refresh(link)
        return link
