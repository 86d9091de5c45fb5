"""
Generic repository over a UUID-keyed model.

Provides the three operations every CMS table needs (id lookup, existence
check, insert). Subclasses add table-specific queries:

    class CmsEntryRepository(BaseRepository[CmsEntry]):
        ...

    media_repo = BaseRepository(Media, session)
    await media_repo.exists(media_id)

Repositories only flush. The surrounding atomic() block or get_db() decides
when work is committed.
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from cms.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Attributes:
        model: Mapped class, must have a UUID `id` primary key
        session: Session of the current request
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Fetch one row by id, or None.

        Uses populate_existing: a row another session deleted or changed is
        seen as it is now, even if this session already holds the object.

        SQL Generated:
            SELECT * FROM cms_entries WHERE id = '550e8400-...'
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == record_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def exists(self, record_id: UUID) -> bool:
        """
        SQL Generated:
            SELECT EXISTS (SELECT * FROM media WHERE id = '...')
        """
        result = await self.session.execute(
            select(exists().where(self.model.id == record_id))
        )
        return bool(result.scalar())

    async def create(self, **values: Any) -> ModelType:
        """
        Insert one row and return it with generated id and server defaults loaded.

        SQL Generated:
            INSERT INTO cms_entries (id, collection, slug, ...) VALUES (...)
        """
        instance = self.model(**values)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance
