"""
Relation Loader

Optional eager loading of an entry's creator and media, and shaping of loaded
rows into CmsEntryResult objects.

How It Works:
=============
    include = CmsIncludeRelations(created_by_user=True, media=True)

    stmt = select(CmsEntry).where(...)
    stmt = apply_relations(stmt, include)
    #   + selectinload(CmsEntry.created_by_user).load_only(id, first_name, ...)
    #   + selectinload(CmsEntry.entry_media).selectinload(CmsEntryMedia.media)

    entries = (await session.execute(stmt)).scalars().all()
    results = [to_entry_result(entry, include) for entry in entries]

With no flag set no loader options are added and the relation fields of the
result stay None. The creator is loaded with load_only() on the public profile
columns, so password hashes never leave the database.
"""

from typing import Optional, TypeVar

from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption
from sqlalchemy.sql import Select

from cms.models.cms_entry import CmsEntry
from cms.models.cms_entry_media import CmsEntryMedia
from cms.models.media import Media
from cms.models.user import User
from cms.schemas.cms import (
    CmsEntryMediaResult,
    CmsEntryResult,
    CmsIncludeRelations,
    CmsMediaAsset,
    CmsUserProfile,
)


SelectT = TypeVar("SelectT", bound=Select)

NO_RELATIONS = CmsIncludeRelations()


def build_relation_options(include: Optional[CmsIncludeRelations]) -> list[LoaderOption]:
    """
    Translate relation flags into SQLAlchemy loader options.

    Args:
        include: Requested relations, or None for none

    Returns:
        Loader options to pass to Select.options(); empty when nothing is requested
    """
    if include is None or not include.any:
        return []

    options: list[LoaderOption] = []

    if include.created_by_user:
        options.append(
            selectinload(CmsEntry.created_by_user).load_only(
                User.id,
                User.first_name,
                User.last_name,
                User.email,
                User.avatar,
            )
        )

    if include.media:
        options.append(
            selectinload(CmsEntry.entry_media).selectinload(CmsEntryMedia.media)
        )

    return options


def apply_relations(stmt: SelectT, include: Optional[CmsIncludeRelations]) -> SelectT:
    """Extend a pending entry query with the requested relations."""
    options = build_relation_options(include)
    if not options:
        return stmt
    return stmt.options(*options)


# ═══════════════════════════════════════════════════════════════════════════════
# RESULT SHAPING
# ═══════════════════════════════════════════════════════════════════════════════


def to_media_asset(media: Media) -> CmsMediaAsset:
    return CmsMediaAsset(
        id=media.id,
        file_name=media.file_name,
        mime_type=media.mime_type,
        size_in_bytes=media.size_in_bytes,
        bucket_key=media.bucket_key,
        width=media.width,
        height=media.height,
        alt=media.alt,
    )


def to_entry_media_result(link: CmsEntryMedia, with_media: bool = False) -> CmsEntryMediaResult:
    return CmsEntryMediaResult(
        id=link.id,
        entry_id=link.entry_id,
        media_id=link.media_id,
        position=link.position,
        caption=link.caption,
        media=to_media_asset(link.media) if with_media else None,
    )


def to_user_profile(user: User) -> CmsUserProfile:
    return CmsUserProfile(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        avatar=user.avatar,
    )


def to_entry_result(
    entry: CmsEntry,
    include: Optional[CmsIncludeRelations] = None,
) -> CmsEntryResult:
    """
    Shape a loaded entry into its public result.

    Only relations flagged in `include` are read; the entry must have been
    fetched with the same flags (see apply_relations), otherwise the
    lazy="raise" relationships raise instead of issuing hidden queries.
    """
    include = include or NO_RELATIONS

    result = CmsEntryResult(
        id=entry.id,
        collection=entry.collection,
        slug=entry.slug,
        title=entry.title,
        content=entry.content,
        fields=entry.fields,
        status=entry.status,
        created_by=entry.created_by,
        updated_by=entry.updated_by,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
        published_at=entry.published_at,
    )

    if include.created_by_user and entry.created_by_user is not None:
        result.created_by_user = to_user_profile(entry.created_by_user)

    if include.media:
        links = sorted(entry.entry_media, key=lambda link: (link.position, str(link.id)))
        result.entry_media = [to_entry_media_result(link, with_media=True) for link in links]

    return result
