"""Bookmark service: owner-scoped create, list and delete."""

from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.bookmark import Bookmark
from app.schemas.bookmark import BookmarkCreate


class BookmarkService:
    """Service for managing a user's bookmarks."""

    @staticmethod
    async def create_bookmark(
        db: AsyncSession,
        user_id: str,
        data: BookmarkCreate,
    ) -> Bookmark:
        bookmark = Bookmark(
            user_id=user_id,
            title=data.title,
            url=data.url,
            category=data.category,
            notes=data.notes,
            tags=list(data.tags),
        )
        db.add(bookmark)
        await db.flush()
        await db.refresh(bookmark)
        return bookmark

    @staticmethod
    async def get_user_bookmarks(db: AsyncSession, user_id: str) -> List[Bookmark]:
        """All bookmarks owned by the user, most recent first."""
        result = await db.execute(
            select(Bookmark)
            .where(Bookmark.user_id == user_id)
            .order_by(Bookmark.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def delete_bookmark(db: AsyncSession, bookmark_id: str, user_id: str) -> bool:
        """
        Delete a bookmark only if it belongs to the user.

        Matching on id and owner in one statement means a foreign id and a
        missing id look the same to the caller.
        """
        result = await db.execute(
            delete(Bookmark).where(
                Bookmark.id == bookmark_id,
                Bookmark.user_id == user_id,
            )
        )
        return result.rowcount > 0
