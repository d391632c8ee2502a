"""Bookmark endpoints. Every route is scoped to the authenticated owner."""

from typing import List

from fastapi import APIRouter, HTTPException, status

from app.core.dependencies import DbSession, CurrentUser
from app.schemas.bookmark import BookmarkCreate, BookmarkResponse
from app.schemas.common import MessageResponse
from app.services.bookmark_service import BookmarkService

router = APIRouter()


@router.post("", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
async def create_bookmark(data: BookmarkCreate, db: DbSession, current_user: CurrentUser):
    """Create a bookmark owned by the current user."""
    bookmark = await BookmarkService.create_bookmark(
        db=db,
        user_id=current_user.user_id,
        data=data,
    )
    await db.commit()
    return bookmark


@router.get("", response_model=List[BookmarkResponse])
async def list_bookmarks(db: DbSession, current_user: CurrentUser):
    """List the current user's bookmarks, newest first."""
    return await BookmarkService.get_user_bookmarks(db, current_user.user_id)


@router.delete("/{bookmark_id}", response_model=MessageResponse)
async def delete_bookmark(bookmark_id: str, db: DbSession, current_user: CurrentUser):
    """
    Delete one of the current user's bookmarks.

    A bookmark that does not exist and one owned by someone else produce
    the same 404.
    """
    deleted = await BookmarkService.delete_bookmark(
        db=db,
        bookmark_id=bookmark_id,
        user_id=current_user.user_id,
    )

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bookmark not found or unauthorized",
        )

    await db.commit()
    return MessageResponse(message="Bookmark deleted successfully")
