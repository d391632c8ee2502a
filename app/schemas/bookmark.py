"""Bookmark schemas for API validation."""

from datetime import datetime
from typing import List, Optional

from pydantic import field_validator

from app.schemas.common import CamelModel


class BookmarkCreate(CamelModel):
    """Schema for creating a bookmark. The owner comes from the access token."""
    title: Optional[str] = None
    url: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = []

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, tags: List[str]) -> List[str]:
        # Tags are a set; keep first occurrence order
        return list(dict.fromkeys(tags))


class BookmarkResponse(CamelModel):
    """Schema for bookmark response."""
    id: str
    user_id: str
    title: Optional[str] = None
    url: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime
