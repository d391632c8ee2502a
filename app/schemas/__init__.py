"""Pydantic schemas for API request/response validation."""

from app.schemas.common import CamelModel, MessageResponse
from app.schemas.user import (
    UserCreate,
    UserLogin,
    RefreshRequest,
    TokenResponse,
    AccessTokenResponse,
)
from app.schemas.bookmark import BookmarkCreate, BookmarkResponse

__all__ = [
    "CamelModel",
    "MessageResponse",
    "UserCreate",
    "UserLogin",
    "RefreshRequest",
    "TokenResponse",
    "AccessTokenResponse",
    "BookmarkCreate",
    "BookmarkResponse",
]
