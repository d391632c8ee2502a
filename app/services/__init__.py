"""Services for business logic."""

from app.services.auth_service import AuthService
from app.services.bookmark_service import BookmarkService
from app.services.token_service import TokenService, TokenIdentity, get_token_service

__all__ = ["AuthService", "BookmarkService", "TokenService", "TokenIdentity", "get_token_service"]
