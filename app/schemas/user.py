"""User and token schemas for API validation."""

from typing import Any, Optional

from app.schemas.common import CamelModel


class UserCreate(CamelModel):
    """
    Schema for user registration.

    Fields are optional here so that a missing value is reported with the
    signup-specific message rather than a generic validation error.
    """
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserLogin(CamelModel):
    """Schema for user login."""
    email: Optional[str] = None
    password: Optional[str] = None


class RefreshRequest(CamelModel):
    """
    Body of the refresh and logout endpoints.

    Any JSON value is accepted; a value that is not a string is simply an
    invalid token, not a malformed request.
    """
    refresh_token: Any = None


class TokenResponse(CamelModel):
    """Schema for the access + refresh token pair."""
    message: Optional[str] = None
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class AccessTokenResponse(CamelModel):
    """Schema for a freshly issued access token."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
