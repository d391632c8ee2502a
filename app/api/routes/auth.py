"""Authentication endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import IntegrityError

from app.core.dependencies import DbSession, CurrentUser, Tokens
from app.schemas.common import MessageResponse
from app.schemas.user import (
    UserCreate,
    UserLogin,
    RefreshRequest,
    TokenResponse,
    AccessTokenResponse,
)
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter()


# ─────────────────────────────────────────────
# Signup
# ─────────────────────────────────────────────

@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(db: DbSession, token_service: Tokens, user_data: Optional[UserCreate] = None):
    """
    Register a new user.
    Returns access and refresh tokens.
    """
    try:
        user = await AuthService.create_user(db, user_data or UserCreate())
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except IntegrityError:
        # Lost a race with a concurrent signup for the same username/email
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username or email already in use",
        )

    tokens = await AuthService.create_tokens(db, user, token_service, message="User registered")
    await db.commit()
    return tokens


# ─────────────────────────────────────────────
# Login
# ─────────────────────────────────────────────

@router.post("/login", response_model=TokenResponse)
async def login(db: DbSession, token_service: Tokens, credentials: Optional[UserLogin] = None):
    """
    Authenticate a user.
    Returns a fresh access token and a new refresh token for this session.
    """
    credentials = credentials or UserLogin()
    try:
        user = await AuthService.authenticate_user(db, credentials.email, credentials.password)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    tokens = await AuthService.create_tokens(db, user, token_service, message="Login successful")
    await db.commit()
    logger.info(f"User {user.id} logged in")
    return tokens


# ─────────────────────────────────────────────
# Refresh Access Token (no rotation)
# ─────────────────────────────────────────────

@router.post("/refresh", response_model=AccessTokenResponse)
async def refresh_token(db: DbSession, token_service: Tokens, body: Optional[RefreshRequest] = None):
    """Exchange a stored refresh token for a new access token."""
    token = body.refresh_token if body else None
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - No refresh token provided",
        )

    access_token = await AuthService.refresh_access_token(db, token_service, token)
    if not access_token:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid refresh token",
        )

    return AccessTokenResponse(
        access_token=access_token,
        expires_in=token_service.access_expires_in,
    )


# ─────────────────────────────────────────────
# Logout (single device)
# ─────────────────────────────────────────────

@router.post("/logout", response_model=MessageResponse)
async def logout(db: DbSession, token_service: Tokens, body: Optional[RefreshRequest] = None):
    """
    Revoke one refresh token.

    Access tokens already issued stay valid until they expire.
    """
    token = body.refresh_token if body else None
    if not await AuthService.logout(db, token_service, token):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid refresh token",
        )

    await db.commit()
    return MessageResponse(message="Logged out successfully")


# ─────────────────────────────────────────────
# Logout from all devices
# ─────────────────────────────────────────────

@router.post("/logout-all", response_model=MessageResponse)
async def logout_all(current_user: CurrentUser, db: DbSession, token_service: Tokens):
    """Revoke every refresh token of the authenticated user."""
    revoked = await AuthService.logout_all(db, token_service, current_user.user_id)
    if revoked is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User not found",
        )

    await db.commit()
    return MessageResponse(message="Logged out from all devices")
