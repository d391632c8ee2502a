"""Shared FastAPI dependencies: DB session, token service and the auth gate."""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.services.token_service import TokenIdentity, TokenService, get_token_service

# Bearer token extractor; a missing header is handled below, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]
Tokens = Annotated[TokenService, Depends(get_token_service)]


async def get_current_identity(
    token_service: Tokens,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenIdentity:
    """
    Validate the bearer access token and return the identity it carries.

    Raises 401 if no token was sent and 403 if it is invalid or expired.
    Nothing is read from or written to the database.
    """
    if not credentials or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - No token provided",
        )

    identity = token_service.verify_access_token(credentials.credentials)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )
    return identity


CurrentUser = Annotated[TokenIdentity, Depends(get_current_identity)]
