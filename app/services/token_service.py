"""Access / refresh token lifecycle backed by the user's refresh-token collection."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.models.refresh_token import RefreshToken
from app.models.user import User

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class MissingSecretError(RuntimeError):
    """Raised when a token must be signed with a secret that is not configured."""

    def __init__(self, name: str):
        super().__init__(f"Missing {name} configuration")
        self.name = name


@dataclass(frozen=True)
class TokenIdentity:
    """Identity decoded from a valid access token."""
    user_id: str
    email: Optional[str] = None


class TokenService:
    """
    Issues, verifies and revokes tokens.

    Access tokens are stateless: their validity is signature + expiry only.
    Refresh tokens are also stored in the owner's ``refresh_tokens``
    collection, and a refresh token is only valid while it is still there.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        algorithm: str = "HS256",
        access_expires: timedelta = timedelta(minutes=15),
        refresh_expires: timedelta = timedelta(days=7),
    ):
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.algorithm = algorithm
        self.access_expires = access_expires
        self.refresh_expires = refresh_expires

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            access_secret=settings.jwt_secret,
            refresh_secret=settings.refresh_secret,
            algorithm=settings.jwt_algorithm,
            access_expires=timedelta(minutes=settings.access_token_expire_minutes),
            refresh_expires=timedelta(days=settings.refresh_token_expire_days),
        )

    @property
    def access_expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return int(self.access_expires.total_seconds())

    # ─── JWT helpers ─────────────────────────────
    def _encode(self, claims: dict, secret: str, expires_delta: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "jti": str(uuid.uuid4()),
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def _decode(self, token: str, secret: str, token_type: str) -> Optional[dict]:
        if not secret or not token:
            return None
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except JWTError:
            return None
        if payload.get("type") != token_type or not payload.get("userId"):
            return None
        return payload

    # ─── Issuance ────────────────────────────────
    def issue_access_token(self, user: User) -> str:
        """Sign a short-lived token carrying the user's id and email."""
        if not self.access_secret:
            raise MissingSecretError("JWT_SECRET")
        return self._encode(
            {
                "sub": str(user.id),
                "userId": str(user.id),
                "email": user.email,
                "type": ACCESS_TOKEN_TYPE,
            },
            self.access_secret,
            self.access_expires,
        )

    async def issue_refresh_token(self, db: AsyncSession, user: User) -> str:
        """Sign a long-lived token and append it to the user's stored collection."""
        if not self.refresh_secret:
            raise MissingSecretError("REFRESH_SECRET")
        token = self._encode(
            {"sub": str(user.id), "userId": str(user.id), "type": REFRESH_TOKEN_TYPE},
            self.refresh_secret,
            self.refresh_expires,
        )
        user.refresh_tokens.append(RefreshToken(token=token))
        db.add(user)
        await db.flush()
        return token

    # ─── Verification ────────────────────────────
    def verify_access_token(self, token: str) -> Optional[TokenIdentity]:
        payload = self._decode(token, self.access_secret, ACCESS_TOKEN_TYPE)
        if payload is None:
            return None
        return TokenIdentity(user_id=payload["userId"], email=payload.get("email"))

    def verify_refresh_token(self, token: str, user: User) -> bool:
        """Valid only if well-signed, unexpired AND still in the user's collection."""
        if token not in user.refresh_token_values:
            return False
        return self._decode(token, self.refresh_secret, REFRESH_TOKEN_TYPE) is not None

    # ─── Lookup ──────────────────────────────────
    @staticmethod
    async def find_user_by_refresh_token(db: AsyncSession, token: str) -> Optional[User]:
        """Return the user whose collection contains this exact token string."""
        if not isinstance(token, str) or not token:
            return None
        result = await db.execute(
            select(User)
            .join(User.refresh_tokens)
            .where(RefreshToken.token == token)
            .limit(1)
        )
        return result.scalars().first()

    # ─── Revocation ──────────────────────────────
    async def revoke_refresh_token(self, db: AsyncSession, user: User, token: str) -> bool:
        """Remove one matching entry from the user's collection."""
        for record in user.refresh_tokens:
            if record.token == token:
                user.refresh_tokens.remove(record)
                await db.flush()
                return True
        return False

    async def revoke_all_refresh_tokens(self, db: AsyncSession, user: User) -> int:
        """Clear the user's collection. Returns how many entries were removed."""
        count = len(user.refresh_tokens)
        user.refresh_tokens.clear()
        await db.flush()
        return count


@lru_cache()
def get_token_service() -> TokenService:
    """Get the token service configured from application settings."""
    return TokenService.from_settings(get_settings())
