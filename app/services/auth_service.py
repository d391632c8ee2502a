"""Authentication service: signup, login, refresh and logout flows."""

import logging
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.models.user import User
from app.schemas.user import UserCreate, TokenResponse
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)
settings = get_settings()
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__default_rounds=settings.bcrypt_rounds,
)


class AuthService:
    """Credential store operations and the auth flows built on them."""

    # ─── Password ────────────────────────────────
    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain: str, hashed: str) -> bool:
        return pwd_context.verify(plain, hashed)

    @staticmethod
    async def is_password_in_use(db: AsyncSession, password: str) -> bool:
        """
        Check the plaintext password against every stored hash.

        Password reuse is forbidden across *all* accounts, so this has to
        scan the whole credential store: bcrypt salts every hash, which
        rules out an indexed lookup. Cost grows linearly with user count.
        """
        result = await db.execute(select(User.hashed_password))
        for hashed in result.scalars():
            if AuthService.verify_password(password, hashed):
                return True
        return False

    # ─── User Lookup ─────────────────────────────
    @staticmethod
    async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    # ─── Registration ───────────────────────────
    @staticmethod
    async def create_user(db: AsyncSession, user_data: UserCreate) -> User:
        if not user_data.username or not user_data.email or not user_data.password:
            raise ValueError("All fields (username, email, password) are required.")

        if await AuthService.get_user_by_username(db, user_data.username):
            raise ValueError("Username is already taken")
        if await AuthService.get_user_by_email(db, user_data.email):
            raise ValueError("Email is already in use")
        if await AuthService.is_password_in_use(db, user_data.password):
            raise ValueError("This password has already been used")

        user = User(
            username=user_data.username,
            email=user_data.email,
            hashed_password=AuthService.hash_password(user_data.password),
            refresh_tokens=[],
        )
        db.add(user)
        await db.flush()
        logger.info(f"User registered: {user.id}")
        return user

    # ─── Login ───────────────────────────────────
    @staticmethod
    async def authenticate_user(db: AsyncSession, email: Optional[str], password: Optional[str]) -> User:
        user = await AuthService.get_user_by_email(db, email) if email else None
        if not user:
            raise ValueError("User with this email does not exist")
        if not password or not AuthService.verify_password(password, user.hashed_password):
            raise ValueError("Invalid password")
        return user

    # ─── Token pair ──────────────────────────────
    @staticmethod
    async def create_tokens(
        db: AsyncSession,
        user: User,
        token_service: TokenService,
        message: Optional[str] = None,
    ) -> TokenResponse:
        access_token = token_service.issue_access_token(user)
        refresh_token = await token_service.issue_refresh_token(db, user)
        return TokenResponse(
            message=message,
            access_token=access_token,
            refresh_token=refresh_token,
            token_type="bearer",
            expires_in=token_service.access_expires_in,
        )

    # ─── Refresh Access Token ───────────────────
    @staticmethod
    async def refresh_access_token(
        db: AsyncSession,
        token_service: TokenService,
        refresh_token: str,
    ) -> Optional[str]:
        """
        Exchange a stored refresh token for a new access token.

        The refresh token itself is not rotated. Returns None when the token
        is unknown, expired or badly signed; callers cannot tell which.
        """
        user = await token_service.find_user_by_refresh_token(db, refresh_token)
        if not user or not token_service.verify_refresh_token(refresh_token, user):
            logger.warning("Rejected refresh attempt")
            return None
        return token_service.issue_access_token(user)

    # ─── Logout Current Token ───────────────────
    @staticmethod
    async def logout(db: AsyncSession, token_service: TokenService, refresh_token: str) -> bool:
        user = await token_service.find_user_by_refresh_token(db, refresh_token)
        if not user:
            return False
        await token_service.revoke_refresh_token(db, user, refresh_token)
        logger.info(f"User {user.id} logged out of one session")
        return True

    # ─── Logout All Devices ─────────────────────
    @staticmethod
    async def logout_all(db: AsyncSession, token_service: TokenService, user_id: str) -> Optional[int]:
        user = await AuthService.get_user_by_id(db, user_id)
        if not user:
            return None
        revoked = await token_service.revoke_all_refresh_tokens(db, user)
        logger.info(f"User {user.id} logged out of all sessions ({revoked} refresh tokens revoked)")
        return revoked
