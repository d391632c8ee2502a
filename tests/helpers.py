"""Request helpers shared by the API tests."""

from typing import List

from httpx import AsyncClient
from sqlalchemy import select

from app.models.user import User

ACCESS_SECRET = "test-access-secret"
REFRESH_SECRET = "test-refresh-secret"


async def signup(client: AsyncClient, username: str, email: str, password: str):
    return await client.post(
        "/api/auth/signup",
        json={"username": username, "email": email, "password": password},
    )


async def login(client: AsyncClient, email: str, password: str):
    return await client.post("/api/auth/login", json={"email": email, "password": password})


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def stored_refresh_tokens(session_maker, email: str) -> List[str]:
    """Read a user's refresh-token collection through a fresh session."""
    async with session_maker() as session:
        result = await session.execute(select(User).where(User.email == email))
        user = result.scalar_one()
        return user.refresh_token_values
