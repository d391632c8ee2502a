"""API routes package."""

from fastapi import APIRouter

from app.api.routes import (
    auth,
    bookmarks,
    health,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(bookmarks.router, prefix="/bookmarks", tags=["Bookmarks"])
