"""Application configuration settings."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Bookmarks API"
    app_env: str = "development"
    debug: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    api_prefix: str = "/api"

    # Database
    database_url: str = "sqlite+aiosqlite:///./bookmarks.db"

    # JWT Authentication (empty string means "not configured")
    jwt_secret: str = ""
    refresh_secret: str = ""
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 7

    # Password hashing cost
    bcrypt_rounds: int = 10

    # CORS
    cors_origins: str = "*"

    # Security
    allowed_hosts: str = "*"

    @property
    def allowed_hosts_list(self) -> List[str]:
        """Get allowed hosts as a list."""
        return [host.strip() for host in self.allowed_hosts.split(",")]

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def missing_secrets(self) -> List[str]:
        """Names of the signing secrets that are not configured."""
        missing = []
        if not self.jwt_secret:
            missing.append("JWT_SECRET")
        if not self.refresh_secret:
            missing.append("REFRESH_SECRET")
        return missing

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
