"""
Application configuration using Pydantic settings.

Usage:
    from devconnector.config import get_settings
    settings = get_settings()

Settings are passed explicitly into the services that need secrets
(AuthService, GitHubClient); nothing below the HTTP layer calls
get_settings() on its own.
"""

import os
import warnings
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values that must never sign production tokens
WEAK_JWT_SECRETS = (
    "CHANGE_ME",
    "changeme",
    "secret",
    "mysecrettoken",
    "jwt-secret",
    "supersecret",
    "development",
    "test",
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and .env file.

    Required for production:
        - JWT_SECRET_KEY (min 32 chars)
        - DATABASE_URL
    Optional:
        - GITHUB_TOKEN (raises the GitHub API rate limit for the repo proxy)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "DevConnector"
    api_prefix: str = "/api"
    debug: bool = Field(default=False, validation_alias="DEBUG")
    env: str = Field(default="development", validation_alias="ENV")
    max_request_size_mb: int = Field(default=1, validation_alias="MAX_REQUEST_SIZE_MB")

    # Database
    database_url: str = Field(default="sqlite:///devconnector.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")
    create_tables_on_startup: bool = Field(default=True, validation_alias="CREATE_TABLES_ON_STARTUP")

    # JWT / Authentication
    jwt_secret_key: str = Field(default="CHANGE_ME", validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
    # 100 hours
    access_token_expire_minutes: int = Field(default=6000, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    bcrypt_rounds: int = Field(default=10, ge=4, le=31, validation_alias="BCRYPT_ROUNDS")

    # GitHub repo proxy
    github_api_base: str = Field(default="https://api.github.com", validation_alias="GITHUB_API_BASE")
    github_token: Optional[str] = Field(default=None, validation_alias="GITHUB_TOKEN")
    github_timeout_seconds: float = Field(default=10.0, validation_alias="GITHUB_TIMEOUT_SECONDS")

    # CORS
    cors_allowed_origins: str = Field(default="http://localhost:3000", validation_alias="CORS_ALLOWED_ORIGINS")

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Validate JWT secret - warns in dev, errors in production."""
        env = os.getenv("ENV", "development")
        is_production = env.lower() in ("production", "prod")

        is_weak = v.lower() in [s.lower() for s in WEAK_JWT_SECRETS]
        is_too_short = len(v) < 32

        if is_production:
            if is_weak:
                raise ValueError(
                    f"JWT_SECRET_KEY cannot be a default value ('{v}') in production. "
                    "Generate a secure key with: python -c \"import secrets; print(secrets.token_urlsafe(48))\""
                )
            if is_too_short:
                raise ValueError(
                    f"JWT_SECRET_KEY must be at least 32 characters in production (got {len(v)})"
                )
        elif is_weak:
            warnings.warn(
                f"JWT_SECRET_KEY is set to a default value ('{v}'). "
                "This is insecure - set a proper key for production.",
                UserWarning,
                stacklevel=2,
            )
        elif is_too_short:
            warnings.warn(
                f"JWT_SECRET_KEY should be at least 32 characters (got {len(v)})",
                UserWarning,
                stacklevel=2,
            )

        return v

    @property
    def is_production(self) -> bool:
        return self.env.lower() in ("production", "prod")

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
