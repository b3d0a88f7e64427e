"""
FastAPI dependency injection module.

Provides centralized dependencies for:
- Settings
- Services bound to the request's database session
- The GitHub client

Settings always come from ``Depends(get_settings)`` so tests can override
them with ``app.dependency_overrides``.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from devconnector.api import GitHubClient
from devconnector.config import Settings, get_settings
from devconnector.db import get_db
from devconnector.services import AuthService, PostService, ProfileService

# =============================================================================
# Service Dependencies
# =============================================================================


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    """Get AuthService with explicit settings."""
    return AuthService(db, settings)


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    """Get ProfileService instance."""
    return ProfileService(db)


def get_post_service(db: Session = Depends(get_db)) -> PostService:
    """Get PostService instance."""
    return PostService(db)


# =============================================================================
# External Clients
# =============================================================================


def get_github_client(settings: Settings = Depends(get_settings)) -> GitHubClient:
    """Get a GitHub client configured from settings."""
    return GitHubClient(settings)


__all__ = [
    "get_settings",
    "get_db",
    "get_auth_service",
    "get_profile_service",
    "get_post_service",
    "get_github_client",
]
