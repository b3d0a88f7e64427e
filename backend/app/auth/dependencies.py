"""
Authentication dependencies for FastAPI routes.

Accepts the token from either:
- ``Authorization: Bearer <token>``
- the legacy ``x-auth-token`` header

Every protected route depends on ``get_current_user_id`` (or
``get_current_user``), so the token check runs before the handler body.
"""

from fastapi import Depends, Header
from fastapi.security import OAuth2PasswordBearer

from devconnector.models import User
from devconnector.services import AuthService

from ..dependencies import get_auth_service

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/auth", auto_error=False)


def get_token_from_request(
    token_header: str | None = Depends(oauth2_scheme),
    x_auth_token: str | None = Header(None, alias="x-auth-token"),
) -> str | None:
    """Prefer the Authorization header; fall back to x-auth-token."""
    return token_header or x_auth_token


def get_current_user_id(
    token: str | None = Depends(get_token_from_request),
    auth_service: AuthService = Depends(get_auth_service),
) -> int:
    """
    Resolve the caller's user id from the bearer token.

    Raises MissingTokenError / InvalidTokenError, mapped to 401.
    """
    return auth_service.authorize(token)


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Load the authenticated user row."""
    return auth_service.get_current_user(user_id)
