"""
Authentication router.

GET  /auth  - the caller's account, without the password hash
POST /auth  - exchange email and password for a bearer token
"""

from fastapi import APIRouter, Depends

from devconnector.models import User
from devconnector.services import AuthService

from ..auth.dependencies import get_current_user
from ..dependencies import get_auth_service
from ..schemas import LoginRequest, TokenResponse, UserResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("", response_model=UserResponse)
def current_user(user: User = Depends(get_current_user)) -> UserResponse:
    """Get current authenticated user."""
    return UserResponse.model_validate(user)


@router.post("", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Authenticate a user and return a token.

    Unknown email and wrong password return the same 400 response.
    """
    token = auth_service.authenticate(payload.email, payload.password)
    return TokenResponse(token=token)
