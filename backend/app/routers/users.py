"""
User registration router.
"""

from fastapi import APIRouter, Depends

from devconnector.services import AuthService

from ..dependencies import get_auth_service
from ..schemas import RegisterRequest, TokenResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=TokenResponse)
def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Register a user and return a token, so the client is logged in right away."""
    token = auth_service.register(payload.name, payload.email, payload.password)
    return TokenResponse(token=token)
