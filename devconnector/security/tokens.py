"""
JWT helper utilities.

Signing material always comes from the ``Settings`` passed in; these
functions never look configuration up themselves.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt
from jose.exceptions import JOSEError

from devconnector.config import Settings
from devconnector.exceptions import InvalidTokenError, TokenSigningError


def create_access_token(
    data: Dict[str, Any],
    settings: Settings,
    expires_minutes: int | None = None,
    now: datetime | None = None,
) -> str:
    """
    Create a signed JWT access token with expiration and JTI.

    Args:
        data: Claims to include in the token (e.g., {"sub": "42"}).
        settings: Source of the secret, algorithm and default lifetime.
        expires_minutes: Optional override for expiration window in minutes.
        now: Issue time; defaults to the current UTC time.

    Returns:
        Encoded JWT string.

    Raises:
        TokenSigningError: If the token cannot be signed.
    """
    issued_at = now or datetime.now(timezone.utc)
    expire_delta = timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    )
    to_encode = data.copy()
    to_encode.update({
        "iat": issued_at,
        "exp": issued_at + expire_delta,
        "jti": str(uuid.uuid4()),
    })
    try:
        return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    except (JOSEError, TypeError, ValueError) as exc:
        raise TokenSigningError() from exc


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """
    Decode and validate a JWT access token.

    Raises:
        InvalidTokenError: If the signature or expiry check fails.
    """
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidTokenError() from exc
