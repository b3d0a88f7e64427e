"""
Authentication service.

Registration, credential checks and bearer-token verification. Unknown
emails and wrong passwords fail with the same InvalidCredentialsError so
the response never reveals which one was wrong.
"""

from sqlalchemy.orm import Session

from devconnector.config import Settings
from devconnector.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from devconnector.logging import get_logger
from devconnector.models import User
from devconnector.repositories import UserRepository
from devconnector.security import (
    create_access_token,
    decode_access_token,
    gravatar_url,
    hash_password,
    verify_password,
)

logger = get_logger("service.auth")


class AuthService:
    """Authentication service bound to one session and explicit settings."""

    def __init__(self, session: Session, settings: Settings):
        self.session = session
        self.settings = settings
        self.users = UserRepository(session)

    def issue_token(self, user: User) -> str:
        """Sign a token whose subject is the user id."""
        return create_access_token({"sub": str(user.id)}, self.settings)

    def register(self, name: str, email: str, password: str) -> str:
        """
        Create a user and return a token for it.

        Raises:
            UserAlreadyExistsError: The email is already registered.
        """
        if self.users.exists_where(email=email.strip().lower()):
            raise UserAlreadyExistsError()

        user = self.users.create_user(
            name=name,
            email=email,
            password_hash=hash_password(password, rounds=self.settings.bcrypt_rounds),
            avatar=gravatar_url(email),
        )
        logger.info("user_registered", user_id=user.id)
        return self.issue_token(user)

    def authenticate(self, email: str, password: str) -> str:
        """
        Check credentials and return a fresh token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password.
            TokenSigningError: The token could not be signed.
        """
        user = self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password):
            logger.info("login_failed")
            raise InvalidCredentialsError()

        logger.info("login_succeeded", user_id=user.id)
        return self.issue_token(user)

    def authorize(self, token: str | None) -> int:
        """
        Resolve a bearer token to a user id.

        Raises:
            MissingTokenError: No token was presented.
            InvalidTokenError: Bad signature, expired, or no usable subject.
        """
        if not token:
            raise MissingTokenError()

        payload = decode_access_token(token, self.settings)
        subject = payload.get("sub")
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            raise InvalidTokenError() from None
        return user_id

    def get_current_user(self, user_id: int) -> User:
        """
        Load the user a token belongs to.

        Raises:
            UserNotFoundError: The account no longer exists.
        """
        user = self.users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user
