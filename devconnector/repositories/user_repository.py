"""User repository for authentication and account management."""

from devconnector.models import User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Get user by email (emails are stored lower-cased)."""
        return self.session.query(User).filter(User.email == email.strip().lower()).first()

    def create_user(self, name: str, email: str, password_hash: str, avatar: str | None) -> User:
        return self.create(
            name=name,
            email=email.strip().lower(),
            password=password_hash,
            avatar=avatar,
        )
