"""
User SQLAlchemy model.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .post import Post
    from .profile import Profile


class User(Base):
    """
    Registered account.

    Attributes:
        name: Display name shown on profiles and posts
        email: Unique login email, stored lower-cased
        password: bcrypt hash; never serialized to clients
        avatar: Gravatar URL derived from the email at registration
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255))
    avatar: Mapped[str | None] = mapped_column(String(512), nullable=True)
    date: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    profile: Mapped["Profile | None"] = relationship("Profile", back_populates="user", uselist=False)
    posts: Mapped[list["Post"]] = relationship("Post", back_populates="user")
