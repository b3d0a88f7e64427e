"""
Profile SQLAlchemy model.

The profile row is the whole aggregate: skills, social links and the
experience/education lists are JSON columns, so one row update changes
the aggregate atomically. List entries are plain dicts carrying a
generated ``id``; dates inside them are ISO-8601 strings.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .user import User


# Keys accepted by the upsert that land in the ``social`` mapping
SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "linkedin", "instagram")

# Scalar keys accepted by the upsert that map to columns of the same name
PROFILE_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")


class Profile(Base):
    """
    Professional profile, exactly one per user.

    Attributes:
        status: Current professional status (required)
        skills: Ordered list of skills
        social: Sparse mapping of platform name to URL
        experience: Experience entries, newest first
        education: Education entries, newest first
    """

    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), unique=True, index=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(512), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(255))
    githubusername: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    skills: Mapped[list[str]] = mapped_column(JSON, default=list)
    social: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)
    experience: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    education: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    date: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="profile")
