"""
SQLAlchemy models for DevConnector.

Usage:
    from devconnector.models import User, Profile, Post
"""

from .base import Base
from .post import Post
from .profile import PROFILE_FIELDS, SOCIAL_FIELDS, Profile
from .user import User

__all__ = [
    "Base",
    "User",
    "Profile",
    "PROFILE_FIELDS",
    "SOCIAL_FIELDS",
    "Post",
]
