"""
Repository pattern implementations for data access.

Usage:
    from devconnector.repositories import ProfileRepository
    from devconnector.db import db

    with db.session() as session:
        profile = ProfileRepository(session).get_by_user_id(user_id)
"""

from .base import BaseRepository
from .post_repository import PostRepository
from .profile_repository import ENTRY_LISTS, ProfileRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ProfileRepository",
    "PostRepository",
    "ENTRY_LISTS",
]
