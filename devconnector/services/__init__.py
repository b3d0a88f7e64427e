"""Business services. Each service is bound to one database session."""

from .auth_service import AuthService
from .post_service import PostService
from .profile_service import ProfileService, build_entry, parse_skills

__all__ = [
    "AuthService",
    "PostService",
    "ProfileService",
    "build_entry",
    "parse_skills",
]
