"""
Profile service.

Owns the profile aggregate: the single-profile upsert, the nested
experience/education lists, and the account cascade.
"""

import uuid
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from sqlalchemy.orm import Session

from devconnector.exceptions import (
    EntryNotFoundError,
    EntryValidationError,
    InvalidIdError,
    ProfileNotFoundError,
    UserNotFoundError,
)
from devconnector.logging import get_logger
from devconnector.models import PROFILE_FIELDS, SOCIAL_FIELDS, Profile
from devconnector.repositories import ProfileRepository, UserRepository

from .ids import parse_positive_id
from .post_service import PostService

logger = get_logger("service.profile")

EXPERIENCE_FIELDS = ("title", "company", "location", "from", "to", "current", "description")
EXPERIENCE_REQUIRED = {"title": "Title is required", "company": "Company is required", "from": "From date is required"}

EDUCATION_FIELDS = ("school", "degree", "fieldofstudy", "from", "to", "current", "description")
EDUCATION_REQUIRED = {
    "school": "School is required",
    "degree": "Degree is required",
    "fieldofstudy": "Field of study is required",
    "from": "From date is required",
}


def parse_skills(skills: str | list[str]) -> list[str]:
    """Split a comma-delimited skills string into trimmed, non-empty items."""
    items = skills.split(",") if isinstance(skills, str) else skills
    return [item.strip() for item in items if item and item.strip()]


def _to_date(value: Any, param: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise EntryValidationError(f"Invalid date: {value}", param) from None


def build_entry(
    data: Mapping[str, Any],
    allowed: tuple[str, ...],
    required: Mapping[str, str],
) -> dict[str, Any]:
    """
    Validate an experience/education payload and return the stored form.

    A ``current`` entry may not carry a ``to`` date, and ``to`` may not
    precede ``from``.
    """
    for key, message in required.items():
        value = data.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise EntryValidationError(message, key)

    start = _to_date(data["from"], "from")
    end = _to_date(data["to"], "to") if data.get("to") else None
    current = bool(data.get("current") or False)

    if current and end is not None:
        raise EntryValidationError("To date must be empty for a current entry", "to")
    if end is not None and end < start:
        raise EntryValidationError("To date cannot be before from date", "to")

    entry: dict[str, Any] = {"id": uuid.uuid4().hex}
    for key in allowed:
        entry[key] = data.get(key)
    entry["from"] = start.isoformat()
    entry["to"] = end.isoformat() if end else None
    entry["current"] = current
    return entry


class ProfileService:
    """Service for profile-related business logic."""

    def __init__(self, session: Session):
        self.session = session
        self.profiles = ProfileRepository(session)
        self.users = UserRepository(session)
        self.posts = PostService(session)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_own_profile(self, user_id: int) -> Profile:
        profile = self.profiles.get_by_user_id(user_id)
        if profile is None:
            raise ProfileNotFoundError("No profile for this user")
        return profile

    def list_profiles(self) -> list[Profile]:
        return self.profiles.list_with_users()

    def get_profile_by_user_id(self, raw_user_id: str | int) -> Profile:
        """
        Look up a profile from a path id.

        Raises:
            InvalidIdError: The id is not a positive integer.
            ProfileNotFoundError: Well-formed id without a profile.
        """
        user_id = parse_positive_id(raw_user_id)
        if user_id is None:
            raise InvalidIdError()

        profile = self.profiles.get_by_user_id(user_id)
        if profile is None:
            raise ProfileNotFoundError()
        return profile

    # -------------------------------------------------------------------------
    # Upsert
    # -------------------------------------------------------------------------

    def upsert_profile(self, user_id: int, data: Mapping[str, Any]) -> Profile:
        """
        Create the caller's profile or update it in place.

        Falsy values are left out, so a field the caller omits keeps its
        stored value. ``skills`` arrives as a comma-delimited string; one
        that parses to no items keeps the stored skills too.

        Raises:
            UserNotFoundError: The token outlived its account.
        """
        if self.users.get_by_id(user_id) is None:
            raise UserNotFoundError()

        fields: dict[str, Any] = {key: data[key] for key in PROFILE_FIELDS if data.get(key)}
        skills = parse_skills(data.get("skills") or [])
        if skills:
            fields["skills"] = skills
        social = {key: data[key] for key in SOCIAL_FIELDS if data.get(key)}

        profile, created = self.profiles.create_or_update(user_id, fields, social)
        logger.info(
            "profile_created" if created else "profile_updated",
            user_id=user_id,
            fields=sorted(fields) + sorted(social),
        )
        return profile

    # -------------------------------------------------------------------------
    # Nested lists
    # -------------------------------------------------------------------------

    def add_experience(self, user_id: int, data: Mapping[str, Any]) -> Profile:
        return self._add_entry(user_id, "experience", build_entry(data, EXPERIENCE_FIELDS, EXPERIENCE_REQUIRED))

    def remove_experience(self, user_id: int, exp_id: str) -> Profile:
        return self._remove_entry(user_id, "experience", exp_id, "Experience not found")

    def add_education(self, user_id: int, data: Mapping[str, Any]) -> Profile:
        return self._add_entry(user_id, "education", build_entry(data, EDUCATION_FIELDS, EDUCATION_REQUIRED))

    def remove_education(self, user_id: int, edu_id: str) -> Profile:
        return self._remove_entry(user_id, "education", edu_id, "Education not found")

    def _add_entry(self, user_id: int, list_name: str, entry: dict[str, Any]) -> Profile:
        profile = self.get_own_profile(user_id)
        self.profiles.prepend_entry(profile, list_name, entry)
        logger.info(f"{list_name}_added", user_id=user_id, entry_id=entry["id"])
        return profile

    def _remove_entry(self, user_id: int, list_name: str, entry_id: str, message: str) -> Profile:
        profile = self.get_own_profile(user_id)
        if not self.profiles.remove_entry(profile, list_name, entry_id):
            raise EntryNotFoundError(message)
        logger.info(f"{list_name}_removed", user_id=user_id, entry_id=entry_id)
        return profile

    # -------------------------------------------------------------------------
    # Account cascade
    # -------------------------------------------------------------------------

    def delete_account(self, user_id: int) -> None:
        """
        Delete the user's posts, profile and account.

        Runs on the caller's session: the three deletes commit together or
        not at all. Missing posts or profile are not an error.
        """
        posts_removed = self.posts.delete_posts_for_user(user_id)
        profile_removed = self.profiles.delete_by_user_id(user_id)
        user_removed = self.users.delete(user_id)
        logger.info(
            "account_deleted",
            user_id=user_id,
            posts_removed=posts_removed,
            profile_removed=profile_removed,
            user_removed=user_removed,
        )
