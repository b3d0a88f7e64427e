"""Profile aggregate repository."""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from devconnector.logging import get_logger
from devconnector.models import Profile

from .base import BaseRepository

logger = get_logger("repository.profile")

# JSON list columns holding nested entries
ENTRY_LISTS = ("experience", "education")


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile operations."""

    model = Profile

    def get_by_user_id(self, user_id: int) -> Profile | None:
        """Get profile by owning user ID, with the user loaded."""
        return (
            self.session.query(Profile)
            .options(joinedload(Profile.user))
            .filter(Profile.user_id == user_id)
            .first()
        )

    def list_with_users(self) -> list[Profile]:
        """All profiles in storage order, with owners loaded."""
        return self.session.query(Profile).options(joinedload(Profile.user)).order_by(Profile.id).all()

    def create_or_update(
        self,
        user_id: int,
        fields: dict[str, Any],
        social: dict[str, str],
    ) -> tuple[Profile, bool]:
        """
        Create or update a user's profile.

        Only the provided keys are written; stored values for keys not in
        ``fields``/``social`` are kept. The create runs in a savepoint so a
        concurrent create that wins the unique constraint on ``user_id`` turns
        this call into an update instead of a duplicate.

        Returns:
            Tuple of (profile, created)
        """
        profile = self.get_by_user_id(user_id)

        if profile is None:
            try:
                with self.session.begin_nested():
                    values: dict[str, Any] = {"skills": [], "experience": [], "education": []}
                    values.update(fields)
                    profile = Profile(user_id=user_id, social=dict(social), **values)
                    self.session.add(profile)
                return profile, True
            except IntegrityError:
                profile = self.get_by_user_id(user_id)
                if profile is None:
                    raise
                logger.info("profile_create_conflict", user_id=user_id)

        for key, value in fields.items():
            setattr(profile, key, value)
        if social:
            # Reassign so the JSON column is marked dirty
            profile.social = {**(profile.social or {}), **social}
        self.session.flush()
        return profile, False

    def prepend_entry(self, profile: Profile, list_name: str, entry: dict[str, Any]) -> Profile:
        """Insert an entry at the front of a nested list."""
        _check_list_name(list_name)
        setattr(profile, list_name, [entry, *(getattr(profile, list_name) or [])])
        self.session.flush()
        return profile

    def remove_entry(self, profile: Profile, list_name: str, entry_id: str) -> bool:
        """
        Remove the entry with ``entry_id`` from a nested list.

        Returns False and leaves the list untouched when no entry matches.
        """
        _check_list_name(list_name)
        entries = list(getattr(profile, list_name) or [])
        index = next((i for i, entry in enumerate(entries) if entry.get("id") == entry_id), None)
        if index is None:
            return False

        del entries[index]
        setattr(profile, list_name, entries)
        self.session.flush()
        return True

    def delete_by_user_id(self, user_id: int) -> bool:
        removed = (
            self.session.query(Profile)
            .filter(Profile.user_id == user_id)
            .delete(synchronize_session="fetch")
        )
        self.session.flush()
        return removed > 0


def _check_list_name(list_name: str) -> None:
    if list_name not in ENTRY_LISTS:
        raise ValueError(f"Unknown profile list: {list_name}")
