"""
Tests for the profile aggregate repository.
"""

import pytest

from devconnector.models import Profile
from devconnector.repositories import ProfileRepository


@pytest.fixture
def repo(test_session):
    return ProfileRepository(test_session)


def test_create_then_update_keeps_one_row(test_session, repo, user_factory):
    user = user_factory()

    profile, created = repo.create_or_update(user.id, {"status": "Developer", "skills": ["py"]}, {})
    assert created is True
    assert profile.experience == []
    assert profile.education == []

    again, created = repo.create_or_update(user.id, {"company": "Acme"}, {"twitter": "t"})
    assert created is False
    assert again.id == profile.id
    assert again.status == "Developer"
    assert again.company == "Acme"
    assert again.social == {"twitter": "t"}
    assert test_session.query(Profile).count() == 1


def test_social_links_merge(repo, user_factory):
    user = user_factory()
    repo.create_or_update(user.id, {"status": "Dev"}, {"twitter": "t"})

    profile, _ = repo.create_or_update(user.id, {}, {"youtube": "y"})

    assert profile.social == {"twitter": "t", "youtube": "y"}


def test_create_conflict_is_retried_as_update(repo, user_factory, monkeypatch):
    user = user_factory()
    repo.create_or_update(user.id, {"status": "Developer"}, {})

    # Simulate a concurrent create landing between the lookup and the insert
    original = repo.get_by_user_id
    calls = []

    def stale_lookup(user_id):
        calls.append(user_id)
        return None if len(calls) == 1 else original(user_id)

    monkeypatch.setattr(repo, "get_by_user_id", stale_lookup)

    profile, created = repo.create_or_update(user.id, {"company": "Acme"}, {})

    assert created is False
    assert len(calls) == 2
    assert profile.status == "Developer"
    assert profile.company == "Acme"


def test_prepend_puts_newest_first(repo, user_factory):
    user = user_factory()
    profile, _ = repo.create_or_update(user.id, {"status": "Dev"}, {})

    repo.prepend_entry(profile, "experience", {"id": "a"})
    repo.prepend_entry(profile, "experience", {"id": "b"})

    assert [e["id"] for e in profile.experience] == ["b", "a"]


def test_remove_missing_entry_leaves_list_untouched(repo, user_factory):
    user = user_factory()
    profile, _ = repo.create_or_update(user.id, {"status": "Dev"}, {})
    repo.prepend_entry(profile, "education", {"id": "a"})
    repo.prepend_entry(profile, "education", {"id": "b"})

    assert repo.remove_entry(profile, "education", "zzz") is False
    assert [e["id"] for e in profile.education] == ["b", "a"]

    assert repo.remove_entry(profile, "education", "b") is True
    assert [e["id"] for e in profile.education] == ["a"]


def test_unknown_list_name_raises(repo, user_factory):
    user = user_factory()
    profile, _ = repo.create_or_update(user.id, {"status": "Dev"}, {})

    with pytest.raises(ValueError, match="Unknown profile list"):
        repo.prepend_entry(profile, "skills", {"id": "a"})


def test_delete_by_user_id(repo, user_factory):
    user = user_factory()
    repo.create_or_update(user.id, {"status": "Dev"}, {})

    assert repo.delete_by_user_id(user.id) is True
    assert repo.get_by_user_id(user.id) is None
    assert repo.delete_by_user_id(user.id) is False
