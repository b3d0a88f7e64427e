"""
Profile endpoints.

Protected routes act on the caller's own profile; the listing, single
profile and GitHub repo routes are public.
"""

from typing import Any

from fastapi import APIRouter, Depends

from devconnector.api import GitHubClient
from devconnector.models import Profile
from devconnector.services import ProfileService

from ..auth.dependencies import get_current_user_id
from ..dependencies import get_github_client, get_profile_service
from ..schemas import (
    EducationRequest,
    ExperienceRequest,
    MessageResponse,
    ProfileResponse,
    ProfileUpsertRequest,
)

router = APIRouter(prefix="/profile", tags=["profile"])


def _profile_to_response(profile: Profile) -> ProfileResponse:
    """Serialize a profile with its owner's name and avatar."""
    return ProfileResponse.model_validate(profile)


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(
    user_id: int = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Get current user's profile."""
    return _profile_to_response(service.get_own_profile(user_id))


@router.post("", response_model=ProfileResponse)
def upsert_profile(
    payload: ProfileUpsertRequest,
    user_id: int = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """
    Create or update the caller's profile.

    Fields left out of the body keep their stored values.
    """
    profile = service.upsert_profile(user_id, payload.model_dump(exclude_none=True))
    return _profile_to_response(profile)


@router.get("", response_model=list[ProfileResponse])
def list_profiles(service: ProfileService = Depends(get_profile_service)):
    """Get all profiles."""
    return [_profile_to_response(profile) for profile in service.list_profiles()]


@router.get("/user/{user_id}", response_model=ProfileResponse)
def get_profile_by_user(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
):
    """Get a profile by its owner's user id."""
    return _profile_to_response(service.get_profile_by_user_id(user_id))


@router.delete("", response_model=MessageResponse)
def delete_account(
    user_id: int = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """
    Delete the caller's posts, profile and account.

    WARNING: This is irreversible.
    """
    service.delete_account(user_id)
    return MessageResponse(msg="User removed")


@router.put("/experience", response_model=ProfileResponse)
def add_experience(
    payload: ExperienceRequest,
    user_id: int = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Add an experience entry at the top of the list."""
    profile = service.add_experience(user_id, payload.model_dump(by_alias=True))
    return _profile_to_response(profile)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
def remove_experience(
    exp_id: str,
    user_id: int = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Remove an experience entry by id."""
    return _profile_to_response(service.remove_experience(user_id, exp_id))


@router.put("/education", response_model=ProfileResponse)
def add_education(
    payload: EducationRequest,
    user_id: int = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Add an education entry at the top of the list."""
    profile = service.add_education(user_id, payload.model_dump(by_alias=True))
    return _profile_to_response(profile)


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
def remove_education(
    edu_id: str,
    user_id: int = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Remove an education entry by id."""
    return _profile_to_response(service.remove_education(user_id, edu_id))


@router.get("/github/{username}")
def github_repos(
    username: str,
    github: GitHubClient = Depends(get_github_client),
) -> list[dict[str, Any]]:
    """List a GitHub user's public repos, passed through from the GitHub API."""
    return github.list_repos(username)
