"""
Post endpoints. All routes require authentication.
"""

from fastapi import APIRouter, Depends

from devconnector.models import User
from devconnector.services import PostService

from ..auth.dependencies import get_current_user, get_current_user_id
from ..dependencies import get_post_service
from ..schemas import MessageResponse, PostCreateRequest, PostResponse

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=PostResponse)
def create_post(
    payload: PostCreateRequest,
    user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return PostResponse.model_validate(service.create_post(user, payload.text))


@router.get("", response_model=list[PostResponse])
def list_posts(
    user_id: int = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
):
    """Newest first."""
    return [PostResponse.model_validate(post) for post in service.list_posts()]


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: str,
    user_id: int = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
):
    return PostResponse.model_validate(service.get_post(post_id))


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    user_id: int = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
):
    """Only the author may delete a post."""
    service.delete_post(user_id, post_id)
    return MessageResponse(msg="Post removed")
