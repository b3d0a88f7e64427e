"""Post service: author-owned text posts."""

from sqlalchemy.orm import Session

from devconnector.exceptions import NotAuthorizedError, PostNotFoundError
from devconnector.logging import get_logger
from devconnector.models import Post, User
from devconnector.repositories import PostRepository

from .ids import parse_positive_id

logger = get_logger("service.post")


class PostService:
    def __init__(self, session: Session):
        self.session = session
        self.posts = PostRepository(session)

    def create_post(self, user: User, text: str) -> Post:
        post = self.posts.create(user_id=user.id, text=text, name=user.name, avatar=user.avatar)
        logger.info("post_created", user_id=user.id, post_id=post.id)
        return post

    def list_posts(self) -> list[Post]:
        return self.posts.list_newest_first()

    def get_post(self, raw_post_id: str | int) -> Post:
        """Malformed ids are reported the same as missing posts."""
        post_id = parse_positive_id(raw_post_id)
        post = self.posts.get_by_id(post_id) if post_id is not None else None
        if post is None:
            raise PostNotFoundError()
        return post

    def delete_post(self, user_id: int, raw_post_id: str | int) -> None:
        post = self.get_post(raw_post_id)
        if post.user_id != user_id:
            raise NotAuthorizedError()
        self.posts.delete(post.id)
        logger.info("post_deleted", user_id=user_id, post_id=post.id)

    def delete_posts_for_user(self, user_id: int) -> int:
        """Remove every post by ``user_id``. Used by the account cascade."""
        return self.posts.delete_by_user_id(user_id)
