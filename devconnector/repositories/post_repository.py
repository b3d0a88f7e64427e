"""Post repository."""

from devconnector.models import Post

from .base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Repository for Post operations."""

    model = Post

    def list_newest_first(self) -> list[Post]:
        return self.session.query(Post).order_by(Post.date.desc(), Post.id.desc()).all()

    def delete_by_user_id(self, user_id: int) -> int:
        """Delete every post owned by a user. Returns the number removed."""
        result = (
            self.session.query(Post)
            .filter(Post.user_id == user_id)
            .delete(synchronize_session="fetch")
        )
        self.session.flush()
        return result
