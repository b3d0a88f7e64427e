from datetime import datetime, timedelta

import pytest

from devconnector.exceptions import NotAuthorizedError, PostNotFoundError
from devconnector.services import PostService


@pytest.fixture
def posts(test_session):
    return PostService(test_session)


def test_create_copies_author_details(posts, user_factory):
    user = user_factory(name="User A")

    post = posts.create_post(user, "hello world")

    assert post.user_id == user.id
    assert post.name == "User A"
    assert post.avatar == user.avatar


def test_list_is_newest_first(posts, user_factory, test_session):
    user = user_factory()
    older = posts.create_post(user, "older")
    older.date = datetime(2020, 1, 1)
    newer = posts.create_post(user, "newer")
    newer.date = older.date + timedelta(days=1)
    test_session.flush()

    assert [p.text for p in posts.list_posts()] == ["newer", "older"]


@pytest.mark.parametrize("raw", ["abc", "999", "+1", "01", "1_0", " 1 "])
def test_get_missing_post(posts, user_factory, raw):
    # Post 1 exists; only the canonical "1" may reach it
    posts.create_post(user_factory(), "first")

    with pytest.raises(PostNotFoundError):
        posts.get_post(raw)


def test_only_author_can_delete(posts, user_factory):
    author = user_factory(email="a@x.com")
    other = user_factory(email="b@x.com")
    post = posts.create_post(author, "mine")

    with pytest.raises(NotAuthorizedError, match="User not authorized"):
        posts.delete_post(other.id, str(post.id))

    posts.delete_post(author.id, str(post.id))
    with pytest.raises(PostNotFoundError):
        posts.get_post(post.id)


def test_delete_posts_for_user(posts, user_factory):
    author = user_factory(email="a@x.com")
    other = user_factory(email="b@x.com")
    posts.create_post(author, "one")
    posts.create_post(author, "two")
    posts.create_post(other, "keep")

    assert posts.delete_posts_for_user(author.id) == 2
    assert [p.text for p in posts.list_posts()] == ["keep"]
