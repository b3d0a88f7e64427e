import pytest

from backend.app.dependencies import get_github_client
from devconnector.exceptions import GitHubProfileNotFoundError, GitHubUnavailableError


class FakeGitHubClient:
    def __init__(self, repos=None, error=None):
        self.repos = repos or []
        self.error = error
        self.requested = []

    def list_repos(self, username):
        self.requested.append(username)
        if self.error is not None:
            raise self.error
        return self.repos


@pytest.fixture
def use_github(test_app_client):
    client, _ = test_app_client

    def _install(fake: FakeGitHubClient) -> FakeGitHubClient:
        client.app.dependency_overrides[get_github_client] = lambda: fake
        return fake

    yield _install
    client.app.dependency_overrides.pop(get_github_client, None)


def test_repos_are_passed_through(test_app_client, use_github):
    client, _ = test_app_client
    repos = [{"name": "hello-world", "html_url": "https://github.com/octocat/hello-world", "forks_count": 1}]
    fake = use_github(FakeGitHubClient(repos=repos))

    resp = client.get("/api/v1/profile/github/octocat")

    assert resp.status_code == 200
    assert resp.json() == repos
    assert fake.requested == ["octocat"]


def test_unknown_github_user(test_app_client, use_github):
    client, _ = test_app_client
    use_github(FakeGitHubClient(error=GitHubProfileNotFoundError()))

    resp = client.get("/api/v1/profile/github/ghost")

    assert resp.status_code == 404
    assert resp.json() == {"msg": "No Github profile found"}


def test_github_unreachable(test_app_client, use_github):
    client, _ = test_app_client
    use_github(FakeGitHubClient(error=GitHubUnavailableError()))

    resp = client.get("/api/v1/profile/github/octocat")

    assert resp.status_code == 502
