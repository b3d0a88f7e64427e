"""GitHub REST client backing the public repo listing on profiles."""

from typing import Any

import requests  # type: ignore[import-untyped]

from devconnector.config import Settings
from devconnector.exceptions import GitHubProfileNotFoundError, GitHubUnavailableError
from devconnector.logging import get_logger

logger = get_logger("github")

USER_AGENT = "DevConnector/1.0"
REPO_LIST_LIMIT = 5


class GitHubClient:
    """
    Thin read-only GitHub client.

    Built from explicit settings so the token and base URL are visible at
    construction time. Responses are passed through without reshaping.
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self.base_url = settings.github_api_base.rstrip("/")
        self.token = settings.github_token
        self.timeout = settings.github_timeout_seconds
        self.http = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def list_repos(self, username: str) -> list[dict[str, Any]]:
        """
        Oldest-created first, at most five public repos of ``username``.

        Raises:
            GitHubProfileNotFoundError: GitHub answered anything but 200.
            GitHubUnavailableError: The request itself failed.
        """
        url = f"{self.base_url}/users/{username}/repos"
        params = {"per_page": REPO_LIST_LIMIT, "sort": "created", "direction": "asc"}

        try:
            response = self.http.get(url, headers=self._headers(), params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("github_request_failed", username=username, error=str(e))
            raise GitHubUnavailableError() from e

        if response.status_code != 200:
            logger.info("github_profile_not_found", username=username, status=response.status_code)
            raise GitHubProfileNotFoundError()

        try:
            return response.json()
        except ValueError as e:
            logger.error("github_invalid_json", username=username)
            raise GitHubUnavailableError() from e
