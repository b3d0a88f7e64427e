"""Outbound API clients."""

from .github_api import GitHubClient

__all__ = ["GitHubClient"]
