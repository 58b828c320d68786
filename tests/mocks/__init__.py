"""Mock implementations for testing."""

from .github_client import MockGitHubClient, make_pull_data


__all__ = ["MockGitHubClient", "make_pull_data"]
