"""GitHub integration for GH Review."""

from .client import (
    GhCommandError,
    GhNotFoundError,
    GhPermissionError,
    GitHubClient,
    GitHubError,
    TransientGitHubError,
)
from .repo import (
    RepoDetectionError,
    current_branch,
    detect_repo_from_cwd,
    extract_pr_number,
    parse_repo_from_remote,
    push_current_branch,
    split_repo,
)


__all__ = [
    # Client
    "GitHubClient",
    "GitHubError",
    "GhCommandError",
    "GhNotFoundError",
    "GhPermissionError",
    "TransientGitHubError",
    # Repository helpers
    "RepoDetectionError",
    "current_branch",
    "detect_repo_from_cwd",
    "extract_pr_number",
    "parse_repo_from_remote",
    "push_current_branch",
    "split_repo",
]
