"""Repository and pull request identification helpers."""

import logging
from pathlib import Path
import re

from git import InvalidGitRepositoryError, NoSuchPathError, Repo


logger = logging.getLogger(__name__)

_REMOTE_RE = re.compile(r"github\.com[:/]+([^/]+)/([^/]+?)(?:\.git)?/?$")
_PULL_URL_RE = re.compile(r"/pull/([0-9]+)")
_NUMBER_RE = re.compile(r"^[0-9]+$")


class RepoDetectionError(ValueError):
    """Repository identifier is not in owner/repo form."""


def parse_repo_from_remote(remote_url: str) -> str | None:
    """Extract `owner/repo` from a GitHub remote URL.

    Handles https://github.com/owner/repo(.git) and git@github.com:owner/repo(.git).
    Returns None for non-GitHub remotes.
    """
    m = _REMOTE_RE.search(remote_url.strip())
    if not m:
        return None
    return f"{m.group(1)}/{m.group(2)}"


def detect_repo_from_cwd(path: Path | None = None) -> str | None:
    """Detect `owner/repo` from the `origin` remote of the enclosing checkout.

    Returns None when not inside a git work tree, when there is no origin
    remote, or when origin does not point at GitHub.
    """
    try:
        repo = Repo(path or Path.cwd(), search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        return None

    try:
        origin = repo.remote("origin")
    except ValueError:
        logger.debug("No origin remote in current repository")
        return None

    for url in origin.urls:
        detected = parse_repo_from_remote(url)
        if detected:
            return detected
    return None


def current_branch(path: Path | None = None) -> str | None:
    """Name of the checked-out branch, or None when detached or not a repo."""
    try:
        repo = Repo(path or Path.cwd(), search_parent_directories=True)
        return repo.active_branch.name
    except (InvalidGitRepositoryError, NoSuchPathError, TypeError):
        return None


def push_current_branch(path: Path | None = None) -> str:
    """Push the checked-out branch to origin, setting upstream if missing.

    Returns:
        The pushed branch name.

    Raises:
        RepoDetectionError: If not on a branch inside a git repository.
        GitCommandError: If the push fails.
    """
    try:
        repo = Repo(path or Path.cwd(), search_parent_directories=True)
        branch = repo.active_branch
    except (InvalidGitRepositoryError, NoSuchPathError, TypeError) as e:
        raise RepoDetectionError("Not in a git repository or HEAD is detached") from e

    if branch.tracking_branch() is None:
        logger.info(f"Pushing {branch.name} to origin (setting upstream)")
        repo.git.push("-u", "origin", branch.name)
    else:
        logger.info(f"Pushing {branch.name}")
        repo.git.push()
    return branch.name


def split_repo(repo: str) -> tuple[str, str]:
    """Split `owner/repo` into its two parts.

    Raises:
        RepoDetectionError: If the value is not in owner/repo form.
    """
    parts = repo.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise RepoDetectionError(f"Invalid repo: {repo} (expected owner/repo)")
    return parts[0], parts[1]


def extract_pr_number(value: str) -> int | None:
    """Extract a pull request number from `42` or `https://github.com/o/r/pull/42`."""
    s = value.strip()
    if _NUMBER_RE.match(s):
        return int(s)
    m = _PULL_URL_RE.search(s)
    if m:
        return int(m.group(1))
    return None
