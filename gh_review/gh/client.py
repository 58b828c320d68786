"""GitHub API client driven through the `gh` CLI."""

import json
import logging
import os
import random
import subprocess
import time
from typing import Any
from urllib.parse import quote

from ..models import BranchDeletion, Comment, InlineComment, MergeMethod, Pull, PullFile, PullState
from .repo import split_repo


logger = logging.getLogger(__name__)

JSON_ACCEPT = "application/vnd.github+json"
DIFF_ACCEPT = "application/vnd.github.v3.diff"
PER_PAGE = 100
MAX_PAGES = 50


class GitHubError(RuntimeError):
    """Base class for failures talking to GitHub."""


class GhNotFoundError(GitHubError):
    """The `gh` executable is not installed or not on PATH."""


class GhPermissionError(GitHubError):
    """Token lacks the permission needed for the request."""


class TransientGitHubError(GitHubError):
    """GitHub API kept returning a 5xx error."""


class GhCommandError(GitHubError):
    """A `gh` invocation exited with a non-zero status."""

    def __init__(self, context: str, returncode: int, stderr: str = "", stdout: str = ""):
        self.context = context
        self.returncode = returncode
        self.stderr = stderr
        self.stdout = stdout
        detail = stderr.strip() or stdout.strip() or f"Exit {returncode}"
        super().__init__(f"{context}: {detail}")


def _is_transient_error(stderr: str) -> bool:
    lower_stderr = stderr.lower()
    return any(
        f"(http {code})" in lower_stderr or f"http {code}" in lower_stderr for code in ("502", "503", "504")
    )


def _is_permission_error(stderr: str) -> bool:
    lower_stderr = stderr.lower()
    return any(s in lower_stderr for s in ("http 403", "resource not accessible", "insufficient"))


def build_field_args(fields: dict[str, Any]) -> list[str]:
    """Turn request fields into `gh api` arguments.

    Numbers and booleans go through `-F` so GitHub receives typed JSON
    values; everything else is sent verbatim with `--raw-field`.
    """
    args: list[str] = []
    for key, value in fields.items():
        if value is None:
            continue
        if isinstance(value, bool):
            args.extend(["-F", f"{key}={str(value).lower()}"])
        elif isinstance(value, int):
            args.extend(["-F", f"{key}={value}"])
        else:
            args.extend(["--raw-field", f"{key}={value}"])
    return args


class GitHubClient:
    """Thin wrapper over `gh api` and a few `gh` subcommands.

    All network access of the tool goes through this class. Calls are
    synchronous; transient 5xx errors are retried with exponential backoff.
    """

    def __init__(
        self,
        host: str = "github.com",
        token: str | None = None,
        max_retries: int = 3,
        base_delay: float = 1.0,
    ):
        """Initialize the client.

        Args:
            host: GitHub hostname (GH_HOST for gh).
            token: Optional token exported as GH_TOKEN; gh's own auth is
                used when not set.
            max_retries: Attempts for transient API errors.
            base_delay: Base backoff delay in seconds.
        """
        self.host = host
        self.token = token
        self.max_retries = max_retries
        self.base_delay = base_delay

    def _env(self) -> dict[str, str]:
        env = dict(os.environ)
        if self.host != "github.com":
            env["GH_HOST"] = self.host
        if self.token:
            env["GH_TOKEN"] = self.token
        return env

    def _exec(self, args: list[str], input: str | None = None) -> subprocess.CompletedProcess[str]:
        logger.debug(f"Running gh {' '.join(args[:4])}")
        try:
            return subprocess.run(
                ["gh", *args],
                capture_output=True,
                text=True,
                input=input,
                env=self._env(),
                check=False,
            )
        except FileNotFoundError as e:
            raise GhNotFoundError("gh CLI not found. Install it from https://cli.github.com/") from e

    def run(self, args: list[str], context: str, input: str | None = None) -> str:
        """Run a gh command, retrying transient errors.

        Returns:
            The command's stdout.

        Raises:
            GhPermissionError: Token lacks permission (not retried).
            TransientGitHubError: 5xx persisted after all retries.
            GhCommandError: Any other non-zero exit.
        """
        for attempt in range(self.max_retries):
            result = self._exec(args, input=input)
            if result.returncode == 0:
                return result.stdout

            stderr = result.stderr or ""
            if _is_permission_error(stderr):
                raise GhPermissionError(f"{context}: permission denied ({stderr.strip()})")

            if _is_transient_error(stderr):
                if attempt < self.max_retries - 1:
                    delay = self.base_delay * (2**attempt) + random.uniform(0, 0.5)
                    logger.warning(
                        f"{context}: GitHub API error (attempt {attempt + 1}/{self.max_retries}), "
                        f"retrying in {delay:.1f}s"
                    )
                    time.sleep(delay)
                    continue
                raise TransientGitHubError(
                    f"{context}: GitHub API returned transient error after {self.max_retries} attempts: "
                    f"{stderr.strip()}"
                )

            raise GhCommandError(context, result.returncode, stderr, result.stdout or "")

        raise GitHubError(f"{context}: retry loop exited unexpectedly")

    def api_json(
        self,
        endpoint: str,
        method: str | None = None,
        fields: dict[str, Any] | None = None,
    ) -> Any:
        """Call `gh api` and decode the JSON response."""
        args = ["api", "-H", f"Accept: {JSON_ACCEPT}"]
        if method:
            args.extend(["-X", method])
        args.append(endpoint)
        if fields:
            args.extend(build_field_args(fields))
        stdout = self.run(args, context="gh api")
        if not stdout.strip():
            return None
        try:
            return json.loads(stdout)
        except json.JSONDecodeError as e:
            raise GitHubError(f"gh api: invalid JSON from {endpoint}: {e}") from e

    def api_text(self, endpoint: str, accept: str) -> str:
        return self.run(["api", "-H", f"Accept: {accept}", endpoint], context="gh api (text)")

    def _paginate(self, endpoint: str) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        sep = "&" if "?" in endpoint else "?"
        for page in range(1, MAX_PAGES + 1):
            batch = self.api_json(f"{endpoint}{sep}per_page={PER_PAGE}&page={page}") or []
            items.extend(batch)
            if len(batch) < PER_PAGE:
                break
        return items

    # Authentication

    def auth_status(self) -> tuple[bool, str]:
        """Return (authenticated, gh's status output)."""
        result = self._exec(["auth", "status", "-h", self.host])
        if result.returncode == 0:
            return True, result.stdout or result.stderr
        return False, result.stderr or result.stdout

    def login_with_token(self, token: str) -> None:
        self.run(["auth", "login", "--hostname", self.host, "--with-token"], context="gh auth login", input=token)
        logger.info(f"Logged in to {self.host}")

    def get_user_login(self) -> str:
        return self.api_json("/user")["login"]

    # Pull requests

    def get_pull(self, repo: str, number: int) -> Pull:
        owner, name = split_repo(repo)
        return Pull.from_api(self.api_json(f"/repos/{owner}/{name}/pulls/{number}"))

    def list_pulls(self, repo: str, state: PullState, limit: int = 30) -> list[Pull]:
        """List pull requests by state.

        GitHub has no "merged" state; merged pulls are closed pulls with a
        merge timestamp, so at least 50 closed pulls are fetched and filtered.
        """
        if state is PullState.MERGED:
            closed = self.list_pulls(repo, PullState.CLOSED, max(limit, 50))
            return [p for p in closed if p.merged_at is not None][:limit]

        owner, name = split_repo(repo)
        per_page = min(PER_PAGE, max(1, limit))
        data = self.api_json(f"/repos/{owner}/{name}/pulls?state={state.value}&per_page={per_page}&page=1")
        return [Pull.from_api(p) for p in (data or [])[:limit]]

    def list_pull_files(self, repo: str, number: int) -> list[PullFile]:
        owner, name = split_repo(repo)
        return [PullFile.from_api(f) for f in self._paginate(f"/repos/{owner}/{name}/pulls/{number}/files")]

    def get_pull_diff(self, repo: str, number: int) -> str:
        owner, name = split_repo(repo)
        return self.api_text(f"/repos/{owner}/{name}/pulls/{number}", DIFF_ACCEPT)

    def create_pull(self, repo: str, title: str, head: str, base: str, body: str, draft: bool = False) -> str:
        owner, name = split_repo(repo)
        res = self.api_json(
            f"/repos/{owner}/{name}/pulls",
            method="POST",
            fields={"title": title, "head": head, "base": base, "body": body, "draft": draft},
        )
        return res["html_url"]

    def create_pull_with_cli(
        self, repo: str, title: str, head: str, base: str, body: str, draft: bool = False
    ) -> str:
        """Create a pull request with `gh pr create` (fallback when REST fails)."""
        args = ["pr", "create", "-R", repo, "--base", base, "--head", head, "--title", title, "--body", body]
        if draft:
            args.append("--draft")
        return self.run(args, context="gh pr create").strip()

    def merge_pull(self, repo: str, number: int, method: MergeMethod) -> tuple[bool, str]:
        """Merge a pull request. Returns (merged, GitHub's message)."""
        owner, name = split_repo(repo)
        res = self.api_json(
            f"/repos/{owner}/{name}/pulls/{number}/merge",
            method="PUT",
            fields={"merge_method": method.value},
        )
        return bool(res.get("merged")), res.get("message", "")

    def close_pull(self, repo: str, number: int) -> None:
        owner, name = split_repo(repo)
        self.api_json(f"/repos/{owner}/{name}/pulls/{number}", method="PATCH", fields={"state": "closed"})

    def checkout(self, repo: str, number: int) -> str:
        return self.run(["pr", "checkout", "-R", repo, str(number)], context="gh pr checkout")

    def delete_branch_if_possible(self, repo: str, pull: Pull) -> BranchDeletion:
        """Delete the head branch of a pull request when it lives in `repo`.

        Branches in forks (or with a different owner) are left alone.
        """
        if pull.head_repo_full_name != repo:
            return BranchDeletion(False, "Branch lives in a fork; not deleting it from here.")

        owner, name = split_repo(repo)
        if owner != pull.head_repo_owner:
            return BranchDeletion(False, "Different owner (possible fork); not deleting.")

        endpoint = f"/repos/{owner}/{name}/git/refs/heads/{quote(pull.head_ref, safe='')}"
        try:
            self.run(["api", "-X", "DELETE", "-H", f"Accept: {JSON_ACCEPT}", endpoint], context="Delete branch")
        except GitHubError as e:
            logger.warning(f"Failed to delete branch {pull.head_ref}: {e}")
            return BranchDeletion(False, str(e))
        logger.info(f"Deleted branch {pull.head_ref} in {repo}")
        return BranchDeletion(True)

    # Comments

    def list_issue_comments(self, repo: str, number: int) -> list[Comment]:
        owner, name = split_repo(repo)
        return [Comment.from_api(c) for c in self._paginate(f"/repos/{owner}/{name}/issues/{number}/comments")]

    def list_review_comments(self, repo: str, number: int) -> list[Comment]:
        owner, name = split_repo(repo)
        return [Comment.from_api(c) for c in self._paginate(f"/repos/{owner}/{name}/pulls/{number}/comments")]

    def add_issue_comment(self, repo: str, number: int, body: str) -> str:
        owner, name = split_repo(repo)
        res = self.api_json(f"/repos/{owner}/{name}/issues/{number}/comments", method="POST", fields={"body": body})
        return res["html_url"]

    def add_inline_review_comment(self, repo: str, number: int, comment: InlineComment) -> str:
        owner, name = split_repo(repo)
        res = self.api_json(
            f"/repos/{owner}/{name}/pulls/{number}/comments",
            method="POST",
            fields=comment.to_fields(),
        )
        logger.info(f"Posted inline comment on {comment.path}:{comment.side.value}{comment.line}")
        return res["html_url"]
