"""Mock GitHub client for testing."""

from typing import Any

from gh_review.models import BranchDeletion, Comment, InlineComment, MergeMethod, Pull, PullFile, PullState


def make_pull_data(number: int = 42, **overrides: Any) -> dict[str, Any]:
    """REST-shaped pull request payload."""
    data: dict[str, Any] = {
        "number": number,
        "title": f"Test pull #{number}",
        "state": "open",
        "draft": False,
        "merged_at": None,
        "user": {"login": "octocat"},
        "base": {"ref": "main"},
        "head": {
            "ref": "feature",
            "sha": "deadbeef",
            "repo": {"full_name": "octo/widgets", "owner": {"login": "octo"}},
        },
        "html_url": f"https://github.com/octo/widgets/pull/{number}",
        "created_at": "2026-01-01T00:00:00Z",
        "updated_at": "2026-01-02T00:00:00Z",
        "commits": 2,
        "changed_files": 3,
        "additions": 10,
        "deletions": 4,
        "labels": [{"name": "bug"}],
        "assignees": [],
        "milestone": None,
        "body": "Fixes things.",
    }
    data.update(overrides)
    return data


class MockGitHubClient:
    """Mock GitHub client.

    Provides configurable responses without running `gh`, and records
    every write so tests can assert on it.
    """

    def __init__(
        self,
        pulls: list[dict[str, Any]] | None = None,
        files: list[dict[str, Any]] | None = None,
        full_diff: str = "",
        login: str = "octocat",
    ):
        self.pulls = pulls if pulls is not None else [make_pull_data()]
        self.files = files or []
        self.full_diff = full_diff
        self.login = login
        self.diff_requests = 0
        self.inline_comments: list[InlineComment] = []
        self.issue_comments: list[tuple[int, str]] = []
        self.merged: list[tuple[int, MergeMethod]] = []
        self.closed: list[int] = []
        self.login_tokens: list[str] = []

    def _pull(self, number: int) -> dict[str, Any]:
        for data in self.pulls:
            if data["number"] == number:
                return data
        return make_pull_data(number)

    def auth_status(self) -> tuple[bool, str]:
        return True, "Logged in to github.com as octocat"

    def login_with_token(self, token: str) -> None:
        self.login_tokens.append(token)

    def get_user_login(self) -> str:
        return self.login

    def get_pull(self, repo: str, number: int) -> Pull:
        return Pull.from_api(self._pull(number))

    def list_pulls(self, repo: str, state: PullState, limit: int = 30) -> list[Pull]:
        pulls = [Pull.from_api(p) for p in self.pulls]
        if state is PullState.MERGED:
            pulls = [p for p in pulls if p.merged_at]
        return pulls[:limit]

    def list_pull_files(self, repo: str, number: int) -> list[PullFile]:
        return [PullFile.from_api(f) for f in self.files]

    def get_pull_diff(self, repo: str, number: int) -> str:
        self.diff_requests += 1
        return self.full_diff

    def add_inline_review_comment(self, repo: str, number: int, comment: InlineComment) -> str:
        self.inline_comments.append(comment)
        return f"https://github.com/{repo}/pull/{number}#discussion_r{len(self.inline_comments)}"

    def add_issue_comment(self, repo: str, number: int, body: str) -> str:
        self.issue_comments.append((number, body))
        return f"https://github.com/{repo}/pull/{number}#issuecomment-{len(self.issue_comments)}"

    def list_issue_comments(self, repo: str, number: int) -> list[Comment]:
        return [Comment(author="alice", created_at="2026-01-03", html_url="u1", body="LGTM")]

    def list_review_comments(self, repo: str, number: int) -> list[Comment]:
        return [Comment(author="bob", created_at="2026-01-04", html_url="u2", body="nit", path="src/app.py", line=12)]

    def merge_pull(self, repo: str, number: int, method: MergeMethod) -> tuple[bool, str]:
        self.merged.append((number, method))
        return True, "Pull Request successfully merged"

    def close_pull(self, repo: str, number: int) -> None:
        self.closed.append(number)

    def delete_branch_if_possible(self, repo: str, pull: Pull) -> BranchDeletion:
        return BranchDeletion(True)

    def checkout(self, repo: str, number: int) -> str:
        return f"Switched to branch 'pr-{number}'"
