"""Data models for GH Review."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Side(str, Enum):
    """Line-numbering track of a unified diff, as named by the review API."""

    LEFT = "LEFT"
    RIGHT = "RIGHT"


class PullState(str, Enum):
    """Pull request states accepted by `pr list`."""

    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


class MergeMethod(str, Enum):
    """Merge strategies supported by the merge endpoint."""

    MERGE = "merge"
    SQUASH = "squash"
    REBASE = "rebase"


@dataclass
class Pull:
    """A pull request as returned by `GET /repos/{owner}/{repo}/pulls/{n}`."""

    number: int
    title: str
    state: str  # "open" or "closed"; merged pulls are closed with merged_at set
    author: str
    base_ref: str
    head_ref: str
    head_sha: str
    head_repo_full_name: str | None
    head_repo_owner: str | None
    html_url: str
    draft: bool = False
    merged_at: str | None = None
    created_at: str = ""
    updated_at: str = ""
    commits: int = 0
    changed_files: int = 0
    additions: int = 0
    deletions: int = 0
    labels: list[str] = field(default_factory=list)
    assignees: list[str] = field(default_factory=list)
    milestone: str | None = None
    body: str = ""

    @property
    def display_state(self) -> str:
        return "merged" if self.merged_at else self.state

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Pull":
        """Build a Pull from the REST API JSON payload."""
        head = data.get("head") or {}
        head_repo = head.get("repo") or {}
        milestone = data.get("milestone") or {}
        return cls(
            number=data["number"],
            title=data.get("title", ""),
            state=data.get("state", "open"),
            author=(data.get("user") or {}).get("login", ""),
            base_ref=(data.get("base") or {}).get("ref", ""),
            head_ref=head.get("ref", ""),
            head_sha=head.get("sha", ""),
            head_repo_full_name=head_repo.get("full_name"),
            head_repo_owner=(head_repo.get("owner") or {}).get("login"),
            html_url=data.get("html_url", ""),
            draft=bool(data.get("draft", False)),
            merged_at=data.get("merged_at"),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
            commits=data.get("commits", 0),
            changed_files=data.get("changed_files", 0),
            additions=data.get("additions", 0),
            deletions=data.get("deletions", 0),
            labels=[label["name"] for label in data.get("labels") or []],
            assignees=[a["login"] for a in data.get("assignees") or []],
            milestone=milestone.get("title"),
            body=data.get("body") or "",
        )


@dataclass
class PullFile:
    """One changed file of a pull request.

    `patch` is absent for binary files and for very large diffs.
    """

    filename: str
    patch: str | None = None
    status: str = "modified"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PullFile":
        return cls(
            filename=data["filename"],
            patch=data.get("patch"),
            status=data.get("status", "modified"),
        )


@dataclass
class Comment:
    """An issue (conversation) comment or an inline review comment."""

    author: str
    created_at: str
    html_url: str
    body: str
    path: str | None = None  # Inline comments only
    line: int | None = None  # Inline comments only

    @property
    def is_inline(self) -> bool:
        return self.path is not None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Comment":
        line = data.get("line")
        if line is None:
            line = data.get("original_line")
        return cls(
            author=(data.get("user") or {}).get("login", ""),
            created_at=data.get("created_at", ""),
            html_url=data.get("html_url", ""),
            body=data.get("body") or "",
            path=data.get("path"),
            line=line,
        )


@dataclass
class InlineComment:
    """Payload for `POST /repos/{owner}/{repo}/pulls/{n}/comments`."""

    body: str
    commit_id: str
    path: str
    line: int
    side: Side

    def to_fields(self) -> dict[str, Any]:
        return {
            "body": self.body,
            "commit_id": self.commit_id,
            "path": self.path,
            "line": self.line,
            "side": self.side.value,
        }


@dataclass
class BranchDeletion:
    """Outcome of an attempt to delete a pull request's head branch."""

    deleted: bool
    reason: str | None = None
