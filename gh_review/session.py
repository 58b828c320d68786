"""Inline review session: from a pull request file to a posted line comment.

The session holds the state of one guided inline-comment flow. It fetches
the file list and diff through the GitHub client, runs the diff core over
the chosen file and validates the user's line choice against the lines the
annotated view actually showed. Prompting is left to the caller.
"""

import logging

from .diff import (
    DiffAnnotation,
    Hunk,
    LineSelector,
    SearchMatch,
    SelectorCheck,
    annotate_diff,
    check_line_selector,
    context_around,
    extract_file_diff,
    file_diff_from_patch,
    parse_hunks,
    search_annotated,
)
from .gh import GitHubClient
from .models import InlineComment, Pull, PullFile


logger = logging.getLogger(__name__)


class ReviewSessionError(Exception):
    """The inline review flow cannot continue."""


class InlineReviewSession:
    """State for one inline comment on one pull request."""

    def __init__(self, client: GitHubClient, repo: str, number: int):
        self.client = client
        self.repo = repo
        self.number = number
        self.pull: Pull | None = None
        self.files: list[PullFile] = []
        self.path: str | None = None
        self.diff_lines: list[str] = []
        self.hunks: list[Hunk] = []
        self.annotation: DiffAnnotation | None = None
        self._full_diff: str | None = None

    def load_pull(self) -> Pull:
        self.pull = self.client.get_pull(self.repo, self.number)
        return self.pull

    def load_files(self) -> list[PullFile]:
        """Fetch the changed files.

        Raises:
            ReviewSessionError: If the pull request changes no files.
        """
        self.files = self.client.list_pull_files(self.repo, self.number)
        if not self.files:
            raise ReviewSessionError("No files in this pull request.")
        return self.files

    def _full_pull_diff(self) -> str:
        if self._full_diff is None:
            logger.info(f"Empty patch, loading full diff of PR #{self.number}")
            self._full_diff = self.client.get_pull_diff(self.repo, self.number)
        return self._full_diff

    def select_file(self, path: str) -> list[Hunk]:
        """Load one file's diff and locate its hunks.

        Uses the `patch` from the files API when present and falls back to
        extracting the file from the full pull request diff.

        Returns:
            The file's hunks.

        Raises:
            ReviewSessionError: If the file has no textual diff or no hunks.
        """
        pull_file = next((f for f in self.files if f.filename == path), None)
        if pull_file is not None and pull_file.patch:
            lines = file_diff_from_patch(path, pull_file.patch)
        else:
            lines = extract_file_diff(self._full_pull_diff(), path)
            if not lines:
                raise ReviewSessionError(f"Could not extract the diff for {path} (binary or no patch).")

        hunks = parse_hunks(lines)
        if not hunks:
            raise ReviewSessionError(f"No hunks (@@) detected in {path}. Binary file?")

        self.path = path
        self.diff_lines = lines
        self.hunks = hunks
        self.annotation = None
        logger.debug(f"Loaded {path}: {len(lines)} lines, {len(hunks)} hunks")
        return hunks

    def annotate(self, hunk: int = 0) -> DiffAnnotation:
        """Annotate the selected file for one hunk (or all hunks with 0)."""
        if self.path is None:
            raise ReviewSessionError("No file selected.")
        if hunk < 0 or hunk > len(self.hunks):
            raise ReviewSessionError(f"Hunk {hunk} out of range (1..{len(self.hunks)}, or 0 for all).")
        self.annotation = annotate_diff(self.diff_lines, hunk)
        return self.annotation

    def _require_annotation(self) -> DiffAnnotation:
        if self.annotation is None:
            raise ReviewSessionError("Diff not annotated yet.")
        return self.annotation

    def search(self, query: str, limit: int = 50) -> list[SearchMatch]:
        return search_annotated(self._require_annotation().rows, query, limit)

    def context(self, row_number: int, radius: int = 25) -> list[str]:
        return context_around(self._require_annotation().rows, row_number, radius)

    def check_selector(self, text: str) -> SelectorCheck:
        return check_line_selector(text, self._require_annotation().index)

    def build_comment(self, body: str, selector: LineSelector) -> InlineComment:
        """Build the review comment payload anchored to the head commit.

        Raises:
            ReviewSessionError: If the body is blank, the line is not in the
                annotated diff, or the pull request was not loaded.
        """
        annotation = self._require_annotation()
        if not body.strip():
            raise ReviewSessionError("Empty comment.")
        if not annotation.has_line(selector.side, selector.line):
            raise ReviewSessionError(f"Line {selector} is not part of the displayed diff.")
        if self.pull is None or self.path is None:
            raise ReviewSessionError("Pull request not loaded.")
        return InlineComment(
            body=body,
            commit_id=self.pull.head_sha,
            path=self.path,
            line=selector.line,
            side=selector.side,
        )

    def post_comment(self, body: str, selector: LineSelector) -> str:
        """Post the inline comment and return its URL."""
        comment = self.build_comment(body, selector)
        return self.client.add_inline_review_comment(self.repo, self.number, comment)
