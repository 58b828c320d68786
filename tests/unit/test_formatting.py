"""Tests for terminal formatting of pulls and comments."""

from gh_review.diff import AnnotatedRow, LineKind
from gh_review.formatting import PullFormatter
from gh_review.models import Comment, Pull
from gh_review.ui.widgets.diff_viewer import style_for_row

from ..mocks import make_pull_data


class TestPullFormatter:
    def test_pull_line(self):
        pull = Pull.from_api(make_pull_data(7, draft=True))

        assert PullFormatter.format_pull_line(pull) == "#7 [open] (draft) Test pull #7 (@octocat)"

    def test_merged_state_shown(self):
        pull = Pull.from_api(make_pull_data(8, state="closed", merged_at="2026-01-05T00:00:00Z"))

        assert "[merged]" in PullFormatter.format_pull_line(pull)

    def test_details(self):
        pull = Pull.from_api(make_pull_data(milestone={"title": "v1.0"}))
        text = PullFormatter.format_pull_details(pull)

        assert text.splitlines()[0] == "#42 Test pull #42"
        assert "Base: main   Head: feature" in text
        assert "Stats: 2 commits, 3 files, +10 -4" in text
        assert "Labels: bug" in text
        assert "Assignees: -" in text
        assert "Milestone: v1.0" in text
        assert text.endswith("Body:\nFixes things.")

    def test_comments(self):
        issue = [Comment(author="alice", created_at="2026-01-03", html_url="u1", body="LGTM")]
        review = [Comment(author="bob", created_at="2026-01-04", html_url="u2", body="nit", path="a.py", line=None)]
        text = PullFormatter.format_comments("octo/widgets", 42, issue, review)

        assert text.startswith("Comments on PR #42 in octo/widgets")
        assert "- @alice 2026-01-03" in text
        assert "File: a.py  Line: 0" in text
        assert "(no comments)" not in text

    def test_no_comments(self):
        text = PullFormatter.format_comments("octo/widgets", 42, [], [])

        assert "(no comments)" in text
        assert "(no review comments)" in text


class TestModels:
    def test_pull_from_api_without_head_repo(self):
        """Deleted fork: head.repo is null."""
        data = make_pull_data(head={"ref": "feature", "sha": "abc", "repo": None})
        pull = Pull.from_api(data)

        assert pull.head_repo_full_name is None
        assert pull.head_repo_owner is None
        assert pull.labels == ["bug"]

    def test_comment_is_inline(self):
        assert Comment.from_api({"path": "a.py", "line": 2}).is_inline
        assert not Comment.from_api({"body": "hi"}).is_inline


class TestRowStyles:
    def test_style_by_kind(self):
        assert style_for_row(AnnotatedRow(None, 3, "+x", LineKind.ADDED)) == "green"
        assert style_for_row(AnnotatedRow(3, None, "-x", LineKind.REMOVED)) == "red"
        assert style_for_row(AnnotatedRow(3, 3, " x", LineKind.CONTEXT)) == ""
