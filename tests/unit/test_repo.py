"""Tests for repository and pull request identification."""

from pathlib import Path

from git import Repo
import pytest

from gh_review.gh import (
    RepoDetectionError,
    current_branch,
    detect_repo_from_cwd,
    extract_pr_number,
    parse_repo_from_remote,
    split_repo,
)


class TestParseRepoFromRemote:
    """Tests for parse_repo_from_remote function."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/octo/widgets.git",
            "https://github.com/octo/widgets",
            "https://github.com/octo/widgets/",
            "git@github.com:octo/widgets.git",
            "git@github.com:octo/widgets",
            "ssh://git@github.com/octo/widgets.git",
        ],
    )
    def test_github_remotes(self, url: str):
        assert parse_repo_from_remote(url) == "octo/widgets"

    def test_dotted_repo_name(self):
        assert parse_repo_from_remote("https://github.com/octo/widgets.js.git") == "octo/widgets.js"

    @pytest.mark.parametrize(
        "url",
        [
            "https://gitlab.com/octo/widgets.git",
            "git@bitbucket.org:octo/widgets.git",
            "/srv/git/widgets.git",
        ],
    )
    def test_non_github_remotes(self, url: str):
        assert parse_repo_from_remote(url) is None


class TestDetectRepo:
    def test_from_origin(self, temp_git_repo: tuple[Path, Repo]):
        repo_path, _ = temp_git_repo
        assert detect_repo_from_cwd(repo_path) == "octo/widgets"

    def test_from_subdirectory(self, temp_git_repo: tuple[Path, Repo]):
        repo_path, _ = temp_git_repo
        sub = repo_path / "src" / "pkg"
        sub.mkdir(parents=True)

        assert detect_repo_from_cwd(sub) == "octo/widgets"

    def test_no_origin(self, temp_git_repo: tuple[Path, Repo]):
        repo_path, repo = temp_git_repo
        repo.delete_remote(repo.remote("origin"))

        assert detect_repo_from_cwd(repo_path) is None

    def test_non_github_origin(self, temp_git_repo: tuple[Path, Repo]):
        repo_path, repo = temp_git_repo
        repo.remote("origin").set_url("https://gitlab.com/octo/widgets.git")

        assert detect_repo_from_cwd(repo_path) is None

    def test_not_a_repo(self, tmp_path: Path):
        assert detect_repo_from_cwd(tmp_path) is None

    def test_current_branch(self, temp_git_repo: tuple[Path, Repo]):
        repo_path, repo = temp_git_repo
        assert current_branch(repo_path) == repo.active_branch.name

        repo.git.checkout("-b", "feature/x")
        assert current_branch(repo_path) == "feature/x"

    def test_current_branch_outside_repo(self, tmp_path: Path):
        assert current_branch(tmp_path) is None


class TestSplitRepo:
    def test_valid(self):
        assert split_repo("octo/widgets") == ("octo", "widgets")

    @pytest.mark.parametrize("value", ["widgets", "octo/", "/widgets", "a/b/c", ""])
    def test_invalid(self, value: str):
        with pytest.raises(RepoDetectionError, match="expected owner/repo"):
            split_repo(value)


class TestExtractPrNumber:
    """Tests for extract_pr_number function."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("42", 42),
            (" 42 ", 42),
            ("https://github.com/octo/widgets/pull/42", 42),
            ("https://github.com/octo/widgets/pull/42/files", 42),
            ("https://github.com/octo/widgets/pull/42#discussion_r1", 42),
        ],
    )
    def test_valid(self, value: str, expected: int):
        assert extract_pr_number(value) == expected

    @pytest.mark.parametrize("value", ["", "abc", "#42", "https://github.com/octo/widgets/issues/42", "-3"])
    def test_invalid(self, value: str):
        assert extract_pr_number(value) is None
