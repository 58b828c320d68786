"""Shared test fixtures for GH Review."""

from collections.abc import Generator
from pathlib import Path

from click.testing import CliRunner
from git import Repo
import pytest

from .mocks import MockGitHubClient


# Path to test data directory
TEST_DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def sample_diff() -> str:
    """Two-file diff: src/app.py with three hunks, README.md with one."""
    return (TEST_DATA_DIR / "sample_diff.patch").read_text()


@pytest.fixture
def sample_diff_path() -> Path:
    return TEST_DATA_DIR / "sample_diff.patch"


@pytest.fixture
def widget_patch() -> str:
    """Hunk-only patch as returned in the `patch` field of the PR files API."""
    return (TEST_DATA_DIR / "widget.patch").read_text()


@pytest.fixture
def mock_gh(sample_diff: str, widget_patch: str) -> MockGitHubClient:
    """Mock GitHub client serving one pull request with three files."""
    return MockGitHubClient(
        full_diff=sample_diff,
        files=[
            {"filename": "src/app.py"},  # No patch: must come from the full diff
            {"filename": "src/widget.py", "patch": widget_patch},
            {"filename": "logo.png"},
        ],
    )


@pytest.fixture
def isolated_filesystem(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change to an isolated temporary directory.

    Returns:
        Path to the temporary directory.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Generator[tuple[Path, Repo], None, None]:
    """Create a temporary git repository with a GitHub origin remote.

    Yields:
        Tuple of (repo_path, Repo instance).
    """
    repo_path = tmp_path / "test_repo"
    repo_path.mkdir()

    repo = Repo.init(repo_path)
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    readme = repo_path / "README.md"
    readme.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    repo.create_remote("origin", "git@github.com:octo/widgets.git")

    yield repo_path, repo


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary config file with a fixed repository."""
    config_path = tmp_path / "gh-review.yaml"
    config_path.write_text(
        """\
github:
  repo: "octo/widgets"
review:
  search_limit: 5
  context_radius: 2
  max_line_attempts: 3
"""
    )
    return config_path


@pytest.fixture
def patched_client(mock_gh: MockGitHubClient, monkeypatch: pytest.MonkeyPatch) -> MockGitHubClient:
    """Route every CLI command to the mock GitHub client."""
    for module in ("auth", "pr", "inline"):
        monkeypatch.setattr(f"gh_review.cli.{module}.get_client", lambda ctx: mock_gh)
    return mock_gh
