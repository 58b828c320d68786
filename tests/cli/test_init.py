"""Tests for the init command and PR number parsing."""

from pathlib import Path

import click
from click.testing import CliRunner
import pytest

from gh_review.cli import main
from gh_review.cli.utils import PR_NUMBER, parse_pr_number


class TestInitCommand:
    """Tests for gh-review init command."""

    def test_init_creates_config(self, cli_runner: CliRunner, isolated_filesystem: Path):
        result = cli_runner.invoke(main, ["init"])

        assert result.exit_code == 0
        assert (isolated_filesystem / "gh-review.yaml").exists()
        assert "Created config file" in result.output

    def test_init_config_content(self, cli_runner: CliRunner, isolated_filesystem: Path):
        cli_runner.invoke(main, ["init"])

        content = (isolated_filesystem / "gh-review.yaml").read_text()
        assert "github:" in content
        assert "review:" in content
        assert "logging:" in content

    def test_init_no_overwrite_without_confirm(self, cli_runner: CliRunner, isolated_filesystem: Path):
        config_path = isolated_filesystem / "gh-review.yaml"
        config_path.write_text("# Existing config")

        result = cli_runner.invoke(main, ["init"], input="n\n")

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert config_path.read_text() == "# Existing config"

    def test_init_force(self, cli_runner: CliRunner, isolated_filesystem: Path):
        config_path = isolated_filesystem / "gh-review.yaml"
        config_path.write_text("# Existing config")

        result = cli_runner.invoke(main, ["init", "--force"])

        assert result.exit_code == 0
        assert "review:" in config_path.read_text()


class TestPrNumberParsing:
    """Tests for parse_pr_number and the PR_NUMBER parameter type."""

    def test_number(self):
        assert parse_pr_number("42") == 42

    def test_url(self):
        assert parse_pr_number("https://github.com/octo/widgets/pull/17/files") == 17

    def test_invalid(self):
        with pytest.raises(click.BadParameter, match="Cannot parse pull request number from: abc"):
            parse_pr_number("abc")

    def test_param_type_passthrough(self):
        assert PR_NUMBER.convert(5, None, None) == 5
        assert PR_NUMBER.convert("https://github.com/o/r/pull/9", None, None) == 9

    def test_invalid_argument_on_command_line(
        self, cli_runner: CliRunner, isolated_filesystem: Path, patched_client
    ):
        result = cli_runner.invoke(main, ["-R", "octo/widgets", "pr", "view", "not-a-pr"])

        assert result.exit_code == 2
        assert "Cannot parse pull request number" in result.output
