"""Tests for configuration loading and validation."""

from pathlib import Path

from pydantic import ValidationError
import pytest
import yaml

from gh_review.config import EXAMPLE_CONFIG, Config, _resolve_env_var, load_config


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_config_from_path(self, temp_config_file: Path):
        config = load_config(temp_config_file)

        assert config.github.repo == "octo/widgets"
        assert config.review.search_limit == 5
        assert config.review.context_radius == 2
        assert config.review.max_line_attempts == 3
        # Unset values keep their defaults
        assert config.review.list_limit == 30
        assert config.github.host == "github.com"

    def test_load_config_default_paths(self, isolated_filesystem: Path):
        """Search the current directory first."""
        (isolated_filesystem / "gh-review.yaml").write_text("review:\n  search_limit: 7\n")

        assert load_config().review.search_limit == 7

    def test_load_config_home_path(self, isolated_filesystem: Path):
        config_dir = isolated_filesystem / ".gh_review"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("github:\n  host: ghe.example.com\n")

        assert load_config().github.host == "ghe.example.com"

    def test_no_config_file_means_defaults(self, isolated_filesystem: Path):
        config = load_config()

        assert config == Config()
        assert config.review.search_limit == 50
        assert config.review.context_radius == 25
        assert config.review.max_line_attempts == 5

    def test_load_config_explicit_path_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "nonexistent.yaml")

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path) == Config()

    def test_example_config_is_valid(self):
        config = Config.model_validate(yaml.safe_load(EXAMPLE_CONFIG))

        assert config.review.default_merge_method == "merge"
        assert config.logging.level == "INFO"


class TestValidation:
    def test_invalid_repo(self):
        with pytest.raises(ValidationError, match="owner/repo"):
            Config.model_validate({"github": {"repo": "just-a-name"}})

    def test_repo_is_stripped(self):
        config = Config.model_validate({"github": {"repo": "  octo/widgets "}})
        assert config.github.repo == "octo/widgets"

    def test_invalid_merge_method(self):
        with pytest.raises(ValidationError, match="Merge method"):
            Config.model_validate({"review": {"default_merge_method": "octopus"}})

    def test_negative_limit(self):
        with pytest.raises(ValidationError):
            Config.model_validate({"review": {"search_limit": -1}})

    def test_retries_at_least_one(self):
        with pytest.raises(ValidationError, match="max_retries"):
            Config.model_validate({"github": {"max_retries": 0}})

    def test_log_level_uppercased(self):
        config = Config.model_validate({"logging": {"level": "debug"}})
        assert config.logging.level == "DEBUG"

    def test_log_file_expanded(self):
        config = Config.model_validate({"logging": {"file": "~/review.log"}})
        assert config.logging.resolved_file == Path("~/review.log").expanduser()


class TestEnvVarResolution:
    """Tests for _resolve_env_var function."""

    def test_resolve_env_var(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("GH_REVIEW_TEST_TOKEN", "secret")
        assert _resolve_env_var("${GH_REVIEW_TEST_TOKEN}") == "secret"

    def test_plain_value_unchanged(self):
        assert _resolve_env_var("plain-token") == "plain-token"

    def test_missing_env_var(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("GH_REVIEW_MISSING", raising=False)
        with pytest.raises(ValueError, match="GH_REVIEW_MISSING"):
            _resolve_env_var("${GH_REVIEW_MISSING}")

    def test_token_resolved_in_config(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("GH_REVIEW_TEST_TOKEN", "from-env")
        config = Config.model_validate({"github": {"token": "${GH_REVIEW_TEST_TOKEN}"}})

        assert config.github.token == "from-env"
