"""Configuration loading and validation for GH Review."""

import os
from pathlib import Path
import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator
import yaml

from .models import MergeMethod


_REPO_RE = re.compile(r"^[^/\s]+/[^/\s]+$")


class GitHubConfig(BaseModel):
    """GitHub connection settings, passed to the `gh` CLI."""

    host: str = "github.com"
    repo: Optional[str] = None  # Default owner/name when not inside a checkout
    token: Optional[str] = None  # Exported as GH_TOKEN for gh calls when set
    max_retries: int = 3

    @field_validator("repo")
    @classmethod
    def validate_repo(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not _REPO_RE.match(v):
            raise ValueError("repo must be in owner/repo format")
        return v

    @field_validator("token")
    @classmethod
    def resolve_env_var(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return _resolve_env_var(v)

    @field_validator("max_retries")
    @classmethod
    def validate_retries(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_retries must be at least 1")
        return v


class ReviewConfig(BaseModel):
    """Defaults for the interactive review flow."""

    search_limit: int = 50
    context_radius: int = 25
    max_line_attempts: int = 5
    list_limit: int = 30
    max_file_choices: int = 200
    default_merge_method: str = MergeMethod.MERGE.value

    @field_validator("default_merge_method")
    @classmethod
    def validate_merge_method(cls, v: str) -> str:
        valid_methods = [m.value for m in MergeMethod]
        if v not in valid_methods:
            raise ValueError(f"Merge method must be one of: {valid_methods}")
        return v

    @field_validator("search_limit", "context_radius", "max_line_attempts", "list_limit", "max_file_choices")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Value must not be negative")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Level must be one of: {valid_levels}")
        return v

    @property
    def resolved_file(self) -> Optional[Path]:
        if self.file:
            return Path(self.file).expanduser()
        return None


class Config(BaseModel):
    """Main configuration model."""

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    review: ReviewConfig = Field(default_factory=ReviewConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _resolve_env_var(value: str) -> str:
    """Resolve environment variable references in config values.

    Supports ${VAR_NAME} syntax.
    """
    pattern = r"\$\{([^}]+)\}"
    match = re.match(pattern, value)
    if match:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise ValueError(f"Environment variable {var_name} not set")
        return env_value
    return value


def default_config_paths() -> list[Path]:
    return [
        Path.cwd() / "gh-review.yaml",
        Path.home() / ".gh_review" / "config.yaml",
    ]


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, searches the default
            locations and falls back to built-in defaults when none exists.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If an explicit config path does not exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        for path in default_config_paths():
            if path.exists():
                config_path = path
                break
        else:
            return Config()

    config_path = Path(config_path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw_config = yaml.safe_load(f)

    return Config.model_validate(raw_config or {})


EXAMPLE_CONFIG = """\
# GH Review Configuration
github:
  host: "github.com"
  # Used when the current directory is not a GitHub checkout
  # repo: "owner/repo"
  # token: "${GH_TOKEN}"

review:
  search_limit: 50
  context_radius: 25
  max_line_attempts: 5
  list_limit: 30
  default_merge_method: "merge"

logging:
  level: "INFO"
  # file: "~/.gh_review/gh_review.log"
"""
