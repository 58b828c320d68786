"""Command-line interface for GH Review."""

import logging
from pathlib import Path
import sys

import click

from .. import __version__
from ..config import Config, load_config
from ..gh import GitHubClient, detect_repo_from_cwd


logger = logging.getLogger(__name__)


def setup_logging(level: str, log_file: Path | None = None) -> None:
    """Configure logging for the application."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to config file",
)
@click.option(
    "--repo",
    "-R",
    help="Repository as owner/repo (default: detected from the origin remote)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, config: Path | None, repo: str | None, verbose: bool) -> None:
    """GH Review - review GitHub pull requests from the terminal."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["repo"] = repo
    ctx.obj["verbose"] = verbose

    setup_logging("DEBUG" if verbose else "WARNING")
    ctx.obj["config"] = None


def get_config(ctx: click.Context) -> Config:
    """Load and return config, caching it in context."""
    if ctx.obj.get("config") is not None:
        return ctx.obj["config"]

    config_path = ctx.obj.get("config_path")
    verbose = ctx.obj.get("verbose", False)

    cfg = load_config(config_path)

    log_level = "DEBUG" if verbose else cfg.logging.level
    setup_logging(log_level, cfg.logging.resolved_file)

    ctx.obj["config"] = cfg
    return cfg


def get_client(ctx: click.Context) -> GitHubClient:
    """Build the GitHub client from config."""
    config = get_config(ctx)
    return GitHubClient(
        host=config.github.host,
        token=config.github.token,
        max_retries=config.github.max_retries,
    )


def resolve_repo(ctx: click.Context) -> str:
    """Pick the repository: --repo, then the current checkout, then config, then ask."""
    repo = ctx.obj.get("repo")
    if repo:
        return repo.strip()

    detected = detect_repo_from_cwd()
    if detected:
        logger.debug(f"Detected repository {detected} from origin remote")
        return detected

    config = get_config(ctx)
    if config.github.repo:
        return config.github.repo

    repo = click.prompt("Repository (owner/repo)").strip()
    if repo.count("/") != 1 or repo.startswith("/") or repo.endswith("/"):
        click.echo("Error: Invalid format (owner/repo)", err=True)
        sys.exit(1)
    return repo


# Import and register subcommands
from . import (
    auth,  # noqa: E402, F401
    diff,  # noqa: E402, F401
    inline,  # noqa: E402, F401
    pr,  # noqa: E402, F401
    utils,  # noqa: E402, F401
)
