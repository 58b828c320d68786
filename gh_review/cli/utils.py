"""Utility commands and parameter types for GH Review CLI."""

from pathlib import Path
import sys

import click

from ..config import EXAMPLE_CONFIG
from ..gh import extract_pr_number
from . import main


def parse_pr_number(value: str) -> int:
    """Parse a pull request number from `42` or a `.../pull/42` URL.

    Raises:
        click.BadParameter: If no number can be extracted.
    """
    number = extract_pr_number(value)
    if number is None:
        raise click.BadParameter(f"Cannot parse pull request number from: {value}")
    return number


class PrNumberParamType(click.ParamType):
    """Click parameter type accepting a PR number or a PR URL."""

    name = "pr"

    def convert(self, value, param, ctx):
        if value is None or isinstance(value, int):
            return value
        try:
            return parse_pr_number(value)
        except click.BadParameter as e:
            self.fail(str(e), param, ctx)


PR_NUMBER = PrNumberParamType()


@main.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file")
def init(force: bool) -> None:
    """Create a starter gh-review.yaml in the current directory."""
    config_path = Path.cwd() / "gh-review.yaml"

    if config_path.exists() and not force:
        click.echo(f"Config file already exists: {config_path}")
        if not click.confirm("Overwrite?"):
            sys.exit(0)

    config_path.write_text(EXAMPLE_CONFIG)

    click.echo(f"Created config file: {config_path}")
    click.echo("\nNext steps:")
    click.echo("1. Make sure the gh CLI is installed and run 'gh-review auth status'")
    click.echo("2. Set github.repo if you work outside a GitHub checkout")
    click.echo("3. Run 'gh-review pr list'")
