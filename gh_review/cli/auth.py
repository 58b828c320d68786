"""Authentication commands for GH Review CLI."""

import logging
import sys

import click

from ..gh import GitHubError
from . import get_client, main


logger = logging.getLogger(__name__)


@main.group()
def auth():
    """GitHub authentication commands."""
    pass


@auth.command("status")
@click.pass_context
def auth_status(ctx: click.Context) -> None:
    """Show gh authentication status."""
    client = get_client(ctx)
    try:
        ok, output = client.auth_status()
    except GitHubError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(output.strip() or ("OK" if ok else "Not authenticated"))
    if not ok:
        sys.exit(1)


@auth.command("login")
@click.option("--token", help="Personal access token (prompted when omitted)")
@click.pass_context
def auth_login(ctx: click.Context, token: str | None) -> None:
    """Log in to GitHub with a personal access token."""
    if not token:
        token = click.prompt("Paste your token (PAT)", hide_input=True)

    client = get_client(ctx)
    try:
        client.login_with_token(token.strip())
    except GitHubError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo("Authentication complete.")
