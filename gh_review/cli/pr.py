"""Pull request commands for GH Review CLI."""

import logging
import sys

import click
from git import GitCommandError

from ..formatting import PullFormatter
from ..gh import GitHubError, RepoDetectionError, current_branch, push_current_branch, split_repo
from ..models import MergeMethod, PullState
from . import get_client, get_config, main, resolve_repo
from .utils import PR_NUMBER


logger = logging.getLogger(__name__)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _report_branch_deletion(ctx: click.Context, repo: str, number: int) -> str:
    client = get_client(ctx)
    pull = client.get_pull(repo, number)
    result = client.delete_branch_if_possible(repo, pull)
    if result.deleted:
        return f"Branch deleted: {pull.head_ref}"
    return f"Branch not deleted: {result.reason or 'no reason given'}"


@main.group()
def pr():
    """Pull request commands."""
    pass


@pr.command("list")
@click.option(
    "--state",
    type=click.Choice([s.value for s in PullState]),
    default=PullState.OPEN.value,
    help="Pull request state (default: open)",
)
@click.option("--mine", is_flag=True, help="Only pull requests opened by you")
@click.option("--limit", "-n", type=int, default=None, help="Maximum number of results")
@click.pass_context
def pr_list(ctx: click.Context, state: str, mine: bool, limit: int | None) -> None:
    """List pull requests."""
    config = get_config(ctx)
    repo = resolve_repo(ctx)
    client = get_client(ctx)

    try:
        pulls = client.list_pulls(repo, PullState(state), limit or config.review.list_limit)
        if mine:
            me = client.get_user_login().lower()
            pulls = [p for p in pulls if p.author.lower() == me]
    except (GitHubError, RepoDetectionError) as e:
        _fail(str(e))

    click.echo(f"Repo: {repo}")
    click.echo(f"State: {state}{' (mine only)' if mine else ''}")
    click.echo("-" * 40)
    if not pulls:
        click.echo("(no results)")
        return
    for pull in pulls:
        click.echo(PullFormatter.format_pull_line(pull))


@pr.command("view")
@click.argument("number", type=PR_NUMBER)
@click.pass_context
def pr_view(ctx: click.Context, number: int) -> None:
    """Show pull request details."""
    repo = resolve_repo(ctx)
    try:
        pull = get_client(ctx).get_pull(repo, number)
    except (GitHubError, RepoDetectionError) as e:
        _fail(str(e))
    click.echo(PullFormatter.format_pull_details(pull))


@pr.command("open")
@click.argument("number", type=PR_NUMBER)
@click.pass_context
def pr_open(ctx: click.Context, number: int) -> None:
    """Open a pull request in the browser."""
    repo = resolve_repo(ctx)
    try:
        owner, name = split_repo(repo)
    except RepoDetectionError as e:
        _fail(str(e))
    host = get_config(ctx).github.host
    url = f"https://{host}/{owner}/{name}/pull/{number}"
    click.echo(url)
    click.launch(url)


@pr.command("checkout")
@click.argument("number", type=PR_NUMBER)
@click.pass_context
def pr_checkout(ctx: click.Context, number: int) -> None:
    """Check out a pull request locally."""
    repo = resolve_repo(ctx)
    try:
        output = get_client(ctx).checkout(repo, number)
    except GitHubError as e:
        _fail(str(e))
    click.echo(output.strip() or "Checkout complete.")


@pr.command("create")
@click.option("--base", "-B", help="Base branch (default: the repository default branch)")
@click.option("--title", "-t", help="Pull request title")
@click.option("--body", "-b", help="Pull request body (opens an editor when omitted)")
@click.option("--draft/--no-draft", default=None, help="Create as draft")
@click.pass_context
def pr_create(
    ctx: click.Context,
    base: str | None,
    title: str | None,
    body: str | None,
    draft: bool | None,
) -> None:
    """Push the current branch and open a pull request for it."""
    repo = resolve_repo(ctx)
    client = get_client(ctx)

    head = current_branch()
    if not head:
        _fail("Not in a git repository or cannot detect the current branch.")

    if not base:
        default_base = "main"
        try:
            default_base = client.run(
                ["repo", "view", repo, "--json", "defaultBranchRef", "-q", ".defaultBranchRef.name"],
                context="gh repo view",
            ).strip() or default_base
        except GitHubError as e:
            logger.debug(f"Could not read default branch, using {default_base}: {e}")
        base = click.prompt("Base branch", default=default_base)
    if not title:
        title = click.prompt("Title")
    if draft is None:
        draft = click.confirm("Create as draft?", default=False)
    if body is None:
        body = click.edit("") or ""

    try:
        click.echo("Pushing to origin...")
        push_current_branch()
    except (GitCommandError, RepoDetectionError) as e:
        _fail(f"git push failed: {e}")

    try:
        url = client.create_pull(repo, title=title.strip(), head=head, base=base, body=body, draft=draft)
    except GitHubError as e:
        logger.warning(f"REST create failed, falling back to gh pr create: {e}")
        click.echo("(REST call failed, retrying with `gh pr create`...)")
        try:
            url = client.create_pull_with_cli(repo, title=title.strip(), head=head, base=base, body=body, draft=draft)
        except GitHubError as e2:
            _fail(str(e2))
    click.echo(f"Pull request created:\n{url}")


@pr.command("merge")
@click.argument("number", type=PR_NUMBER)
@click.option(
    "--method",
    "-m",
    type=click.Choice([m.value for m in MergeMethod]),
    default=None,
    help="Merge method (default from config)",
)
@click.option("--delete-branch", "-d", is_flag=True, help="Delete the head branch after merging")
@click.pass_context
def pr_merge(ctx: click.Context, number: int, method: str | None, delete_branch: bool) -> None:
    """Merge a pull request."""
    config = get_config(ctx)
    repo = resolve_repo(ctx)
    merge_method = MergeMethod(method or config.review.default_merge_method)

    try:
        merged, message = get_client(ctx).merge_pull(repo, number, merge_method)
        if not merged:
            _fail(f"Could not merge: {message}")
        lines = [f"Merged: {message}"]
        if delete_branch:
            lines.append(_report_branch_deletion(ctx, repo, number))
    except (GitHubError, RepoDetectionError) as e:
        _fail(str(e))

    click.echo("\n".join(lines))


@pr.command("close")
@click.argument("number", type=PR_NUMBER)
@click.option("--comment", "comment_body", help="Comment to post before closing")
@click.option("--delete-branch", "-d", is_flag=True, help="Delete the head branch if possible")
@click.pass_context
def pr_close(ctx: click.Context, number: int, comment_body: str | None, delete_branch: bool) -> None:
    """Close a pull request, optionally commenting and deleting its branch."""
    repo = resolve_repo(ctx)
    client = get_client(ctx)

    try:
        if comment_body and comment_body.strip():
            client.add_issue_comment(repo, number, comment_body)
        client.close_pull(repo, number)
        lines = ["Pull request closed."]
        if delete_branch:
            lines.append(_report_branch_deletion(ctx, repo, number))
    except (GitHubError, RepoDetectionError) as e:
        _fail(str(e))

    click.echo("\n".join(lines))


@pr.command("comments")
@click.argument("number", type=PR_NUMBER)
@click.pass_context
def pr_comments(ctx: click.Context, number: int) -> None:
    """Show conversation and inline review comments."""
    repo = resolve_repo(ctx)
    client = get_client(ctx)
    try:
        issue = client.list_issue_comments(repo, number)
        review = client.list_review_comments(repo, number)
    except (GitHubError, RepoDetectionError) as e:
        _fail(str(e))
    click.echo(PullFormatter.format_comments(repo, number, issue, review))


@pr.command("comment")
@click.argument("number", type=PR_NUMBER)
@click.option("--body", "-b", help="Comment text (opens an editor when omitted)")
@click.pass_context
def pr_comment(ctx: click.Context, number: int, body: str | None) -> None:
    """Add a conversation comment to a pull request."""
    repo = resolve_repo(ctx)
    if body is None:
        body = click.edit("")
        if body is None:
            click.echo("Cancelled.")
            return
    if not body.strip():
        _fail("Empty comment.")

    try:
        url = get_client(ctx).add_issue_comment(repo, number, body)
    except (GitHubError, RepoDetectionError) as e:
        _fail(str(e))
    click.echo(f"Comment added:\n{url}")
