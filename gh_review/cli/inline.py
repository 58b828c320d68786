"""Guided inline comment command for GH Review CLI."""

import logging
import sys

import click

from ..diff import SelectorStatus
from ..diff.selector import SELECTOR_HELP
from ..gh import GitHubError, RepoDetectionError
from ..session import InlineReviewSession, ReviewSessionError
from . import get_client, get_config, resolve_repo
from .pr import pr
from .utils import PR_NUMBER


logger = logging.getLogger(__name__)

SEARCH_FALLBACK_ROWS = 200


def _choose_file(session: InlineReviewSession, max_choices: int) -> str:
    files = session.files[:max_choices]
    click.echo("Changed files:")
    for i, f in enumerate(files, 1):
        click.echo(f"  {i:>3}) {f.filename}")
    choice = click.prompt("Select file", type=click.IntRange(1, len(files)))
    return files[choice - 1].filename


def _choose_hunk(session: InlineReviewSession) -> int:
    click.echo("\nHunks:")
    click.echo("    0) All hunks")
    for hunk in session.hunks:
        click.echo(f"  {hunk.describe()}")
    return click.prompt("Select hunk", type=click.IntRange(0, len(session.hunks)), default=0)


def _browse(session: InlineReviewSession, search_limit: int, context_radius: int) -> None:
    """View/search loop until the user is ready to pick a line."""
    lines = session.annotation.lines
    while True:
        action = click.prompt(
            "\n[v]iew diff, [s]earch, [g]o pick a line",
            type=click.Choice(["v", "s", "g"]),
            default="g",
            show_choices=False,
        )
        if action == "g":
            return
        if action == "v":
            click.echo("\n".join(lines))
            continue

        query = click.prompt("Text to search", default="", show_default=False)
        if not query:
            continue
        matches = session.search(query, search_limit)
        if not matches:
            click.echo(f'(no matches for "{query}")\n')
            click.echo("\n".join(lines[:SEARCH_FALLBACK_ROWS]))
            continue
        for match in matches:
            click.echo(match.label())
        valid_rows = {m.row_number for m in matches}
        row = click.prompt("Row to show in context (0 to skip)", type=int, default=0)
        if row in valid_rows:
            click.echo("\n".join(session.context(row, context_radius)))


def _choose_line(session: InlineReviewSession, attempts: int):
    for _ in range(attempts):
        text = click.prompt(f"Line ({SELECTOR_HELP})", default="", show_default=False)
        if not text:
            return None
        check = session.check_selector(text)
        if check.status is SelectorStatus.UNPARSEABLE:
            click.echo("Invalid format. Use R123, L88 or 123.")
            continue
        if check.status is SelectorStatus.NOT_IN_DIFF:
            click.echo(f"{check.selector} is not a valid line in this diff. Choose another.")
            continue
        return check.selector
    raise ReviewSessionError("No valid line selected.")


@pr.command("inline")
@click.argument("number", type=PR_NUMBER)
@click.option("--path", "-p", help="File to comment on (prompted when omitted)")
@click.option("--hunk", type=int, default=None, help="Hunk to show, 0 for all (prompted when omitted)")
@click.option("--line", "-l", "line_text", help="Line selector such as R12 or L8 (prompted when omitted)")
@click.option("--body", "-b", help="Comment text (opens an editor when omitted)")
@click.pass_context
def pr_inline(
    ctx: click.Context,
    number: int,
    path: str | None,
    hunk: int | None,
    line_text: str | None,
    body: str | None,
) -> None:
    """Add an inline review comment, choosing the line from an annotated diff.

    The diff of the chosen file is shown with explicit LEFT/RIGHT line
    numbers. Pick a line with R<n> (new file), L<n> (old file) or a bare
    number (new file); only lines shown in the diff are accepted.

    Example:

    \b
        gh-review pr inline 42
        gh-review pr inline 42 -p src/app.py --hunk 0 -l R17 -b "Typo here"
    """
    config = get_config(ctx)
    repo = resolve_repo(ctx)
    session = InlineReviewSession(get_client(ctx), repo, number)

    try:
        session.load_pull()
        session.load_files()

        if path is None:
            path = _choose_file(session, config.review.max_file_choices)
        session.select_file(path)

        if hunk is None:
            hunk = _choose_hunk(session)
        annotation = session.annotate(hunk)
        click.echo("\n".join(annotation.lines))

        if line_text is None:
            _browse(session, config.review.search_limit, config.review.context_radius)
            selector = _choose_line(session, config.review.max_line_attempts)
            if selector is None:
                click.echo("Cancelled.")
                return
        else:
            check = session.check_selector(line_text)
            if check.status is SelectorStatus.UNPARSEABLE:
                raise ReviewSessionError(f"Invalid line selector: {line_text} (use {SELECTOR_HELP})")
            if check.status is SelectorStatus.NOT_IN_DIFF:
                raise ReviewSessionError(f"{check.selector} is not a valid line in this diff.")
            selector = check.selector

        if body is None:
            body = click.edit(f"\n# Inline comment on {path}:{selector}\n")
            if body is None:
                click.echo("Cancelled.")
                return
            body = "\n".join(ln for ln in body.splitlines() if not ln.startswith("# Inline comment on "))

        click.echo("Posting inline comment...")
        url = session.post_comment(body, selector)
    except (GitHubError, RepoDetectionError, ReviewSessionError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Inline comment added:\n{url}")
