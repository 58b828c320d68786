"""Offline diff commands for GH Review CLI.

These read a unified diff from a file (or stdin with `-`) and run the diff
core over it without talking to GitHub.
"""

import logging
import sys
from typing import TextIO

import click

from ..diff import (
    annotate_diff,
    check_line_selector,
    context_around,
    extract_file_diff,
    parse_hunks,
    search_annotated,
    split_diff_lines,
)
from ..diff.selector import SelectorStatus
from . import get_config, main


logger = logging.getLogger(__name__)


def _read_lines(diff_file: TextIO, path: str | None = None) -> list[str]:
    text = diff_file.read()
    if path:
        lines = extract_file_diff(text, path)
        if not lines:
            click.echo(f"Error: {path} not found in diff (or binary file with no patch)", err=True)
            sys.exit(1)
        return lines
    return split_diff_lines(text)


def _check_hunk(lines: list[str], hunk: int) -> None:
    count = len(parse_hunks(lines))
    if hunk < 0 or hunk > count:
        click.echo(f"Error: Hunk {hunk} out of range (diff has {count} hunks, 0 for all)", err=True)
        sys.exit(1)


diff_file_argument = click.argument("diff_file", type=click.File("r"), default="-")
path_option = click.option("--path", "-p", help="Only the section of this file in a multi-file diff")
hunk_option = click.option("--hunk", "-H", type=int, default=0, help="Hunk index, 0 for all (default)")


@main.group("diff")
def diff_group():
    """Inspect a unified diff offline (file or stdin)."""
    pass


@diff_group.command("hunks")
@diff_file_argument
@path_option
def diff_hunks(diff_file: TextIO, path: str | None) -> None:
    """List the hunks of a diff with their line ranges."""
    hunks = parse_hunks(_read_lines(diff_file, path))
    if not hunks:
        click.echo("No hunks (@@) detected. Binary file?")
        sys.exit(1)
    for hunk in hunks:
        click.echo(hunk.describe())


@diff_group.command("annotate")
@diff_file_argument
@path_option
@hunk_option
@click.option("--check", "selector", help="Also check whether a line selector (R12, L8, 12) is commentable")
def diff_annotate(diff_file: TextIO, path: str | None, hunk: int, selector: str | None) -> None:
    """Print the diff with explicit LEFT/RIGHT line numbers."""
    lines = _read_lines(diff_file, path)
    _check_hunk(lines, hunk)
    annotation = annotate_diff(lines, hunk)
    click.echo("\n".join(annotation.lines))

    if selector is not None:
        check = check_line_selector(selector, annotation.index)
        if check.status is SelectorStatus.UNPARSEABLE:
            click.echo(f"\n{selector}: invalid format (use R123, L88 or 123)", err=True)
            sys.exit(2)
        if check.status is SelectorStatus.NOT_IN_DIFF:
            click.echo(f"\n{check.selector}: not a commentable line in this diff", err=True)
            sys.exit(1)
        click.echo(f"\n{check.selector}: commentable")


@diff_group.command("search")
@diff_file_argument
@click.argument("query")
@path_option
@hunk_option
@click.option("--limit", "-n", type=int, default=None, help="Maximum matches (default from config)")
@click.pass_context
def diff_search(
    ctx: click.Context,
    diff_file: TextIO,
    query: str,
    path: str | None,
    hunk: int,
    limit: int | None,
) -> None:
    """Search annotated rows (case-insensitive)."""
    config = get_config(ctx)
    lines = _read_lines(diff_file, path)
    _check_hunk(lines, hunk)
    annotation = annotate_diff(lines, hunk)
    matches = search_annotated(annotation.rows, query, limit if limit is not None else config.review.search_limit)
    if not matches:
        click.echo(f'(no matches for "{query}")')
        return
    for match in matches:
        click.echo(match.label())


@diff_group.command("context")
@diff_file_argument
@click.argument("row", type=click.IntRange(min=1))
@path_option
@hunk_option
@click.option(
    "--radius",
    "-r",
    type=click.IntRange(min=0),
    default=None,
    help="Rows on each side (default from config)",
)
@click.pass_context
def diff_context(
    ctx: click.Context,
    diff_file: TextIO,
    row: int,
    path: str | None,
    hunk: int,
    radius: int | None,
) -> None:
    """Show annotated rows around a 1-based row number."""
    config = get_config(ctx)
    lines = _read_lines(diff_file, path)
    _check_hunk(lines, hunk)
    annotation = annotate_diff(lines, hunk)
    window = context_around(annotation.rows, row, radius if radius is not None else config.review.context_radius)
    if not window:
        click.echo(f"Row {row} is past the end ({len(annotation.rows)} rows)", err=True)
        sys.exit(1)
    click.echo("\n".join(window))


@diff_group.command("extract")
@diff_file_argument
@click.argument("path")
def diff_extract(diff_file: TextIO, path: str) -> None:
    """Print the section of one file from a multi-file diff."""
    click.echo("\n".join(_read_lines(diff_file, path)))


@diff_group.command("view")
@diff_file_argument
@path_option
@hunk_option
@click.pass_context
def diff_view(ctx: click.Context, diff_file: TextIO, path: str | None, hunk: int) -> None:
    """Browse the annotated diff in a full-screen viewer."""
    from ..ui import DiffApp
    from ..ui.console import restore_console_logging, suppress_console_logging

    config = get_config(ctx)
    lines = _read_lines(diff_file, path)
    _check_hunk(lines, hunk)
    annotation = annotate_diff(lines, hunk)

    title = path or getattr(diff_file, "name", "diff")
    handlers = suppress_console_logging()
    try:
        DiffApp(annotation, title=title, search_limit=config.review.search_limit).run()
    finally:
        restore_console_logging(handlers)
