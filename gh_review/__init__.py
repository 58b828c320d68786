"""GH Review - terminal pull-request review for GitHub."""

__version__ = "0.1.0"

from .diff import (
    AnnotatedRow,
    DiffAnnotation,
    Hunk,
    LineSelector,
    annotate_diff,
    check_line_selector,
    context_around,
    extract_file_diff,
    parse_hunks,
    parse_line_selector,
    search_annotated,
)
from .gh import GitHubClient, GitHubError
from .session import InlineReviewSession, ReviewSessionError


__all__ = [
    "__version__",
    # Diff core
    "AnnotatedRow",
    "DiffAnnotation",
    "Hunk",
    "LineSelector",
    "annotate_diff",
    "check_line_selector",
    "context_around",
    "extract_file_diff",
    "parse_hunks",
    "parse_line_selector",
    "search_annotated",
    # GitHub
    "GitHubClient",
    "GitHubError",
    # Review flow
    "InlineReviewSession",
    "ReviewSessionError",
]
