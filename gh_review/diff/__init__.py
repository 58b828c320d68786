"""Unified diff parsing, annotation and navigation."""

from .annotate import AnnotatedRow, DiffAnnotation, LineKind, annotate_diff, classify_line
from .extract import extract_file_diff, file_diff_from_patch, split_diff_lines
from .hunks import Hunk, parse_hunk_header, parse_hunks
from .navigator import SearchMatch, context_around, search_annotated
from .selector import (
    LineSelector,
    SelectorCheck,
    SelectorStatus,
    check_line_selector,
    is_valid_line,
    parse_line_selector,
)


__all__ = [
    # Hunks
    "Hunk",
    "parse_hunk_header",
    "parse_hunks",
    # Annotation
    "AnnotatedRow",
    "DiffAnnotation",
    "LineKind",
    "annotate_diff",
    "classify_line",
    # Selectors
    "LineSelector",
    "SelectorCheck",
    "SelectorStatus",
    "check_line_selector",
    "is_valid_line",
    "parse_line_selector",
    # Navigation
    "SearchMatch",
    "context_around",
    "search_annotated",
    # Extraction
    "extract_file_diff",
    "file_diff_from_patch",
    "split_diff_lines",
]
