"""Isolating a single file's section from a multi-file diff."""

import re


_FILE_START_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")
_LINE_SPLIT_RE = re.compile(r"\r?\n")


def split_diff_lines(text: str) -> list[str]:
    """Split diff text on LF or CRLF line endings."""
    return _LINE_SPLIT_RE.split(text)


def _starts_target_file(line: str, path: str) -> bool:
    m = _FILE_START_RE.match(line)
    if not m:
        return False
    return path in (m.group(1), m.group(2))


def extract_file_diff(full_diff: str, path: str) -> list[str]:
    """Return the lines of `full_diff` that belong to `path`.

    A section starts at a `diff --git a/<p> b/<q>` line and is kept when
    either recorded path equals `path` exactly, so renames are found by
    their old or new name. The boundary line itself is included.

    Returns:
        The file's lines in original order, or an empty list when the file
        is not in the diff.
    """
    lines: list[str] = []
    in_file = False
    for line in split_diff_lines(full_diff):
        if line.startswith("diff --git "):
            in_file = _starts_target_file(line, path)
        if in_file:
            lines.append(line)
    return lines


def file_diff_from_patch(path: str, patch: str) -> list[str]:
    """Build a single-file diff from the `patch` field of the PR files API.

    The API returns only hunks, so the file markers are added in front.
    """
    return [
        f"diff --git a/{path} b/{path}",
        f"--- a/{path}",
        f"+++ b/{path}",
        *split_diff_lines(patch),
    ]
