"""Line-number annotation of unified diffs.

Walks a diff, keeps left/right line counters in sync with hunk headers and
emits one display row per retained line. Alongside the rows it collects the
set of (side, line) pairs that were actually shown with a number; that set
is what decides whether an inline comment can be anchored to a line.
"""

from dataclasses import dataclass, field
from enum import Enum
import logging

from ..models import Side
from .hunks import parse_hunk_header


logger = logging.getLogger(__name__)

FILE_MARKER_PREFIXES = ("diff --git ", "index ", "--- ", "+++ ")
NUMBER_WIDTH = 6

LineKey = tuple[Side, int]


class LineKind(str, Enum):
    """Kind of a diff line, decided once from its prefix."""

    HUNK_HEADER = "hunk_header"
    FILE_MARKER = "file_marker"
    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"
    OTHER = "other"


def classify_line(line: str, in_hunk_body: bool = False) -> LineKind:
    """Classify a single diff line.

    Args:
        line: The diff line.
        in_hunk_body: True while the current hunk header's line counts are
            not used up. Content is then classified by its first character
            only, so a removed "-- comment" or an added "++ x" line is not
            mistaken for a `---`/`+++` file marker.
    """
    if parse_hunk_header(line) is not None:
        return LineKind.HUNK_HEADER
    if not in_hunk_body and line.startswith(FILE_MARKER_PREFIXES):
        return LineKind.FILE_MARKER
    prefix = line[:1]
    if prefix == " ":
        return LineKind.CONTEXT
    if prefix == "+":
        return LineKind.ADDED
    if prefix == "-":
        return LineKind.REMOVED
    return LineKind.OTHER


@dataclass(frozen=True)
class AnnotatedRow:
    """One rendered line of an annotated diff."""

    left: int | None
    right: int | None
    text: str
    kind: LineKind = LineKind.OTHER

    @property
    def left_field(self) -> str:
        return "" if self.left is None else str(self.left)

    @property
    def right_field(self) -> str:
        return "" if self.right is None else str(self.right)

    def render(self) -> str:
        return f"L{self.left_field:<{NUMBER_WIDTH}} R{self.right_field:<{NUMBER_WIDTH}} | {self.text}"

    def __str__(self) -> str:
        return self.render()


@dataclass
class DiffAnnotation:
    """Rows produced by one annotation pass and the commentable-line index."""

    rows: list[AnnotatedRow] = field(default_factory=list)
    index: set[LineKey] = field(default_factory=set)

    @property
    def lines(self) -> list[str]:
        """Rendered text of every row, in order."""
        return [row.render() for row in self.rows]

    @property
    def content_row_count(self) -> int:
        return sum(1 for row in self.rows if row.kind in _CONTENT_KINDS)

    def has_line(self, side: Side, line: int) -> bool:
        return (side, line) in self.index


_CONTENT_KINDS = (LineKind.CONTEXT, LineKind.ADDED, LineKind.REMOVED)


def annotate_diff(lines: list[str], hunk: int = 0) -> DiffAnnotation:
    """Annotate diff lines with explicit left/right line numbers.

    Args:
        lines: Diff text split into lines.
        hunk: 0 to annotate every hunk, or a 1-based hunk index to keep
            only that hunk.

    Returns:
        DiffAnnotation with the display rows and the set of (side, line)
        pairs that carry a real number.
    """
    result = DiffAnnotation()
    current_hunk = 0
    active = False
    left = 0
    right = 0
    # Lines still owed to the current hunk on each side, from its header counts
    left_remaining = 0
    right_remaining = 0

    for line in lines:
        kind = classify_line(line, in_hunk_body=left_remaining > 0 or right_remaining > 0)

        if kind is LineKind.HUNK_HEADER:
            current_hunk += 1
            active = hunk == 0 or current_hunk == hunk
            left, left_remaining, right, right_remaining = parse_hunk_header(line)
            if active:
                result.rows.append(AnnotatedRow(None, None, line, kind))
            continue

        if kind is LineKind.CONTEXT:
            left_remaining -= 1
            right_remaining -= 1
        elif kind is LineKind.ADDED:
            right_remaining -= 1
        elif kind is LineKind.REMOVED:
            left_remaining -= 1

        if not active:
            continue

        if kind is LineKind.CONTEXT:
            result.rows.append(AnnotatedRow(left, right, line, kind))
            result.index.add((Side.LEFT, left))
            result.index.add((Side.RIGHT, right))
            left += 1
            right += 1
        elif kind is LineKind.ADDED:
            result.rows.append(AnnotatedRow(None, right, line, kind))
            result.index.add((Side.RIGHT, right))
            right += 1
        elif kind is LineKind.REMOVED:
            result.rows.append(AnnotatedRow(left, None, line, kind))
            result.index.add((Side.LEFT, left))
            left += 1
        else:
            # File markers and stray lines ("\ No newline at end of file")
            result.rows.append(AnnotatedRow(None, None, line, kind))

    logger.debug(
        f"Annotated {len(lines)} diff lines into {len(result.rows)} rows "
        f"({len(result.index)} commentable lines, hunk filter {hunk})"
    )
    return result
