"""Search and context windows over annotated diff rows."""

from collections.abc import Sequence
from dataclasses import dataclass

from .annotate import AnnotatedRow


DEFAULT_SEARCH_LIMIT = 50
DEFAULT_CONTEXT_RADIUS = 25


@dataclass(frozen=True)
class SearchMatch:
    row_number: int  # 1-based position in the annotated rows, not a diff line number
    text: str

    def label(self) -> str:
        return f"[{self.row_number}] {self.text}"


def _row_text(row: AnnotatedRow | str) -> str:
    return row if isinstance(row, str) else row.render()


def search_annotated(
    rows: Sequence[AnnotatedRow | str],
    query: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> list[SearchMatch]:
    """Case-insensitive substring search over rendered rows.

    Args:
        rows: Annotated rows, or their already rendered text.
        query: Text to look for.
        limit: Maximum number of matches returned.

    Returns:
        Matches in row order; empty when nothing matches.
    """
    needle = query.lower()
    matches: list[SearchMatch] = []
    if limit <= 0:
        return matches
    for i, row in enumerate(rows):
        text = _row_text(row)
        if needle in text.lower():
            matches.append(SearchMatch(i + 1, text))
            if len(matches) >= limit:
                break
    return matches


def context_around(
    rows: Sequence[AnnotatedRow | str],
    row_number: int,
    radius: int = DEFAULT_CONTEXT_RADIUS,
) -> list[str]:
    """Return the rows within `radius` of a 1-based row number.

    The window is clamped to the available rows, so it shrinks near either
    end. Each line is prefixed with its 1-based position.
    """
    idx = row_number - 1
    start = max(0, idx - radius)
    end = min(len(rows) - 1, idx + radius)
    return [f"[{i + 1:>5}] {_row_text(rows[i])}" for i in range(start, end + 1)]
