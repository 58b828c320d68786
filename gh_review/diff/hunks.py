"""Hunk header parsing for unified diffs."""

from dataclasses import dataclass
import re


HUNK_RE = re.compile(r"^@@ -([0-9]+)(?:,([0-9]+))? \+([0-9]+)(?:,([0-9]+))? @@")


@dataclass(frozen=True)
class Hunk:
    """One `@@ -a,b +c,d @@` header and the line ranges it covers.

    Ranges are inclusive. A header like `@@ -0,0 +1,3 @@` (new file) gives
    an empty left range where `left_to < left_from`.
    """

    index: int  # 1-based ordinal among hunks, in text order
    left_from: int
    left_to: int
    right_from: int
    right_to: int
    header: str
    start_line: int  # 0-based position of the header in the input lines

    def describe(self) -> str:
        """Short label used when picking a hunk."""
        return (
            f"{self.index}) LEFT {self.left_from}..{self.left_to}  "
            f"RIGHT {self.right_from}..{self.right_to}  {self.header}"
        )


def parse_hunk_header(line: str) -> tuple[int, int, int, int] | None:
    """Parse a hunk header into (left_start, left_count, right_start, right_count).

    Omitted counts default to 1. Returns None if the line is not a header.
    """
    m = HUNK_RE.match(line)
    if not m:
        return None
    left_count = int(m.group(2)) if m.group(2) else 1
    right_count = int(m.group(4)) if m.group(4) else 1
    return int(m.group(1)), left_count, int(m.group(3)), right_count


def parse_hunks(lines: list[str]) -> list[Hunk]:
    """Locate every hunk header in a diff.

    Args:
        lines: Diff text split into lines.

    Returns:
        Hunks in header order with dense indices starting at 1. An empty
        list means no hunks were found (e.g. a binary file).
    """
    hunks: list[Hunk] = []
    for i, line in enumerate(lines):
        parsed = parse_hunk_header(line)
        if parsed is None:
            continue
        left_start, left_count, right_start, right_count = parsed
        hunks.append(
            Hunk(
                index=len(hunks) + 1,
                left_from=left_start,
                left_to=left_start + left_count - 1,
                right_from=right_start,
                right_to=right_start + right_count - 1,
                header=line,
                start_line=i,
            )
        )
    return hunks
