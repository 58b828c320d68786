"""Parsing of user-typed line selectors such as `R42`, `l8` or `99`."""

from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum
import re

from ..models import Side
from .annotate import LineKey


_RIGHT_RE = re.compile(r"^[Rr]([0-9]+)$")
_LEFT_RE = re.compile(r"^[Ll]([0-9]+)$")
_BARE_RE = re.compile(r"^[0-9]+$")

SELECTOR_HELP = "R123 / L88 / 123=RIGHT"


@dataclass(frozen=True)
class LineSelector:
    """A (side, line) pair typed by the user, not yet checked against a diff."""

    side: Side
    line: int

    def __str__(self) -> str:
        return f"{self.side.value[0]}{self.line}"


class SelectorStatus(str, Enum):
    OK = "ok"
    UNPARSEABLE = "unparseable"
    NOT_IN_DIFF = "not_in_diff"


@dataclass(frozen=True)
class SelectorCheck:
    """Outcome of checking a selector token against a membership index."""

    status: SelectorStatus
    selector: LineSelector | None = None

    @property
    def ok(self) -> bool:
        return self.status is SelectorStatus.OK


def parse_line_selector(text: str) -> LineSelector | None:
    """Parse a selector token.

    `R<n>`/`r<n>` select the RIGHT side, `L<n>`/`l<n>` the LEFT side and a
    bare number defaults to RIGHT. Returns None for anything else.
    """
    s = text.strip()
    m = _RIGHT_RE.match(s)
    if m:
        return LineSelector(Side.RIGHT, int(m.group(1)))
    m = _LEFT_RE.match(s)
    if m:
        return LineSelector(Side.LEFT, int(m.group(1)))
    if _BARE_RE.match(s):
        return LineSelector(Side.RIGHT, int(s))
    return None


def is_valid_line(index: Collection[LineKey], side: Side, line: int) -> bool:
    """Whether (side, line) was displayed with a number in the annotated diff."""
    return (side, line) in index


def check_line_selector(text: str, index: Collection[LineKey]) -> SelectorCheck:
    """Parse a selector and validate it against a membership index.

    Keeps "does not parse" and "parses but is not in the diff" apart so the
    caller can answer with a format hint or a range hint.
    """
    selector = parse_line_selector(text)
    if selector is None:
        return SelectorCheck(SelectorStatus.UNPARSEABLE)
    if not is_valid_line(index, selector.side, selector.line):
        return SelectorCheck(SelectorStatus.NOT_IN_DIFF, selector)
    return SelectorCheck(SelectorStatus.OK, selector)
