"""Annotated diff viewer widget."""

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import RichLog, Static

from ...diff import AnnotatedRow, LineKind


_KIND_STYLES = {
    LineKind.HUNK_HEADER: "cyan dim",
    LineKind.FILE_MARKER: "bold",
    LineKind.ADDED: "green",
    LineKind.REMOVED: "red",
    LineKind.CONTEXT: "",
    LineKind.OTHER: "dim",
}


def style_for_row(row: AnnotatedRow) -> str:
    """Rich style for a row, based on its line kind."""
    return _KIND_STYLES.get(row.kind, "")


class DiffViewer(Container):
    """Displays annotated diff rows with LEFT/RIGHT numbers and coloring."""

    DEFAULT_CSS = """
    DiffViewer {
        height: 1fr;
        border: solid $primary;
        margin: 0 1;
    }

    DiffViewer #diff-title {
        height: 1;
        background: $primary;
        color: $text;
        text-style: bold;
        padding: 0 1;
    }

    DiffViewer RichLog {
        height: 1fr;
    }
    """

    def __init__(self, rows: list[AnnotatedRow], title: str = "Diff", **kwargs):
        super().__init__(**kwargs)
        self.rows = rows
        self.title_text = title
        self.highlighted: int | None = None  # 1-based row number

    def compose(self) -> ComposeResult:
        yield Static(self._title(), id="diff-title")
        yield RichLog(id="diff-output", wrap=False, markup=False)

    def on_mount(self) -> None:
        self.render_rows()

    def _title(self) -> str:
        if self.highlighted:
            return f"{self.title_text}  (row {self.highlighted}/{len(self.rows)})"
        return f"{self.title_text}  ({len(self.rows)} rows)"

    def render_rows(self) -> None:
        """Redraw all rows, reverse-highlighting the selected one."""
        log = self.query_one("#diff-output", RichLog)
        log.clear()
        self.query_one("#diff-title", Static).update(self._title())

        if not self.rows:
            log.write(Text("No rows to display", style="dim italic"))
            return

        for i, row in enumerate(self.rows, 1):
            styled = Text(row.render())
            if i == self.highlighted:
                styled.stylize("bold reverse")
            else:
                style = style_for_row(row)
                if style:
                    styled.stylize(style)
            log.write(styled)

        if self.highlighted is not None:
            # Defer scroll so RichLog has rendered all lines
            self.call_after_refresh(log.scroll_to, y=max(0, self.highlighted - 1), animate=False)

    def highlight(self, row_number: int | None) -> None:
        """Select a 1-based row (or None to clear) and scroll to it."""
        self.highlighted = row_number
        self.render_rows()
