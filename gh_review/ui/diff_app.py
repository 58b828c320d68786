"""Full-screen Textual application for browsing an annotated diff."""

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input

from ..diff import DiffAnnotation, SearchMatch, search_annotated
from .widgets import DiffViewer


class DiffApp(App):
    """Annotated diff browser with case-insensitive search."""

    TITLE = "GH Review Diff"

    CSS = """
    Screen {
        background: $surface;
    }

    #search {
        display: none;
        margin: 0 1;
    }

    #search.visible {
        display: block;
    }
    """

    BINDINGS = [
        Binding("slash", "start_search", "Search"),
        Binding("n", "next_match", "Next"),
        Binding("p", "previous_match", "Previous"),
        Binding("escape", "cancel_search", "Cancel", show=False),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, annotation: DiffAnnotation, title: str = "Diff", search_limit: int = 50):
        """Initialize the viewer.

        Args:
            annotation: Result of annotate_diff to display.
            title: Title shown above the rows.
            search_limit: Maximum matches kept per search.
        """
        super().__init__()
        self.annotation = annotation
        self.diff_title = title
        self.search_limit = search_limit
        self.matches: list[SearchMatch] = []
        self.match_pos = 0

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="Search annotated rows...", id="search")
        yield DiffViewer(self.annotation.rows, title=self.diff_title, id="viewer")
        yield Footer()

    def action_start_search(self) -> None:
        search = self.query_one("#search", Input)
        search.add_class("visible")
        search.focus()

    def action_cancel_search(self) -> None:
        search = self.query_one("#search", Input)
        search.remove_class("visible")
        self.query_one("#viewer", DiffViewer).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        query = event.value.strip()
        self.action_cancel_search()
        if not query:
            return
        self.matches = search_annotated(self.annotation.rows, query, self.search_limit)
        self.match_pos = 0
        if not self.matches:
            self.notify(f'No matches for "{query}"', severity="warning")
            self.query_one("#viewer", DiffViewer).highlight(None)
            return
        self.notify(f"{len(self.matches)} matches")
        self._show_match()

    def _show_match(self) -> None:
        self.query_one("#viewer", DiffViewer).highlight(self.matches[self.match_pos].row_number)

    def action_next_match(self) -> None:
        if not self.matches:
            return
        self.match_pos = (self.match_pos + 1) % len(self.matches)
        self._show_match()

    def action_previous_match(self) -> None:
        if not self.matches:
            return
        self.match_pos = (self.match_pos - 1) % len(self.matches)
        self._show_match()
