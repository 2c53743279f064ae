"""
Diff Screen for inspecting a structural JSON comparison.

Shows the rendered document with per-line highlighting in one tab and the
flat list of changes in another. Selecting a change opens its old and new
values in a modal.
"""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static, TabbedContent, TabPane

from jsonkit.diff import MISSING, DiffRecord, DiffReport, print_value
from jsonkit.tui.mixins import VimNavigationMixin
from jsonkit.tui.views.history_screen import HistoryScreen
from jsonkit.tui.widgets import DiffView, FieldDetailModal

# Maximum characters shown for a value in the changes table
MAX_CELL_LENGTH = 60


def _cell(value: object) -> str:
    if value is MISSING:
        return ""
    text = print_value(value)
    if len(text) > MAX_CELL_LENGTH:
        return text[:MAX_CELL_LENGTH - 3] + "..."
    return text


class DiffScreen(VimNavigationMixin, Screen):
    """Document and change-list views of one DiffReport."""

    CSS = """
    DiffScreen {
        layout: vertical;
    }

    #summary-bar {
        dock: top;
        height: 1;
        padding: 0 1;
        background: $primary-darken-1;
        color: $text;
    }

    #changes-table {
        height: 1fr;
    }
    """

    BINDINGS = VimNavigationMixin.VIM_BINDINGS + [
        Binding("f", "toggle_changes_only", "Changes Only"),
        Binding("m", "show_change_detail", "View Change"),
        Binding("o", "show_history('diff-original')", "Original History"),
        Binding("n", "show_history('diff-modified')", "Modified History"),
        Binding("escape", "go_back", "Back", show=False),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        report: DiffReport,
        original_label: str = "original",
        modified_label: str = "modified",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the DiffScreen.

        Args:
            report: The comparison to display.
            original_label: Name shown for the original document.
            modified_label: Name shown for the modified document.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._report = report
        self._original_label = original_label
        self._modified_label = modified_label
        self._changes_only: bool = False

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()
        yield Static(self._summary_text(), id="summary-bar", markup=False)
        with TabbedContent(initial="document-tab"):
            with TabPane("Document", id="document-tab"):
                yield DiffView(id="diff-view")
            with TabPane("Changes", id="changes-tab"):
                yield DataTable(id="changes-table", cursor_type="row")
        yield Footer()

    def on_mount(self) -> None:
        """Populate both views when the screen is mounted."""
        self.title = f"{self._original_label} ↔ {self._modified_label}"

        self.query_one("#diff-view", DiffView).load_lines(self._report.lines)

        table = self.query_one("#changes-table", DataTable)
        table.add_column("TYPE", key="type", width=10)
        table.add_column("PATH", key="path")
        table.add_column("OLD", key="old")
        table.add_column("NEW", key="new")

        if not self._report.records:
            table.add_row("--", "No differences", "", "")
        for idx, record in enumerate(self._report.records):
            table.add_row(
                record.type.value,
                Text(record.path),
                Text(_cell(record.old_value)),
                Text(_cell(record.new_value)),
                key=str(idx),
            )

        self.query_one("#diff-view", DiffView).focus()

    def _summary_text(self) -> str:
        summary = self._report.summary
        return (
            f"+{summary.get('added', 0)} added  "
            f"-{summary.get('removed', 0)} removed  "
            f"~{summary.get('modified', 0)} modified  "
            f"{summary.get('unchanged', 0)} unchanged"
        )

    def _selected_record(self) -> DiffRecord | None:
        """Return the record under the changes table cursor."""
        if not self._report.records:
            return None
        table = self.query_one("#changes-table", DataTable)
        row = table.cursor_row
        if 0 <= row < len(self._report.records):
            return self._report.records[row]
        return None

    def action_toggle_changes_only(self) -> None:
        """Toggle hiding unchanged lines in the document view."""
        self._changes_only = not self._changes_only
        self.query_one("#diff-view", DiffView).set_changes_only(self._changes_only)

        status = "enabled" if self._changes_only else "disabled"
        self.notify(f"Changes only {status}")

    def action_show_change_detail(self) -> None:
        """Open the selected change in a modal."""
        record = self._selected_record()
        if record is None:
            self.notify("No change selected", severity="warning")
            return
        self.app.push_screen(FieldDetailModal(record))

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Open the change detail when Enter is pressed on a row."""
        if event.data_table.id == "changes-table":
            self.action_show_change_detail()

    def action_show_history(self, editor_key: str) -> None:
        """Show the stored history for one side."""
        store = getattr(self.app, "history_store", None)
        if store is None:
            self.notify("History is not available", severity="warning")
            return
        self.app.push_screen(HistoryScreen(editor_key, store))

    def action_go_back(self) -> None:
        """Close this screen, unless it is the last one."""
        if len(self.app.screen_stack) > 2:
            self.app.pop_screen()

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()

    @property
    def report(self) -> DiffReport:
        return self._report

    @property
    def changes_only(self) -> bool:
        return self._changes_only
