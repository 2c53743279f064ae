"""
History Screen listing stored inputs for one editor.

Entries are shown most recent first. The selected entry can be removed,
or the whole list cleared.
"""

from __future__ import annotations

from datetime import datetime

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header

from jsonkit.history import HistoryStore
from jsonkit.tui.mixins import VimNavigationMixin


class HistoryScreen(VimNavigationMixin, Screen):
    """Screen that displays one editor's history in a DataTable."""

    CSS = """
    HistoryScreen {
        layout: vertical;
    }

    DataTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    BINDINGS = VimNavigationMixin.VIM_BINDINGS + [
        Binding("d", "remove_entry", "Remove"),
        Binding("C", "clear_history", "Clear All"),
        Binding("escape", "go_back", "Back", show=True),
        Binding("b", "go_back", "Back", show=False),
        Binding("q", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        editor_key: str,
        store: HistoryStore,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the HistoryScreen.

        Args:
            editor_key: Which editor's history to show.
            store: The history store to read and modify.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._editor_key = editor_key
        self._store = store

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()
        yield DataTable(id="history-table", cursor_type="row")
        yield Footer()

    def on_mount(self) -> None:
        """Populate the table when the screen is mounted."""
        self.title = f"History - {self._editor_key}"
        table = self.query_one("#history-table", DataTable)
        table.add_column("IDX", key="idx", width=5)
        table.add_column("WHEN", key="when", width=20)
        table.add_column("PREVIEW", key="preview")
        self._load_rows()
        table.focus()

    def _load_rows(self) -> None:
        table = self.query_one("#history-table", DataTable)
        table.clear()
        for idx, item in enumerate(self._store.list(self._editor_key)):
            when = datetime.fromtimestamp(item.timestamp / 1000).strftime("%Y-%m-%d %H:%M:%S")
            table.add_row(str(idx), when, Text(item.preview.replace("\n", " ")), key=str(idx))

    def action_remove_entry(self) -> None:
        """Remove the entry under the cursor."""
        table = self.query_one("#history-table", DataTable)
        if table.row_count == 0:
            return
        index = table.cursor_row
        try:
            self._store.remove(self._editor_key, index)
        except IndexError as e:
            self.notify(str(e), severity="error")
            return
        self._load_rows()
        self.notify(f"Removed entry {index}")

    def action_clear_history(self) -> None:
        """Remove every entry."""
        self._store.clear(self._editor_key)
        self._load_rows()
        self.notify("History cleared")

    def action_go_back(self) -> None:
        """Return to the previous screen."""
        self.app.pop_screen()

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()

    @property
    def editor_key(self) -> str:
        return self._editor_key
