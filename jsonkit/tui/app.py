"""
Main Textual application for the JSON Diff Viewer.

This is the entry point for the TUI that compares two JSON documents and
shows the structural diff as an annotated document and a list of changes.
"""

import argparse
import logging
import os
import sys

from textual.app import App
from textual.binding import Binding

from jsonkit.diff import ComparisonInputError, DiffDepthError, DiffReport, compare_texts
from jsonkit.history import FileStorage, HistoryStore, get_history_dir
from jsonkit.tui.views.diff_screen import DiffScreen

logger = logging.getLogger(__name__)

# History editor keys for the two compared documents
ORIGINAL_EDITOR_KEY = "diff-original"
MODIFIED_EDITOR_KEY = "diff-modified"


class JsonDiffApp(App):
    """A Textual app for comparing two JSON documents."""

    TITLE = "JSON Diff Viewer"

    CSS = """
    Screen {
        background: $surface;
    }

    Header {
        dock: top;
        height: 3;
        background: $primary;
        color: $text;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-2;
    }

    DataTable > .datatable--header {
        background: $primary-darken-1;
        color: $text;
        text-style: bold;
    }

    DataTable > .datatable--cursor {
        background: $secondary;
        color: $text;
    }

    /* Diff highlighting */
    .diff-added {
        background: $success 20%;
    }

    .diff-removed {
        background: $error 20%;
    }

    .diff-modified {
        background: $warning 20%;
    }

    .diff-unchanged {
        /* Default styling, no change */
    }

    .diff-structural {
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        original_path: str,
        modified_path: str,
        history_store: HistoryStore | None = None,
    ):
        """Initialize the app with the two documents to compare.

        Args:
            original_path: Path to the original JSON file.
            modified_path: Path to the modified JSON file.
            history_store: Where the compared texts are recorded.
        """
        super().__init__()
        self._original_path = original_path
        self._modified_path = modified_path
        self.history_store = history_store
        self.report: DiffReport | None = None
        self.input_errors: dict[str, str] = {}

    def on_mount(self) -> None:
        """Compare the documents and push the diff screen."""
        original_name = os.path.basename(self._original_path)
        modified_name = os.path.basename(self._modified_path)
        self.title = f"JSON Diff - {original_name} ↔ {modified_name}"

        try:
            original_text = self._read(self._original_path)
            modified_text = self._read(self._modified_path)
        except (OSError, UnicodeDecodeError) as e:
            self.notify(f"Error loading file: {e}", severity="error")
            return

        if self.history_store is not None:
            self.history_store.add(ORIGINAL_EDITOR_KEY, original_text)
            self.history_store.add(MODIFIED_EDITOR_KEY, modified_text)

        try:
            self.report = compare_texts(original_text, modified_text)
        except ComparisonInputError as e:
            # Each side is reported on its own
            for side, error in e.errors.items():
                self.input_errors[side] = error.detail
                self.notify(f"Invalid JSON in {side}: {error.detail}", severity="error")
            return
        except DiffDepthError as e:
            self.notify(str(e), severity="error")
            return

        self.push_screen(DiffScreen(self.report, original_name, modified_name))

    @staticmethod
    def _read(path: str) -> str:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()


def main() -> None:
    """Parse arguments and run the application."""
    parser = argparse.ArgumentParser(
        description="Compare two JSON documents in a terminal UI."
    )
    parser.add_argument("original", help="Path to the original JSON file")
    parser.add_argument("modified", help="Path to the modified JSON file")
    parser.add_argument(
        "--history-dir",
        default=None,
        help="Directory for stored history (default: $JSONKIT_HISTORY_DIR or ~/.jsonkit/history)",
    )
    args = parser.parse_args()

    for label, path in (("Original", args.original), ("Modified", args.modified)):
        if not os.path.exists(path):
            print(f"Error: {label} file not found: {path}", file=sys.stderr)
            sys.exit(1)

        if not os.access(path, os.R_OK):
            print(f"Error: Permission denied: {path}", file=sys.stderr)
            sys.exit(1)

    store = HistoryStore(FileStorage(get_history_dir(args.history_dir)))
    app = JsonDiffApp(args.original, args.modified, history_store=store)
    app.run()


if __name__ == "__main__":
    main()
