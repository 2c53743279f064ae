"""Modal screen for displaying one change in full."""

import json
from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer, Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from jsonkit.diff import MISSING, DiffRecord


class FieldDetailModal(ModalScreen[None]):
    """A modal screen that displays the old and new values of a change."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("enter", "close", "Close"),
        Binding("q", "quit", "Quit App"),
    ]

    CSS = """
    FieldDetailModal {
        align: center middle;
    }

    FieldDetailModal > Vertical {
        width: 80%;
        height: 80%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    FieldDetailModal .modal-header {
        dock: top;
        height: auto;
        padding: 1 2;
        background: $primary;
        color: $text;
        text-align: center;
        text-style: bold;
    }

    FieldDetailModal .value-label {
        height: auto;
        padding: 0 2;
        color: $secondary;
        text-style: bold;
    }

    FieldDetailModal .content-container {
        height: 1fr;
        padding: 1 2;
        background: $surface-darken-2;
    }

    FieldDetailModal .close-hint {
        dock: bottom;
        height: auto;
        padding: 1 2;
        text-align: center;
        color: $text-muted;
    }
    """

    def __init__(
        self,
        record: DiffRecord,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the field detail modal.

        Args:
            record: The change to display.
            name: Optional name for the widget.
            id: Optional ID for the widget.
            classes: Optional CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.record = record

    @staticmethod
    def _format_value(value: Any) -> str:
        """Pretty-print a value, or mark it absent."""
        if value is MISSING:
            return "(absent)"
        return json.dumps(value, indent=2, ensure_ascii=False)

    def compose(self) -> ComposeResult:
        """Compose the modal content."""
        with Vertical():
            yield Label(
                f"{self.record.type.value.upper()}: {self.record.path}",
                classes="modal-header",
                markup=False,
            )
            yield Label("Original", classes="value-label")
            with ScrollableContainer(classes="content-container"):
                yield Static(self._format_value(self.record.old_value), id="old-value", markup=False)
            yield Label("Modified", classes="value-label")
            with ScrollableContainer(classes="content-container"):
                yield Static(self._format_value(self.record.new_value), id="new-value", markup=False)
            yield Label("Press Esc or Enter to close", classes="close-hint")

    def action_close(self) -> None:
        """Close the modal."""
        self.dismiss(None)

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()
