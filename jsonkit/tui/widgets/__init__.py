"""TUI widgets for the JSON diff viewer."""

from jsonkit.tui.widgets.diff_view import DiffLineDisplay, DiffView
from jsonkit.tui.widgets.field_detail_modal import FieldDetailModal

__all__ = [
    # Diff document
    "DiffView",
    "DiffLineDisplay",
    # Change detail modal
    "FieldDetailModal",
]
