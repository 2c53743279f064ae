"""Screens for the JSON Diff Viewer."""

from jsonkit.tui.views.diff_screen import DiffScreen
from jsonkit.tui.views.history_screen import HistoryScreen

__all__ = ["DiffScreen", "HistoryScreen"]
