"""
Diff View widget for displaying rendered diff lines.

Each DiffLine becomes one DiffLineDisplay row carrying a CSS class for its
classification, so highlighting is driven entirely by the stylesheet:

    - diff-added: line only exists in the modified document
    - diff-removed: line only exists in the original document
    - diff-modified: value changed (shown as old -> new)
    - diff-unchanged: identical on both sides, including structural lines
"""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual.containers import VerticalScroll
from textual.widgets import Static

from jsonkit.diff import DiffLine, DiffType
from jsonkit.diff.renderer import LINE_MARKERS


# Text style per diff type
DIFF_STYLES: dict[DiffType, str] = {
    DiffType.ADDED: "green",
    DiffType.REMOVED: "red",
    DiffType.MODIFIED: "yellow",
    DiffType.UNCHANGED: "",
}


class DiffLineDisplay(Static):
    """A single rendered diff line."""

    DEFAULT_CSS = """
    DiffLineDisplay {
        padding: 0 1;
        height: auto;
    }
    """

    def __init__(self, line: DiffLine, **kwargs: Any) -> None:
        """Initialize the line display.

        Args:
            line: The diff line to display.
            **kwargs: Additional arguments passed to Static.
        """
        super().__init__(self.compose_content(line), **kwargs)
        self.line = line
        self.add_class(f"diff-{line.type.value}")
        if line.is_structural:
            self.add_class("diff-structural")

    @staticmethod
    def compose_content(line: DiffLine) -> Text:
        """Compose the rich text for a line: marker then content."""
        style = DIFF_STYLES[line.type]
        text = Text()
        text.append(f"{LINE_MARKERS[line.type]} ", style=f"bold {style}".strip())
        text.append(line.content, style=style)
        return text


class DiffView(VerticalScroll):
    """Scrollable document of diff lines.

    Attributes:
        changes_only: Whether unchanged lines are hidden.
    """

    DEFAULT_CSS = """
    DiffView {
        height: 1fr;
    }
    """

    def __init__(
        self,
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.changes_only: bool = False
        self._lines: list[DiffLine] = []

    def load_lines(self, lines: list[DiffLine]) -> None:
        """Replace the displayed lines.

        Args:
            lines: Lines from render_document() in document order.
        """
        self._lines = list(lines)
        self._refresh_lines()

    def set_changes_only(self, changes_only: bool) -> None:
        """Show only added, removed and modified lines, or everything."""
        self.changes_only = changes_only
        self._refresh_lines()

    @property
    def visible_lines(self) -> list[DiffLine]:
        if not self.changes_only:
            return list(self._lines)
        return [line for line in self._lines if line.type is not DiffType.UNCHANGED]

    def _refresh_lines(self) -> None:
        self.remove_children()
        self.mount_all(DiffLineDisplay(line) for line in self.visible_lines)
        self.scroll_home(animate=False)
