"""Mixins for the TUI application."""

from jsonkit.tui.mixins.vim_navigation import VimNavigationMixin

__all__ = [
    "VimNavigationMixin",
]
