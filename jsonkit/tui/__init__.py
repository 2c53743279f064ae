"""
TUI JSON Diff Viewer.

A Textual-based terminal UI for inspecting the structural diff of two
JSON documents.

Usage:
    jsonkit-tui original.json modified.json

Components:
    - JsonDiffApp: Main application class
    - DiffScreen: Document and change-list views of a comparison
    - HistoryScreen: Stored inputs for one side
    - DiffView: Highlighted diff document widget
"""
