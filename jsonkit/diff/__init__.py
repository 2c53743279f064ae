"""
Structural JSON diff engine.

Two components share one set of comparison rules:

    from jsonkit.diff import compare_json, render_diff_lines

    # Flat, path-addressed list of changes
    for record in compare_json(original, modified):
        print(record.type.value, record.path)

    # Pretty-printed document annotated per line
    for line in render_diff_lines(original, modified):
        print(line.type.value, line.content)

Both take already-parsed values; use ``compare_texts`` to start from text.
"""

from jsonkit.diff.flat import DiffRecord, compare_json, invert, summarize
from jsonkit.diff.renderer import (
    INDENT_WIDTH,
    DiffLine,
    format_lines,
    render_diff_lines,
    render_document,
)
from jsonkit.diff.report import ComparisonInputError, DiffReport, compare_texts, compare_values
from jsonkit.diff.values import (
    MAX_DIFF_DEPTH,
    MISSING,
    DiffDepthError,
    DiffType,
    NodeKind,
    classify_pair,
    json_type,
    print_value,
)

__all__ = [
    # Shared value model
    "MISSING",
    "MAX_DIFF_DEPTH",
    "DiffType",
    "NodeKind",
    "DiffDepthError",
    "classify_pair",
    "json_type",
    "print_value",
    # Flat differ
    "DiffRecord",
    "compare_json",
    "invert",
    "summarize",
    # Line renderer
    "INDENT_WIDTH",
    "DiffLine",
    "format_lines",
    "render_diff_lines",
    "render_document",
    # Text comparison
    "ComparisonInputError",
    "DiffReport",
    "compare_texts",
    "compare_values",
]
