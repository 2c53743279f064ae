"""
Structural renderer: a pretty-printed JSON document annotated per line.

The renderer walks two values in lock-step and emits one ``DiffLine`` per
displayed line, in document order. Containers present on both sides are
opened and closed with structural lines (always unchanged); everything else
is a single line carrying its compact JSON text.

Example for ``{"a": 1, "b": [1]}`` vs ``{"a": 2, "b": [1, 2]}``::

    {
      "a": 1 -> 2          modified
      "b": [
        1                  unchanged
        2                  added
      ]
    }

Object keys are shown sorted, array items by position.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from jsonkit.diff.values import (
    MAX_DIFF_DEPTH,
    MISSING,
    DiffDepthError,
    DiffType,
    NodeKind,
    child_path,
    classify_pair,
    json_type,
    print_value,
    union_keys,
)


# Spaces per indent level in rendered content
INDENT_WIDTH = 2

MODIFIED_SEPARATOR = " -> "

LINE_MARKERS: dict[DiffType, str] = {
    DiffType.ADDED: "+",
    DiffType.REMOVED: "-",
    DiffType.MODIFIED: "~",
    DiffType.UNCHANGED: " ",
}


@dataclass(frozen=True)
class DiffLine:
    """One line of the rendered diff document.

    Attributes:
        type: Diff classification of the line.
        indent: Nesting level (0 for the root delimiters).
        content: Display text, indentation and key prefix included.
        key: Object member key, None for array items and closing lines.
        old_value: Printed original value (removed and modified lines).
        new_value: Printed modified value (added and modified lines).
        is_structural: True for bare opening/closing delimiter lines.
    """

    type: DiffType
    indent: int
    content: str
    key: str | None = None
    old_value: str | None = None
    new_value: str | None = None
    is_structural: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type.value,
            "indent": self.indent,
            "content": self.content,
            "isStructural": self.is_structural,
        }
        if self.key is not None:
            data["key"] = self.key
        if self.old_value is not None:
            data["oldValue"] = self.old_value
        if self.new_value is not None:
            data["newValue"] = self.new_value
        return data


class _LineRenderer:
    """Accumulates lines for one render call."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        self.lines: list[DiffLine] = []

    def render(
        self,
        key: str | None,
        original: Any,
        modified: Any,
        indent: int,
        path: str,
        depth: int,
    ) -> None:
        pad = " " * (indent * INDENT_WIDTH)
        prefix = pad if key is None else f"{pad}{json.dumps(key, ensure_ascii=False)}: "
        kind = classify_pair(original, modified)

        if kind is NodeKind.ADDED:
            text = print_value(modified)
            self.lines.append(DiffLine(DiffType.ADDED, indent, prefix + text, key, new_value=text))
        elif kind is NodeKind.REMOVED:
            text = print_value(original)
            self.lines.append(DiffLine(DiffType.REMOVED, indent, prefix + text, key, old_value=text))
        elif kind in (NodeKind.TYPE_CHANGED, NodeKind.SCALARS_DIFFER):
            old_text = print_value(original)
            new_text = print_value(modified)
            self.lines.append(
                DiffLine(
                    DiffType.MODIFIED,
                    indent,
                    f"{prefix}{old_text}{MODIFIED_SEPARATOR}{new_text}",
                    key,
                    old_value=old_text,
                    new_value=new_text,
                )
            )
        elif kind is NodeKind.SCALARS_EQUAL:
            self.lines.append(DiffLine(DiffType.UNCHANGED, indent, prefix + print_value(original), key))
        else:
            self._render_container(key, original, modified, indent, prefix, path, depth)

    def _render_container(
        self,
        key: str | None,
        original: Any,
        modified: Any,
        indent: int,
        prefix: str,
        path: str,
        depth: int,
    ) -> None:
        if depth >= self.max_depth:
            raise DiffDepthError(path, self.max_depth)

        is_object = isinstance(original, dict)
        opener, closer = ("{", "}") if is_object else ("[", "]")
        self.lines.append(DiffLine(DiffType.UNCHANGED, indent, prefix + opener, key, is_structural=True))

        if is_object:
            for child_key in union_keys(original, modified, sort=True):
                self.render(
                    child_key,
                    original.get(child_key, MISSING),
                    modified.get(child_key, MISSING),
                    indent + 1,
                    child_path(path, child_key),
                    depth + 1,
                )
        else:
            for idx in range(max(len(original), len(modified))):
                self.render(
                    None,
                    original[idx] if idx < len(original) else MISSING,
                    modified[idx] if idx < len(modified) else MISSING,
                    indent + 1,
                    child_path(path, idx),
                    depth + 1,
                )

        pad = " " * (indent * INDENT_WIDTH)
        self.lines.append(DiffLine(DiffType.UNCHANGED, indent, pad + closer, is_structural=True))


def render_diff_lines(
    original: Any,
    modified: Any,
    *,
    max_depth: int = MAX_DIFF_DEPTH,
) -> list[DiffLine]:
    """Render two containers of the same kind as annotated document lines.

    Args:
        original: The original object or array.
        modified: The modified object or array.
        max_depth: Maximum container nesting walked before giving up.

    Returns:
        The lines in document order, wrapped in one outer open/close pair.

    Raises:
        ValueError: If the roots are not both objects or both arrays.
        DiffDepthError: If the values nest deeper than ``max_depth``.
    """
    root_types = (json_type(original), json_type(modified))
    if root_types not in (("object", "object"), ("array", "array")):
        raise ValueError(
            f"Both roots must be objects or both arrays (got {root_types[0]} and {root_types[1]})"
        )

    renderer = _LineRenderer(max_depth)
    renderer.render(None, original, modified, indent=0, path="", depth=0)
    return renderer.lines


def render_document(
    original: Any,
    modified: Any,
    *,
    max_depth: int = MAX_DIFF_DEPTH,
) -> list[DiffLine]:
    """Render any two values, special-casing roots the renderer cannot walk.

    Matching container roots are rendered line by line. Scalar roots, or
    roots of different kinds, become a single whole-document line: unchanged
    for equal scalars, otherwise modified with both printed values.
    """
    if original is MISSING and modified is MISSING:
        return []
    if classify_pair(original, modified) is NodeKind.BOTH_CONTAINERS:
        return render_diff_lines(original, modified, max_depth=max_depth)

    renderer = _LineRenderer(max_depth)
    renderer.render(None, original, modified, indent=0, path="", depth=0)
    return renderer.lines


def format_lines(lines: list[DiffLine]) -> str:
    """Format rendered lines as plain text with a one-character marker each."""
    return "\n".join(f"{LINE_MARKERS[line.type]} {line.content}" for line in lines)
