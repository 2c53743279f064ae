"""
Value classification helpers shared by the flat differ and the line renderer.

JSON values are whatever ``json.loads`` returns: None, bool, int, float, str,
list and dict. Both diff components walk two such trees in lock-step and
classify each comparison point with ``classify_pair``.

Node Kinds:
    - added: value only exists on the modified side
    - removed: value only exists on the original side
    - type_changed: both sides present with different JSON types
    - both_containers: both sides are arrays, or both are objects
    - scalars_equal / scalars_differ: both sides are scalars of the same type
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any


# Maximum nesting depth walked before a comparison is abandoned
MAX_DIFF_DEPTH = 100


class _Missing:
    """Marker for an absent value (missing key or index past the end)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class DiffType(str, Enum):
    """Classification of a single difference."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


class NodeKind(Enum):
    """Outcome of comparing the two values found at one location."""

    ADDED = "added"
    REMOVED = "removed"
    TYPE_CHANGED = "type_changed"
    BOTH_CONTAINERS = "both_containers"
    SCALARS_EQUAL = "scalars_equal"
    SCALARS_DIFFER = "scalars_differ"


class DiffDepthError(ValueError):
    """Raised when two values nest deeper than the allowed depth."""

    def __init__(self, path: str, max_depth: int) -> None:
        self.path = path
        self.max_depth = max_depth
        location = path or "root"
        super().__init__(
            f"JSON is too deeply nested to compare (limit {max_depth}) at {location}"
        )


def json_type(value: Any) -> str:
    """Return the JSON type name of a parsed value.

    Booleans are checked before numbers since ``bool`` subclasses ``int``.
    Integers and floats share the single JSON ``number`` type.

    Args:
        value: A parsed JSON value.

    Returns:
        One of "null", "boolean", "number", "string", "array", "object".

    Raises:
        TypeError: If the value is not something a JSON parser produces.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def is_container(value: Any) -> bool:
    """Check whether a value is an array or an object."""
    return isinstance(value, (list, dict))


def classify_pair(original: Any, modified: Any) -> NodeKind:
    """Classify the pair of values found at one comparison point.

    Args:
        original: Value from the original tree, or MISSING.
        modified: Value from the modified tree, or MISSING.

    Returns:
        The NodeKind describing how the two values relate.
    """
    if original is MISSING:
        # Absent on both sides counts as nothing to report
        return NodeKind.SCALARS_EQUAL if modified is MISSING else NodeKind.ADDED
    if modified is MISSING:
        return NodeKind.REMOVED
    if json_type(original) != json_type(modified):
        return NodeKind.TYPE_CHANGED
    if is_container(original):
        return NodeKind.BOTH_CONTAINERS
    if original == modified:
        return NodeKind.SCALARS_EQUAL
    return NodeKind.SCALARS_DIFFER


def union_keys(
    original: dict[str, Any],
    modified: dict[str, Any],
    sort: bool = False,
) -> list[str]:
    """Union of the keys of two objects.

    Keys keep first-seen order: all of ``original`` then the keys only
    present in ``modified``.

    Args:
        original: The original object.
        modified: The modified object.
        sort: Sort the keys lexicographically instead.

    Returns:
        The list of keys present in either object.
    """
    keys = list(original)
    keys.extend(key for key in modified if key not in original)
    if sort:
        keys.sort()
    return keys


def child_path(path: str, key: str | int) -> str:
    """Build the path of a child location.

    Object keys are appended as ``.key`` (bare ``key`` at the root) and
    array indexes as ``[i]``.
    """
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else key


def print_value(value: Any) -> str:
    """Render a value as compact JSON text.

    Keys stay in insertion order and non-ASCII text is kept as-is, so the
    output is stable for a given parsed value.
    """
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
