"""
Flat differ: compare two JSON values into a list of path-addressed records.

Each record describes one leaf change or one whole-subtree replacement.
Paths use dot notation for object keys and brackets for array indexes,
e.g. ``items[2].name``. Changes at the root itself use the path ``root``.

Diff Types:
    - added: value exists in modified but not in original
    - removed: value exists in original but not in modified
    - modified: value differs, or its JSON type changed
    (unchanged is never emitted here, only by the line renderer)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from jsonkit.diff.values import (
    MAX_DIFF_DEPTH,
    MISSING,
    DiffDepthError,
    DiffType,
    NodeKind,
    child_path,
    classify_pair,
    union_keys,
)


ROOT_PATH = "root"


@dataclass(frozen=True)
class DiffRecord:
    """A single difference found by ``compare_json``.

    Attributes:
        type: The kind of change.
        path: Location of the change from the root.
        old_value: Original value (removed and modified records only).
        new_value: Modified value (added and modified records only).
    """

    type: DiffType
    path: str
    old_value: Any = MISSING
    new_value: Any = MISSING

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase field names of the record format."""
        data: dict[str, Any] = {"type": self.type.value, "path": self.path}
        if self.old_value is not MISSING:
            data["oldValue"] = self.old_value
        if self.new_value is not MISSING:
            data["newValue"] = self.new_value
        return data


def compare_json(
    original: Any,
    modified: Any = MISSING,
    path: str = "",
    *,
    max_depth: int = MAX_DIFF_DEPTH,
) -> list[DiffRecord]:
    """
    Compare two JSON values and list their differences.

    Objects are walked over the union of their keys (original's order first,
    then keys new in modified), arrays position by position. A type change at
    any point, including object vs. array or object vs. null, is reported as
    one modified record without descending further.

    Both arguments must already be parsed values; pass ``MISSING`` for an
    absent side. Neither input is mutated.

    Args:
        original: The original value.
        modified: The modified value.
        path: Path prefix for the emitted records.
        max_depth: Maximum container nesting walked before giving up.

    Returns:
        The differences in traversal order.

    Raises:
        DiffDepthError: If the values nest deeper than ``max_depth``.

    Examples:
        >>> compare_json([1, 2, 3], [1, 2])
        [DiffRecord(type=<DiffType.REMOVED: 'removed'>, path='[2]', old_value=3, new_value=MISSING)]
    """
    results: list[DiffRecord] = []
    _compare(original, modified, path, results, 0, max_depth)
    return results


def _compare(
    original: Any,
    modified: Any,
    path: str,
    results: list[DiffRecord],
    depth: int,
    max_depth: int,
) -> None:
    """Compare one location and append its records to ``results``."""
    kind = classify_pair(original, modified)
    record_path = path or ROOT_PATH

    if kind is NodeKind.ADDED:
        results.append(DiffRecord(DiffType.ADDED, record_path, new_value=modified))
    elif kind is NodeKind.REMOVED:
        results.append(DiffRecord(DiffType.REMOVED, record_path, old_value=original))
    elif kind in (NodeKind.TYPE_CHANGED, NodeKind.SCALARS_DIFFER):
        results.append(
            DiffRecord(DiffType.MODIFIED, record_path, old_value=original, new_value=modified)
        )
    elif kind is NodeKind.BOTH_CONTAINERS:
        if depth >= max_depth:
            raise DiffDepthError(path, max_depth)
        if isinstance(original, list):
            _compare_lists(original, modified, path, results, depth, max_depth)
        else:
            _compare_dicts(original, modified, path, results, depth, max_depth)


def _compare_lists(
    original: list[Any],
    modified: list[Any],
    path: str,
    results: list[DiffRecord],
    depth: int,
    max_depth: int,
) -> None:
    max_len = max(len(original), len(modified))

    for idx in range(max_len):
        orig_item = original[idx] if idx < len(original) else MISSING
        mod_item = modified[idx] if idx < len(modified) else MISSING
        _compare(orig_item, mod_item, child_path(path, idx), results, depth + 1, max_depth)


def _compare_dicts(
    original: dict[str, Any],
    modified: dict[str, Any],
    path: str,
    results: list[DiffRecord],
    depth: int,
    max_depth: int,
) -> None:
    for key in union_keys(original, modified):
        _compare(
            original.get(key, MISSING),
            modified.get(key, MISSING),
            child_path(path, key),
            results,
            depth + 1,
            max_depth,
        )


def summarize(records: Iterable[Any]) -> dict[str, int]:
    """
    Count differences by type.

    Works on both ``DiffRecord`` and ``DiffLine`` sequences; structural
    lines are not counted.

    Args:
        records: Records from compare_json() or lines from the renderer.

    Returns:
        A dictionary with counts for each diff type.

    Examples:
        >>> summarize(compare_json({"a": 1}, {"b": 2}))
        {'added': 1, 'removed': 1, 'modified': 0, 'unchanged': 0}
    """
    summary = {
        "added": 0,
        "removed": 0,
        "modified": 0,
        "unchanged": 0,
    }

    for record in records:
        if getattr(record, "is_structural", False):
            continue
        summary[record.type.value] += 1

    return summary


def invert(records: Iterable[DiffRecord]) -> list[DiffRecord]:
    """Mirror records as if the two compared values had been swapped.

    Added and removed records trade places and modified records swap their
    old and new values.
    """
    inverted: list[DiffRecord] = []
    for record in records:
        if record.type is DiffType.ADDED:
            inverted.append(DiffRecord(DiffType.REMOVED, record.path, old_value=record.new_value))
        elif record.type is DiffType.REMOVED:
            inverted.append(DiffRecord(DiffType.ADDED, record.path, new_value=record.old_value))
        else:
            inverted.append(
                DiffRecord(record.type, record.path,
                           old_value=record.new_value, new_value=record.old_value)
            )
    return inverted
