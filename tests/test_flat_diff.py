"""Tests for the flat differ in jsonkit/diff/flat.py."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from jsonkit.diff import (
    MISSING,
    DiffDepthError,
    DiffRecord,
    DiffType,
    compare_json,
    invert,
    summarize,
)


def nested_list(levels: int) -> Any:
    """Wrap the number 1 in the given number of lists."""
    value: Any = 1
    for _ in range(levels):
        value = [value]
    return value


def by_path(records: list[DiffRecord]) -> dict[str, DiffRecord]:
    return {record.path: record for record in records}


class TestIdentity:
    """Comparing a value with itself yields nothing."""

    @pytest.mark.parametrize("value", [
        None,
        True,
        0,
        3.5,
        "text",
        [],
        {},
        [1, [2, [3]]],
        {"a": {"b": [1, {"c": None}]}},
    ])
    def test_identical_values(self, value):
        """compare(A, A) emits no records."""
        assert compare_json(value, copy.deepcopy(value)) == []

    def test_document_fixture(self, original_doc):
        assert compare_json(original_doc, original_doc) == []


class TestRootChanges:
    """Changes detected at the root use the path 'root'."""

    def test_object_vs_array(self):
        """{} vs [] is one modified record with both full values."""
        records = compare_json({}, [])
        assert records == [DiffRecord(DiffType.MODIFIED, "root", old_value={}, new_value=[])]

    def test_scalar_change(self):
        records = compare_json(1, 2)
        assert records == [DiffRecord(DiffType.MODIFIED, "root", old_value=1, new_value=2)]

    def test_number_vs_string(self):
        records = compare_json(1, "1")
        assert len(records) == 1
        assert records[0].type is DiffType.MODIFIED

    def test_boolean_is_not_a_number(self):
        """True and 1 have different JSON types."""
        records = compare_json(True, 1)
        assert records == [DiffRecord(DiffType.MODIFIED, "root", old_value=True, new_value=1)]

    def test_int_and_float_are_one_number_type(self):
        """1 and 1.0 are the same JSON number."""
        assert compare_json(1, 1.0) == []

    def test_null_vs_value_is_type_change(self):
        """JSON null is a value, not an absence."""
        records = compare_json(None, {"a": 1})
        assert records == [
            DiffRecord(DiffType.MODIFIED, "root", old_value=None, new_value={"a": 1})
        ]

    def test_missing_original_is_added(self):
        records = compare_json(MISSING, {"a": 1})
        assert records == [DiffRecord(DiffType.ADDED, "root", new_value={"a": 1})]

    def test_missing_modified_is_removed(self):
        records = compare_json([1], MISSING)
        assert records == [DiffRecord(DiffType.REMOVED, "root", old_value=[1])]

    def test_both_missing(self):
        assert compare_json(MISSING, MISSING) == []

    def test_path_prefix(self):
        """An explicit path replaces 'root'."""
        records = compare_json(1, 2, "config.port")
        assert records[0].path == "config.port"


class TestArrays:
    """Array elements are compared by position."""

    def test_trailing_removal(self):
        """[1,2,3] vs [1,2] removes index 2."""
        records = compare_json([1, 2, 3], [1, 2])
        assert records == [DiffRecord(DiffType.REMOVED, "[2]", old_value=3)]

    def test_trailing_addition(self):
        records = compare_json([1], [1, {"x": 1}])
        assert records == [DiffRecord(DiffType.ADDED, "[1]", new_value={"x": 1})]

    def test_insertion_shifts_positions(self):
        """Inserting at the front changes every later position."""
        records = compare_json(["a", "b"], ["z", "a", "b"])
        assert [(r.type, r.path) for r in records] == [
            (DiffType.MODIFIED, "[0]"),
            (DiffType.MODIFIED, "[1]"),
            (DiffType.ADDED, "[2]"),
        ]

    def test_nested_array_paths(self):
        records = compare_json({"a": [[1, 2]]}, {"a": [[1, 3]]})
        assert records == [DiffRecord(DiffType.MODIFIED, "a[0][1]", old_value=2, new_value=3)]

    def test_objects_inside_root_array(self):
        records = compare_json([{"x": 1}], [{"x": 2}])
        assert records[0].path == "[0].x"


class TestObjects:
    """Object members are compared over the union of keys."""

    def test_key_union(self):
        """{a:1} vs {b:2} removes a and adds b."""
        records = compare_json({"a": 1}, {"b": 2})
        assert records == [
            DiffRecord(DiffType.REMOVED, "a", old_value=1),
            DiffRecord(DiffType.ADDED, "b", new_value=2),
        ]

    def test_union_order_follows_original_then_new_keys(self):
        original = {"z": 1, "a": 1}
        modified = {"new": 1, "a": 2, "z": 2}
        paths = [record.path for record in compare_json(original, modified)]
        assert paths == ["z", "a", "new"]

    def test_nested_nulling(self):
        """{a:{b:1}} vs {a:null} is one modified record at 'a'."""
        records = compare_json({"a": {"b": 1}}, {"a": None})
        assert records == [
            DiffRecord(DiffType.MODIFIED, "a", old_value={"b": 1}, new_value=None)
        ]

    def test_removed_subtree_is_not_expanded(self):
        records = compare_json({"a": {"b": {"c": 1}}}, {})
        assert records == [DiffRecord(DiffType.REMOVED, "a", old_value={"b": {"c": 1}})]

    def test_dotted_paths(self):
        records = compare_json({"a": {"b": {"c": 1}}}, {"a": {"b": {"c": 2}}})
        assert records[0].path == "a.b.c"

    def test_document_fixture(self, original_doc, modified_doc):
        records = compare_json(original_doc, modified_doc)
        assert [(r.type, r.path) for r in records] == [
            (DiffType.MODIFIED, "version"),
            (DiffType.REMOVED, "tags[1]"),
            (DiffType.ADDED, "owner.slack"),
            (DiffType.MODIFIED, "limits"),
        ]

    def test_inputs_not_mutated(self, original_doc, modified_doc):
        original_copy = copy.deepcopy(original_doc)
        modified_copy = copy.deepcopy(modified_doc)
        compare_json(original_doc, modified_doc)
        assert original_doc == original_copy
        assert modified_doc == modified_copy


class TestSymmetry:
    """Swapping the inputs mirrors every record."""

    @pytest.mark.parametrize("a, b", [
        ({"a": 1}, {"b": 2}),
        ([1, 2, 3], [1, 2]),
        ({"x": [1, {"y": "z"}]}, {"x": [2]}),
        ({}, []),
        ({"a": {"b": 1}}, {"a": None}),
    ])
    def test_swapped_inputs_mirror(self, a, b):
        forward = by_path(invert(compare_json(a, b)))
        backward = by_path(compare_json(b, a))
        assert forward == backward

    def test_paths_are_unique(self, original_doc, modified_doc):
        records = compare_json(original_doc, modified_doc)
        paths = [record.path for record in records]
        assert len(paths) == len(set(paths))


class TestDiffRecord:
    """Tests for DiffRecord serialization."""

    def test_added_has_only_new_value(self):
        data = DiffRecord(DiffType.ADDED, "a", new_value=1).to_dict()
        assert data == {"type": "added", "path": "a", "newValue": 1}

    def test_removed_has_only_old_value(self):
        data = DiffRecord(DiffType.REMOVED, "a", old_value=None).to_dict()
        assert data == {"type": "removed", "path": "a", "oldValue": None}

    def test_modified_has_both(self):
        data = DiffRecord(DiffType.MODIFIED, "root", old_value={}, new_value=[]).to_dict()
        assert data == {"type": "modified", "path": "root", "oldValue": {}, "newValue": []}


class TestDepthLimit:
    """Nesting deeper than max_depth raises DiffDepthError."""

    def test_within_limit(self):
        assert compare_json(nested_list(3), nested_list(3), max_depth=3) == []

    def test_exceeds_limit(self):
        with pytest.raises(DiffDepthError) as exc_info:
            compare_json(nested_list(3), nested_list(3), max_depth=2)
        assert exc_info.value.max_depth == 2
        assert exc_info.value.path == "[0][0]"

    def test_default_limit_handles_moderate_nesting(self):
        assert compare_json(nested_list(50), nested_list(50)) == []

    def test_replaced_deep_subtree_is_not_walked(self):
        """Added, removed and type-changed subtrees are never descended into."""
        records = compare_json({"a": 1}, {"a": nested_list(10)}, max_depth=2)
        assert len(records) == 1


class TestSummarize:
    """Tests for summarize()."""

    def test_counts(self, original_doc, modified_doc):
        summary = summarize(compare_json(original_doc, modified_doc))
        assert summary == {"added": 1, "removed": 1, "modified": 2, "unchanged": 0}

    def test_empty(self):
        assert summarize([]) == {"added": 0, "removed": 0, "modified": 0, "unchanged": 0}
