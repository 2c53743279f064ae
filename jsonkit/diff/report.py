"""
Compare two JSON texts end to end.

Parsing happens here, before either diff component runs: both sides are
parsed and any failures are reported per side. Only when both texts are
valid are the flat records and the rendered lines produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from jsonkit.diff.flat import DiffRecord, compare_json, summarize
from jsonkit.diff.renderer import DiffLine, render_document
from jsonkit.diff.values import MAX_DIFF_DEPTH
from jsonkit.json_tools import JsonParseError, parse_json

logger = logging.getLogger(__name__)

SIDES = ("original", "modified")


class ComparisonInputError(ValueError):
    """Raised when one or both texts given for comparison are not valid JSON.

    Attributes:
        errors: Mapping of side ("original" / "modified") to its parse error.
    """

    def __init__(self, errors: dict[str, JsonParseError]) -> None:
        self.errors = errors
        details = "; ".join(str(errors[side]) for side in SIDES if side in errors)
        super().__init__(f"Invalid JSON input - {details}")


@dataclass
class DiffReport:
    """Everything computed for one comparison."""

    original: Any
    modified: Any
    records: list[DiffRecord] = field(default_factory=list)
    lines: list[DiffLine] = field(default_factory=list)
    summary: dict[str, int] = field(default_factory=dict)

    @property
    def has_changes(self) -> bool:
        return bool(self.records)

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "records": [record.to_dict() for record in self.records],
            "lines": [line.to_dict() for line in self.lines],
        }


def compare_values(
    original: Any,
    modified: Any,
    max_depth: int = MAX_DIFF_DEPTH,
) -> DiffReport:
    """Run both diff components over two parsed values."""
    records = compare_json(original, modified, max_depth=max_depth)
    lines = render_document(original, modified, max_depth=max_depth)
    summary = summarize(lines)
    logger.debug(
        "Compared documents: %d records, %d lines, summary=%s",
        len(records),
        len(lines),
        summary,
    )
    return DiffReport(original, modified, records, lines, summary)


def compare_texts(
    original_text: str,
    modified_text: str,
    max_depth: int = MAX_DIFF_DEPTH,
) -> DiffReport:
    """Parse two JSON texts and compare them.

    Args:
        original_text: The original JSON text.
        modified_text: The modified JSON text.
        max_depth: Maximum container nesting walked before giving up.

    Returns:
        The DiffReport for the two documents.

    Raises:
        ComparisonInputError: If either text is invalid; both sides are
            checked before raising.
        DiffDepthError: If the documents nest deeper than ``max_depth``.
    """
    parsed: dict[str, Any] = {}
    errors: dict[str, JsonParseError] = {}

    for side, text in zip(SIDES, (original_text, modified_text)):
        try:
            parsed[side] = parse_json(text, side=side)
        except JsonParseError as e:
            errors[side] = e

    if errors:
        raise ComparisonInputError(errors)

    return compare_values(parsed["original"], parsed["modified"], max_depth=max_depth)
