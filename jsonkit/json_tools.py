"""
Text-level JSON utilities: strict parsing, formatting and escaping.

Every function takes raw text and returns new text; nothing here keeps
state. ``transform`` is the single entry point used by the CLI and the
viewer to apply one of the editing modes to a piece of text on demand.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any


DEFAULT_INDENT = 2


class JsonParseError(ValueError):
    """Raised when text is not valid strict JSON.

    Attributes:
        message: The parser's description of the problem.
        lineno: 1-based line of the error, if known.
        colno: 1-based column of the error, if known.
        side: Which input the text came from ("original", "modified"), if any.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        colno: int | None = None,
        side: str | None = None,
    ) -> None:
        self.message = message
        self.lineno = lineno
        self.colno = colno
        self.side = side
        super().__init__(f"{side}: {self.detail}" if side else self.detail)

    @property
    def detail(self) -> str:
        """The message with its location, without the side label."""
        if self.lineno is not None and self.colno is not None:
            return f"{self.message} (line {self.lineno}, column {self.colno})"
        return self.message


class TransformMode(str, Enum):
    """Editing modes that turn one text into another."""

    FORMAT = "format"
    MINIFY = "minify"
    ESCAPE = "escape"
    UNESCAPE = "unescape"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text: str, side: str | None = None) -> Any:
    """Parse text with the strict JSON grammar.

    Python's json module accepts NaN and Infinity by default; they are
    rejected here.

    Args:
        text: The JSON text.
        side: Optional label attached to any error.

    Returns:
        The parsed value.

    Raises:
        JsonParseError: If the text is not valid JSON or nests too deeply
            for the parser.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise JsonParseError(e.msg, e.lineno, e.colno, side=side) from e
    except ValueError as e:
        raise JsonParseError(str(e), side=side) from e
    except RecursionError as e:
        raise JsonParseError("JSON is too deeply nested", side=side) from e


def safe_parse_json(text: str) -> tuple[Any, str | None]:
    """Parse text without raising.

    Returns:
        A tuple of (data, error). On failure data is None and error holds
        the message.
    """
    try:
        return parse_json(text), None
    except JsonParseError as e:
        return None, str(e)


def format_json(text: str, indent: int = DEFAULT_INDENT) -> str:
    """Pretty-print JSON text with the given indent."""
    return json.dumps(parse_json(text), indent=indent, ensure_ascii=False)


def minify_json(text: str) -> str:
    """Re-serialize JSON text without any whitespace."""
    return json.dumps(parse_json(text), separators=(",", ":"), ensure_ascii=False)


def validate_json(text: str) -> tuple[bool, str | None]:
    """Check whether text is valid JSON.

    Returns:
        A tuple of (is_valid, error).
    """
    _, error = safe_parse_json(text)
    return error is None, error


def escape_json(text: str) -> str:
    """Escape backslashes and double quotes so text can sit inside a string."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def unescape_json(text: str) -> str:
    """Undo ``escape_json``."""
    return text.replace('\\"', '"').replace("\\\\", "\\")


def transform(text: str, mode: TransformMode | str, indent: int = DEFAULT_INDENT) -> str:
    """Apply one editing mode to a text.

    Args:
        text: The input text.
        mode: A TransformMode or its string value.
        indent: Indent used by the format mode.

    Returns:
        The transformed text.

    Raises:
        JsonParseError: If format or minify is given invalid JSON.
        ValueError: If the mode is unknown.
    """
    mode = TransformMode(mode)
    if mode is TransformMode.FORMAT:
        return format_json(text, indent=indent)
    if mode is TransformMode.MINIFY:
        return minify_json(text)
    if mode is TransformMode.ESCAPE:
        return escape_json(text)
    return unescape_json(text)
