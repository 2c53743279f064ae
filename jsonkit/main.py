#!/usr/bin/env python3
"""
jsonkit

A CLI for working with JSON text: format, minify, validate, escape and
compare documents, with a per-command history of inputs.

Usage:
    python -m jsonkit.main format <file>                Pretty-print JSON
    python -m jsonkit.main minify <file>                Strip whitespace
    python -m jsonkit.main validate <file>              Check JSON syntax
    python -m jsonkit.main escape <file>                Escape quotes/backslashes
    python -m jsonkit.main unescape <file>              Undo escape
    python -m jsonkit.main diff <original> <modified>   Structural diff
    python -m jsonkit.main history list <editor>        Show input history

Use '-' as the file name to read from stdin.

Exit codes for diff:
    0  documents are identical
    1  documents differ
    2  invalid input or nesting too deep
"""

import argparse
import json
import logging
import sys
from datetime import datetime

from jsonkit.diff import (
    ComparisonInputError,
    DiffDepthError,
    MAX_DIFF_DEPTH,
    DiffReport,
    compare_texts,
    format_lines,
    print_value,
)
from jsonkit.history import FileStorage, HistoryStore, get_history_dir
from jsonkit.json_tools import DEFAULT_INDENT, JsonParseError, TransformMode, transform, validate_json

logger = logging.getLogger(__name__)

DIFF_EDITOR_KEYS = ("diff-original", "diff-modified")


def truncate(text: str, max_len: int = 50) -> str:
    """Truncate text with ellipsis."""
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."


def read_input(path: str) -> str:
    """Read a file's text, or stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def read_input_or_exit(path: str) -> str:
    try:
        return read_input(path)
    except FileNotFoundError:
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Cannot read {path}: {e}", file=sys.stderr)
        sys.exit(1)


def emit(text: str) -> None:
    """Write text to stdout, ending with exactly one newline."""
    sys.stdout.write(text if text.endswith("\n") else text + "\n")


def record_history(args, editor_key: str, content: str) -> None:
    if args.no_history:
        return
    args.history.add(editor_key, content)


# ============== Commands ==============

def cmd_transform(args):
    """Apply one text transformation (format, minify, escape, unescape)."""
    text = read_input_or_exit(args.file)
    record_history(args, args.command, text)

    try:
        result = transform(text, args.mode, indent=getattr(args, "indent", DEFAULT_INDENT))
    except JsonParseError as e:
        print(f"Error: Invalid JSON: {e.detail}", file=sys.stderr)
        sys.exit(1)

    emit(result)


def cmd_validate(args):
    """Check that the input is valid JSON."""
    text = read_input_or_exit(args.file)
    record_history(args, args.command, text)

    is_valid, error = validate_json(text)
    if not is_valid:
        print(f"Invalid JSON: {error}", file=sys.stderr)
        sys.exit(1)
    print("Valid JSON")


def print_flat_report(report: DiffReport) -> None:
    """Print one line per flat diff record followed by a summary."""
    if not report.records:
        print("No differences")
        return

    print("-" * 60)
    for record in report.records:
        data = record.to_dict()
        if "oldValue" in data and "newValue" in data:
            change = f"{print_value(data['oldValue'])} -> {print_value(data['newValue'])}"
        elif "oldValue" in data:
            change = print_value(data["oldValue"])
        else:
            change = print_value(data["newValue"])
        print(f"{record.type.value:<9} {record.path}: {truncate(change, 80)}")
    print("-" * 60)

    counts = {"added": 0, "removed": 0, "modified": 0}
    for record in report.records:
        counts[record.type.value] += 1
    print(
        f"{len(report.records)} differences "
        f"({counts['added']} added, {counts['removed']} removed, {counts['modified']} modified)"
    )


def cmd_diff(args):
    """Compare two JSON documents."""
    if args.original == "-" and args.modified == "-":
        print("Error: Only one of original and modified can be read from stdin", file=sys.stderr)
        sys.exit(2)

    original_text = read_input_or_exit(args.original)
    modified_text = read_input_or_exit(args.modified)

    for editor_key, text in zip(DIFF_EDITOR_KEYS, (original_text, modified_text)):
        record_history(args, editor_key, text)

    try:
        report = compare_texts(original_text, modified_text, max_depth=args.max_depth)
    except ComparisonInputError as e:
        paths = {"original": args.original, "modified": args.modified}
        for side, error in e.errors.items():
            print(f"Error: Invalid JSON in {side} ({paths[side]}): {error.detail}", file=sys.stderr)
        sys.exit(2)
    except DiffDepthError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.format == "json":
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    elif args.format == "lines":
        emit(format_lines(report.lines))
    else:
        print_flat_report(report)

    sys.exit(1 if report.has_changes else 0)


def cmd_history_list(args):
    """List stored history entries for one editor."""
    items = args.history.list(args.editor)
    if not items:
        print(f"No history for '{args.editor}'")
        return

    header = f"{'IDX':<5} {'WHEN':<20} {'PREVIEW'}"
    print(header)
    print("-" * 60)
    for idx, item in enumerate(items):
        when = datetime.fromtimestamp(item.timestamp / 1000).strftime("%Y-%m-%d %H:%M:%S")
        preview = item.preview.replace("\n", " ")
        print(f"{idx:<5} {when:<20} {preview}")
    print("-" * 60)
    print(f"{len(items)} entries")


def cmd_history_remove(args):
    """Remove one history entry."""
    try:
        removed = args.history.remove(args.editor, args.index)
    except IndexError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Removed: {removed.preview}")


def cmd_history_clear(args):
    """Clear one editor's history."""
    args.history.clear(args.editor)
    print(f"Cleared history for '{args.editor}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonkit",
        description="jsonkit - format, validate, escape and diff JSON documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--history-dir',
        default=None,
        help='Directory for stored history (default: $JSONKIT_HISTORY_DIR or ~/.jsonkit/history)'
    )
    parser.add_argument('--no-history', action='store_true', help='Do not record inputs in the history')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Format command
    format_parser = subparsers.add_parser('format', help='Pretty-print JSON')
    format_parser.add_argument('file', help="JSON file path ('-' for stdin)")
    format_parser.add_argument(
        '-i', '--indent',
        type=int,
        default=DEFAULT_INDENT,
        help=f'Spaces per indent level (default: {DEFAULT_INDENT})'
    )
    format_parser.set_defaults(func=cmd_transform, mode=TransformMode.FORMAT)

    # Text commands without options
    for mode, help_text in (
        (TransformMode.MINIFY, 'Remove all insignificant whitespace'),
        (TransformMode.ESCAPE, 'Escape backslashes and double quotes'),
        (TransformMode.UNESCAPE, 'Undo escape'),
    ):
        text_parser = subparsers.add_parser(mode.value, help=help_text)
        text_parser.add_argument('file', help="Input file path ('-' for stdin)")
        text_parser.set_defaults(func=cmd_transform, mode=mode)

    # Validate command
    validate_parser = subparsers.add_parser('validate', help='Check JSON syntax')
    validate_parser.add_argument('file', help="JSON file path ('-' for stdin)")
    validate_parser.set_defaults(func=cmd_validate)

    # Diff command
    diff_parser = subparsers.add_parser('diff', help='Compare two JSON documents')
    diff_parser.add_argument('original', help="Original JSON file ('-' for stdin)")
    diff_parser.add_argument('modified', help="Modified JSON file ('-' for stdin)")
    diff_parser.add_argument(
        '-f', '--format',
        choices=['flat', 'lines', 'json'],
        default='flat',
        help='Output format: flat change list, annotated document lines, or JSON (default: flat)'
    )
    diff_parser.add_argument(
        '--max-depth',
        type=int,
        default=MAX_DIFF_DEPTH,
        help=f"Maximum nesting depth to compare (default: {MAX_DIFF_DEPTH})"
    )
    diff_parser.set_defaults(func=cmd_diff)

    # History command
    history_parser = subparsers.add_parser('history', help='Inspect stored input history')
    history_sub = history_parser.add_subparsers(dest='history_command', help='History actions')

    history_list = history_sub.add_parser('list', help='List entries, most recent first')
    history_list.add_argument('editor', help='Editor key (e.g. format, diff-original)')
    history_list.set_defaults(func=cmd_history_list)

    history_remove = history_sub.add_parser('remove', help='Remove one entry')
    history_remove.add_argument('editor', help='Editor key')
    history_remove.add_argument('index', type=int, help='Entry index (0 = most recent)')
    history_remove.set_defaults(func=cmd_history_remove)

    history_clear = history_sub.add_parser('clear', help='Remove all entries')
    history_clear.add_argument('editor', help='Editor key')
    history_clear.set_defaults(func=cmd_history_clear)

    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.command or not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    history_dir = get_history_dir(args.history_dir)
    logger.debug("Using history directory %s", history_dir)
    args.history = HistoryStore(FileStorage(history_dir))

    args.func(args)


if __name__ == "__main__":
    main()
