"""Tests for CLI functionality in jsonkit/main.py."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

# Path to the module
CLI_MODULE = "jsonkit.main"


def run_cli(
    *args: str,
    history_dir: Path | None = None,
    input_text: str | None = None,
) -> subprocess.CompletedProcess:
    """Run the jsonkit CLI with given arguments."""
    cmd = [sys.executable, "-m", CLI_MODULE]
    if history_dir is not None:
        cmd.extend(["--history-dir", str(history_dir)])
    cmd.extend(args)

    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        input=input_text,
        cwd=Path(__file__).parent.parent
    )


def write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def history_dir(tmp_path):
    """Return an isolated history directory."""
    return tmp_path / "history"


@pytest.fixture
def doc_files(tmp_path, original_doc, modified_doc):
    """Write the shared fixture documents to disk."""
    return (
        write_json(tmp_path / "original.json", original_doc),
        write_json(tmp_path / "modified.json", modified_doc),
    )


class TestCLIBasic:
    """Basic CLI functionality tests."""

    def test_help_flag(self):
        """--help should show usage."""
        result = run_cli("--help")
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()

    def test_no_command(self):
        """No subcommand should print help and fail."""
        result = run_cli()
        assert result.returncode == 1
        assert "usage" in result.stdout.lower()

    def test_file_not_found_error(self, history_dir):
        """Non-existent file should error with message."""
        result = run_cli("format", "/nonexistent/file.json", history_dir=history_dir)
        assert result.returncode == 1
        assert "not found" in result.stderr.lower()


class TestCLITransforms:
    """Tests for format, minify, escape and unescape."""

    def test_format(self, tmp_path, history_dir):
        path = write_json(tmp_path / "in.json", {"a": [1, 2]})
        result = run_cli("format", str(path), history_dir=history_dir)
        assert result.returncode == 0
        assert result.stdout == '{\n  "a": [\n    1,\n    2\n  ]\n}\n'

    def test_format_indent(self, tmp_path, history_dir):
        path = write_json(tmp_path / "in.json", {"a": 1})
        result = run_cli("format", "--indent", "4", str(path), history_dir=history_dir)
        assert result.stdout == '{\n    "a": 1\n}\n'

    def test_minify_stdin(self, history_dir):
        result = run_cli("minify", "-", history_dir=history_dir, input_text='{ "a" : [ 1, 2 ] }')
        assert result.returncode == 0
        assert result.stdout == '{"a":[1,2]}\n'

    def test_format_invalid_json(self, history_dir):
        result = run_cli("format", "-", history_dir=history_dir, input_text="{broken")
        assert result.returncode == 1
        assert "Invalid JSON" in result.stderr
        assert result.stdout == ""

    def test_escape_unescape(self, history_dir):
        escaped = run_cli("escape", "-", history_dir=history_dir, input_text='{"a": "b"}')
        assert escaped.stdout == '{\\"a\\": \\"b\\"}\n'
        unescaped = run_cli("unescape", "-", history_dir=history_dir, input_text=escaped.stdout)
        assert unescaped.stdout == '{"a": "b"}\n'


class TestCLIValidate:
    """Tests for the validate command."""

    def test_valid(self, history_dir):
        result = run_cli("validate", "-", history_dir=history_dir, input_text="[1, 2]")
        assert result.returncode == 0
        assert result.stdout.strip() == "Valid JSON"

    def test_nesting_beyond_parser_limit(self, history_dir):
        deep = "[" * 100_000 + "]" * 100_000
        result = run_cli("--no-history", "validate", "-", history_dir=history_dir, input_text=deep)
        assert result.returncode == 1
        assert "Invalid JSON: JSON is too deeply nested" in result.stderr

    def test_invalid_reports_location(self, history_dir):
        result = run_cli("validate", "-", history_dir=history_dir, input_text='{\n"a": }')
        assert result.returncode == 1
        assert "line 2, column 6" in result.stderr


class TestCLIDiff:
    """Tests for the diff command and its exit codes."""

    def test_identical(self, tmp_path, history_dir, original_doc):
        path = write_json(tmp_path / "same.json", original_doc)
        result = run_cli("diff", str(path), str(path), history_dir=history_dir)
        assert result.returncode == 0
        assert result.stdout.strip() == "No differences"

    def test_flat_output(self, doc_files, history_dir):
        original, modified = doc_files
        result = run_cli("diff", str(original), str(modified), history_dir=history_dir)

        assert result.returncode == 1
        lines = result.stdout.splitlines()
        assert "modified  version: 1 -> 2" in lines
        assert 'removed   tags[1]: "internal"' in lines
        assert 'added     owner.slack: "#platform"' in lines
        assert 'modified  limits: null -> {"rps":100}' in lines
        assert lines[-1] == "4 differences (1 added, 1 removed, 2 modified)"

    def test_lines_output(self, doc_files, history_dir):
        original, modified = doc_files
        result = run_cli("diff", "-f", "lines", str(original), str(modified), history_dir=history_dir)

        assert result.returncode == 1
        lines = result.stdout.splitlines()
        assert len(lines) == 14
        assert lines[0] == "  {"
        assert '~   "version": 1 -> 2' in lines
        assert '-     "internal"' in lines

    def test_json_output(self, doc_files, history_dir):
        original, modified = doc_files
        result = run_cli("diff", "--format", "json", str(original), str(modified), history_dir=history_dir)

        data = json.loads(result.stdout)
        assert data["summary"] == {"added": 1, "removed": 1, "modified": 2, "unchanged": 4}
        assert [record["path"] for record in data["records"]] == [
            "version", "tags[1]", "owner.slack", "limits"
        ]
        assert len(data["lines"]) == 14

    def test_invalid_sides_both_reported(self, tmp_path, history_dir):
        bad_original = tmp_path / "a.json"
        bad_original.write_text("{", encoding="utf-8")
        bad_modified = tmp_path / "b.json"
        bad_modified.write_text("[1,]", encoding="utf-8")

        result = run_cli("diff", str(bad_original), str(bad_modified), history_dir=history_dir)

        assert result.returncode == 2
        assert "Invalid JSON in original" in result.stderr
        assert "Invalid JSON in modified" in result.stderr
        assert result.stdout == ""

    def test_nesting_beyond_parser_limit(self, tmp_path, history_dir):
        path = tmp_path / "deep.json"
        path.write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")
        result = run_cli("diff", str(path), str(path), history_dir=history_dir)
        assert result.returncode == 2
        assert "JSON is too deeply nested" in result.stderr
        assert "Traceback" not in result.stderr

    def test_both_sides_from_stdin_rejected(self, history_dir):
        result = run_cli("diff", "-", "-", history_dir=history_dir, input_text="{}")
        assert result.returncode == 2
        assert "stdin" in result.stderr
        assert result.stdout == ""

    def test_one_side_from_stdin(self, tmp_path, history_dir):
        path = write_json(tmp_path / "b.json", {"a": 2})
        result = run_cli("diff", "-", str(path), history_dir=history_dir, input_text='{"a": 1}')
        assert result.returncode == 1
        assert "modified  a: 1 -> 2" in result.stdout.splitlines()

    def test_max_depth(self, tmp_path, history_dir):
        path = write_json(tmp_path / "deep.json", [[[[1]]]])
        result = run_cli("diff", "--max-depth", "2", str(path), str(path), history_dir=history_dir)
        assert result.returncode == 2
        assert "too deeply nested" in result.stderr


class TestCLIHistory:
    """Tests for history recording and the history subcommands."""

    def test_format_records_history(self, history_dir):
        run_cli("format", "-", history_dir=history_dir, input_text='{"a": 1}')
        result = run_cli("history", "list", "format", history_dir=history_dir)

        assert result.returncode == 0
        assert '{"a": 1}' in result.stdout
        assert "1 entries" in result.stdout

    def test_diff_records_both_sides(self, doc_files, history_dir):
        original, modified = doc_files
        run_cli("diff", str(original), str(modified), history_dir=history_dir)

        for editor in ("diff-original", "diff-modified"):
            result = run_cli("history", "list", editor, history_dir=history_dir)
            assert "1 entries" in result.stdout

    def test_no_history_flag(self, history_dir):
        run_cli("--no-history", "minify", "-", history_dir=history_dir, input_text="[1]")
        result = run_cli("history", "list", "minify", history_dir=history_dir)
        assert result.stdout.strip() == "No history for 'minify'"

    def test_duplicate_input_stored_once(self, history_dir):
        for _ in range(3):
            run_cli("validate", "-", history_dir=history_dir, input_text="[1]")
        result = run_cli("history", "list", "validate", history_dir=history_dir)
        assert "1 entries" in result.stdout

    def test_remove_and_clear(self, history_dir):
        for text in ("[1]", "[2]"):
            run_cli("minify", "-", history_dir=history_dir, input_text=text)

        removed = run_cli("history", "remove", "minify", "0", history_dir=history_dir)
        assert removed.returncode == 0
        assert "Removed: [2]" in removed.stdout

        out_of_range = run_cli("history", "remove", "minify", "5", history_dir=history_dir)
        assert out_of_range.returncode == 1
        assert "out of range" in out_of_range.stderr

        cleared = run_cli("history", "clear", "minify", history_dir=history_dir)
        assert "Cleared history for 'minify'" in cleared.stdout
        listed = run_cli("history", "list", "minify", history_dir=history_dir)
        assert "No history" in listed.stdout

    def test_environment_variable(self, tmp_path):
        env_dir = tmp_path / "env-history"
        cmd = [sys.executable, "-m", CLI_MODULE, "minify", "-"]
        env = {**os.environ, "JSONKIT_HISTORY_DIR": str(env_dir)}
        subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            input="[3]",
            env=env,
            cwd=Path(__file__).parent.parent
        )
        assert (env_dir / "tool-history-minify.json").exists()
