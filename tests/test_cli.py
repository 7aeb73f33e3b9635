"""
Tests for the command-line entry point.
"""

import json

import pytest
import yaml

from whereas.cli import (
    EXIT_OK,
    EXIT_PARSE_ERROR,
    EXIT_RUNTIME_ERROR,
    EXIT_UNREADABLE,
    format_report,
    main,
)
from whereas.analyzer import analyze_resolution
from whereas.examples import CONDITIONAL, INVENTORY, build_example_resolution
from whereas.model import Resolution
from whereas.serialization import resolution_to_dict


@pytest.fixture
def write_source(tmp_path):
    def _write(text, name="resolution.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


class TestRun:
    """Test running programs from the command line."""

    def test_prints_published_lines(self, write_source, capsys):
        """Should print each published line and exit cleanly."""
        assert main([write_source(CONDITIONAL)]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.splitlines() == ["Supplies are adequate", "thirty (30)"]

    def test_parse_error(self, write_source, capsys):
        """Should print a parse error and exit with the parse status."""
        path = write_source("title whereas the Stock (hereinafter Stock) is one (1) resolved")
        assert main([path]) == EXIT_PARSE_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error: unused identifier: Stock" in captured.err

    def test_every_identifier_error_reported(self, write_source, capsys):
        """Should print every collected identifier error."""
        path = write_source("title whereas resolved publish sum Ghost Spirit")
        assert main([path]) == EXIT_PARSE_ERROR
        err = capsys.readouterr().err
        assert "undeclared identifier: Ghost" in err
        assert "undeclared identifier: Spirit" in err

    def test_structural_error(self, write_source, capsys):
        """Should print a structural error and exit with the parse status."""
        assert main([write_source("title resolved")]) == EXIT_PARSE_ERROR
        assert "error: no Whereas clause" in capsys.readouterr().err

    def test_unterminated_string_shows_partial_text(self, write_source, capsys):
        """Should report the text scanned before the missing closing quote."""
        path = write_source('title whereas resolved publish "Hello, World!')
        assert main([path]) == EXIT_PARSE_ERROR
        err = capsys.readouterr().err
        assert err.strip() == 'error: no closing quotation mark after "Hello, World!'

    def test_runtime_error(self, write_source, capsys):
        """Should print output before a runtime error and exit with the runtime status."""
        path = write_source(
            'title whereas resolved publish "first" resolved publish quotient one (1) zero (0)'
        )
        assert main([path]) == EXIT_RUNTIME_ERROR
        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["first"]
        assert "division by zero" in captured.err

    def test_missing_file(self, tmp_path, capsys):
        """Should exit with the unreadable status for a missing file."""
        assert main([str(tmp_path / "missing.txt")]) == EXIT_UNREADABLE
        assert "cannot read" in capsys.readouterr().err


class TestOutputModes:
    """Test the alternative outputs."""

    def test_dump_json(self, write_source, capsys):
        """Should dump the AST as JSON."""
        assert main([write_source(INVENTORY), "--dump", "json"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data == resolution_to_dict(build_example_resolution())

    def test_dump_yaml(self, write_source, capsys):
        """Should dump the AST as YAML."""
        assert main([write_source(INVENTORY), "--dump", "yaml"]) == EXIT_OK
        data = yaml.safe_load(capsys.readouterr().out)
        assert data == resolution_to_dict(build_example_resolution())

    def test_report(self, write_source, capsys):
        """Should print the analyzer report."""
        assert main([write_source(INVENTORY), "--report"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "Whereas statements:  2" in out
        assert "Declared: Stock, Shipment" in out

    def test_dot_default_mode(self, write_source, capsys):
        """Should print a simple DOT graph by default."""
        assert main([write_source(INVENTORY), "--dot"]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.startswith("digraph resolution {")
        assert "dashed" not in out

    def test_dot_dataflow(self, write_source, capsys):
        """Should print a dataflow DOT graph on request."""
        assert main([write_source(INVENTORY), "--dot", "dataflow"]) == EXIT_OK
        assert "style=dashed" in capsys.readouterr().out

    def test_output_modes_are_exclusive(self, write_source):
        """Should reject more than one output mode."""
        with pytest.raises(SystemExit):
            main([write_source(INVENTORY), "--report", "--dump", "json"])

    def test_dump_still_checks_identifiers(self, write_source, capsys):
        """Should refuse to dump a resolution with identifier errors."""
        path = write_source("title whereas resolved publish Ghost")
        assert main([path, "--dump", "json"]) == EXIT_PARSE_ERROR


class TestFormatReport:
    """Test plain-text report rendering."""

    def test_includes_warnings(self):
        """Should list warnings and an empty declaration list."""
        text = format_report(analyze_resolution(Resolution()))
        assert "Declared: (none)" in text
        assert "Warnings (1):" in text
        assert "No Resolved statements" in text

    def test_lists_usage(self):
        """Should list how often each name is read."""
        text = format_report(analyze_resolution(build_example_resolution()))
        assert "Stock: read by 2 expression(s)" in text
