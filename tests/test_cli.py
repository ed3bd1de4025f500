"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from dashlist.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_args(tmp_path):
    # Point at a config file that does not exist so defaults apply
    return ["--config", str(tmp_path / "config.yaml")]


@pytest.fixture
def clean_file(tmp_path):
    path = tmp_path / "clean.txt"
    path.write_text("--[x] Buy milk ;; :2023-06-01T09:30:\n----Nested task ;;\n details", encoding="utf-8")
    return path


class TestParseCommand:
    """Test ``dashlist parse``."""

    def test_json_output(self, runner, config_args, clean_file):
        """Test JSON output of a clean file."""
        result = runner.invoke(cli, config_args + ["parse", str(clean_file), "--format", "json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload == [
            {"depth": 1, "item": {
                "todo": True,
                "title": "Buy milk",
                "datetime": {"year": 2023, "month": 6, "day": 1, "time": {"hours": 9, "minutes": 30}},
                "body": None,
                "children": [],
            }},
            {"depth": 2, "item": {
                "todo": None,
                "title": "Nested task",
                "datetime": None,
                "body": "details",
                "children": [],
            }},
        ]

    def test_table_output(self, runner, config_args, clean_file):
        """Test the default table output."""
        result = runner.invoke(cli, config_args + ["parse", str(clean_file)])

        assert result.exit_code == 0
        assert "Buy milk" in result.output
        assert "2023-06-01T09:30" in result.output

    def test_tree_output(self, runner, config_args, clean_file):
        """Test the tree output."""
        result = runner.invoke(cli, config_args + ["parse", str(clean_file), "-f", "tree"])

        assert result.exit_code == 0
        assert "clean.txt" in result.output
        assert "Nested task" in result.output

    def test_failures_reported(self, runner, config_args, sample_file):
        """Test that dropped blocks are reported but do not fail the command."""
        result = runner.invoke(cli, config_args + ["parse", str(sample_file)])

        assert result.exit_code == 0
        assert "Dropped 1 malformed block" in result.output

    def test_strict_fails(self, runner, config_args, sample_file):
        """Test that --strict stops on a bad block."""
        result = runner.invoke(cli, config_args + ["parse", str(sample_file), "--strict"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_file(self, runner, config_args, tmp_path):
        """Test a path that does not exist."""
        result = runner.invoke(cli, config_args + ["parse", str(tmp_path / "nope.txt")])
        assert result.exit_code != 0

    def test_unknown_encoding_in_config(self, runner, tmp_path, clean_file):
        """Test that a bad encoding setting does not crash parsing."""
        path = tmp_path / "config.yaml"
        path.write_text("encoding: bogus\n", encoding="utf-8")

        result = runner.invoke(cli, ["--config", str(path), "parse", str(clean_file), "-f", "json"])

        assert result.exit_code == 0
        assert result.exception is None
        assert "Buy milk" in result.output


class TestCheckCommand:
    """Test ``dashlist check``."""

    def test_clean_file(self, runner, config_args, clean_file):
        """Test a file with no malformed blocks."""
        result = runner.invoke(cli, config_args + ["check", str(clean_file)])

        assert result.exit_code == 0
        assert "2 item(s)" in result.output

    def test_file_with_failures(self, runner, config_args, sample_file):
        """Test that malformed blocks fail the check."""
        result = runner.invoke(cli, config_args + ["check", str(sample_file)])

        assert result.exit_code == 1
        assert "block 4" in result.output


class TestFmtCommand:
    """Test ``dashlist fmt``."""

    def test_canonical_output(self, runner, config_args, clean_file):
        """Test rendering a file in canonical form."""
        result = runner.invoke(cli, config_args + ["fmt", str(clean_file)])

        assert result.exit_code == 0
        assert result.output == (
            "--[x] Buy milk ;; :2023-06-01T09:30:\n"
            "----Nested task ;; details\n"
        )

    def test_reports_dropped_blocks(self, runner, config_args, sample_file):
        """Test that blocks left out of the output are reported."""
        result = runner.invoke(cli, config_args + ["fmt", str(sample_file)])

        assert result.exit_code == 0
        assert "--Call plumber ;;" in result.output
        assert "Dropped 1 malformed block" in result.output

    def test_reports_preamble(self, runner, config_args, tmp_path):
        """Test that unmarked leading text is reported."""
        path = tmp_path / "notes.txt"
        path.write_text("My list\n--A ;;", encoding="utf-8")

        result = runner.invoke(cli, config_args + ["fmt", str(path)])

        assert result.exit_code == 0
        assert "--A ;;" in result.output
        assert "Left out text" in result.output


class TestConfigCommand:
    """Test ``dashlist config show``."""

    def test_show_defaults(self, runner, config_args):
        """Test printing the default configuration."""
        result = runner.invoke(cli, config_args + ["config", "show"])

        assert result.exit_code == 0
        assert "encoding: utf-8" in result.output
        assert "output_format: table" in result.output

    def test_show_loaded_file(self, runner, tmp_path):
        """Test that values from the config file are used."""
        path = tmp_path / "config.yaml"
        path.write_text("output_format: json\n", encoding="utf-8")

        result = runner.invoke(cli, ["--config", str(path), "config", "show"])

        assert result.exit_code == 0
        assert "output_format: json" in result.output

    def test_broken_config(self, runner, tmp_path):
        """Test a config file that is not valid YAML."""
        path = tmp_path / "config.yaml"
        path.write_text("a: [unclosed\n", encoding="utf-8")

        result = runner.invoke(cli, ["--config", str(path), "config", "show"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
