"""Tests for the termtree show command."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from termtree.cli.main import main


@pytest.mark.unit
class TestShowCommand:
    """Tests for 'termtree show'."""

    def test_show_lists_terms(
        self, cli_runner: CliRunner, people_xml_file: Path, isolated_home: Path
    ) -> None:
        """Test every term is printed with its queries."""
        result = cli_runner.invoke(main, ["show", str(people_xml_file)])

        assert result.exit_code == 0, result.output
        assert "people [string]" in result.output
        assert "person [string] (required)" in result.output
        assert "//oxns:people/oxns:person/@title" in result.output
        assert 'constrained: //oxns:people/oxns:person[@type="personal"]' in (
            result.output
        )

    def test_show_json(
        self, cli_runner: CliRunner, people_yaml_file: Path, isolated_home: Path
    ) -> None:
        """Test --json prints the tree as JSON."""
        result = cli_runner.invoke(main, ["show", "--json", str(people_yaml_file)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["name"] == "people"
        assert data["children"][0]["name"] == "person"
        assert data["children"][0]["required"] is True

    def test_show_malformed_definition(
        self, cli_runner: CliRunner, temp_dir: Path, isolated_home: Path
    ) -> None:
        """Test a definition without a name exits with code 3."""
        path = temp_dir / "bad.xml"
        path.write_text('<mapper path="x"/>')

        result = cli_runner.invoke(main, ["show", "-q", str(path)])

        assert result.exit_code == 3
        assert "Definition Error" in result.output

    def test_show_config_error(
        self, cli_runner: CliRunner, people_xml_file: Path, isolated_home: Path
    ) -> None:
        """Test an invalid config file exits with code 2."""
        user_dir = isolated_home / ".termtree"
        user_dir.mkdir()
        (user_dir / "config.yml").write_text("unknown_key: 1\n")

        result = cli_runner.invoke(main, ["show", "-q", str(people_xml_file)])

        assert result.exit_code == 2
        assert "Configuration Error" in result.output

    def test_show_missing_file(self, cli_runner: CliRunner, temp_dir: Path) -> None:
        """Test click rejects a missing definition path."""
        result = cli_runner.invoke(main, ["show", str(temp_dir / "missing.xml")])
        assert result.exit_code == 2
