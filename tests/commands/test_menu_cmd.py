"""Tests for the menu command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from ordercart.cli import cli


@pytest.mark.usefixtures("_isolated_store")
class TestMenuList:
    def test_empty_store(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["menu", "list"])
        assert result.exit_code == 0, result.output
        assert "0 items" in result.output

    def test_lists_imported_items(self, cli_runner: CliRunner, menu_file: Path) -> None:
        assert cli_runner.invoke(cli, ["menu", "import", str(menu_file)]).exit_code == 0
        result = cli_runner.invoke(cli, ["--json", "menu", "list"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "catalog_load"
        assert data["data"]["status"] == "ready"
        assert [i["name"] for i in data["data"]["items"]] == [
            "Margherita",
            "Caesar Salad",
            "Lemonade",
        ]

    def test_human_output(self, cli_runner: CliRunner, menu_file: Path) -> None:
        cli_runner.invoke(cli, ["menu", "import", str(menu_file)])
        result = cli_runner.invoke(cli, ["menu", "list"])
        assert "Caesar Salad" in result.output
        assert "$7.25" in result.output

    def test_quiet_lists_ids(self, cli_runner: CliRunner, menu_file: Path) -> None:
        cli_runner.invoke(cli, ["menu", "import", str(menu_file)])
        result = cli_runner.invoke(cli, ["-q", "menu", "list"])
        assert result.stdout.split() == ["1", "2", "3"]


@pytest.mark.usefixtures("_isolated_store")
class TestMenuImport:
    def test_import(self, cli_runner: CliRunner, menu_file: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "menu", "import", str(menu_file)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["count"] == 3
        assert data["data"]["replaced"] is False

    def test_invalid_file_exits_1(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{", encoding="utf-8")
        result = cli_runner.invoke(cli, ["menu", "import", str(bad)])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "Invalid JSON" in result.stderr

    def test_empty_file_warns_on_stderr(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text("[]", encoding="utf-8")
        result = cli_runner.invoke(cli, ["menu", "import", str(empty)])
        assert result.exit_code == 0
        assert "WARNING" in result.stderr

    def test_replace(self, cli_runner: CliRunner, menu_file: Path, tmp_path: Path) -> None:
        cli_runner.invoke(cli, ["menu", "import", str(menu_file)])
        one = tmp_path / "one.toml"
        one.write_text('[[items]]\nid = 3\nname = "Lemonade"\nprice = "3.50"\n', encoding="utf-8")
        assert cli_runner.invoke(cli, ["menu", "import", str(one), "--replace"]).exit_code == 0
        data = json.loads(cli_runner.invoke(cli, ["--json", "menu", "list"]).stdout)
        assert data["data"]["items"] == [
            {"id": 3, "name": "Lemonade", "price": "3.50", "description": None, "category": None}
        ]

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["menu", "import", "--examples"])
        assert result.exit_code == 0
        assert "ordercart menu import menu.json" in result.output
