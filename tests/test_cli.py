"""Tests for the root CLI group."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from ordercart import __version__
from ordercart.cli import cli


class TestRootGroup:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_without_subcommand(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        for name in ("menu", "order", "shell"):
            assert name in result.output

    def test_group_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["order", "--examples"])
        assert result.exit_code == 0
        assert "Examples for" in result.output
        assert "ordercart order list --limit 5" in result.output

    def test_invalid_config_reports_error(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "ordercart.toml").write_text("[orders\n")
        result = cli_runner.invoke(cli, ["menu", "list"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.stderr


@pytest.mark.usefixtures("_isolated_store")
class TestGlobalFlags:
    def test_verbose_shows_telemetry(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "menu", "list"])
        assert result.exit_code == 0
        assert "CatalogLoader.load" in result.stdout
        assert "fetch_catalog" in result.stdout

    def test_store_created_under_cwd(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cli_runner.invoke(cli, ["menu", "list"])
        assert (tmp_path / ".ordercart" / "ordercart.db").is_file()

    def test_plugins_can_be_disabled(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "ordercart.toml").write_text("[plugins]\nenabled = false\n")
        result = cli_runner.invoke(cli, ["--json", "menu", "list"])
        assert result.exit_code == 0
        assert result.stdout.startswith("{")
