"""Tests for OrderCartSettings — unified settings with TOML source."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from ordercart.config.settings import CONFIG_ENV_VAR, OrderCartSettings, find_config


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = OrderCartSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.user is None
        assert settings.catalog.fetch_timeout_seconds == 10.0
        assert settings.orders.notification_seconds == 6.0
        assert settings.orders.success_message == "Order submitted successfully!"
        assert settings.plugins.enabled is True
        assert settings.db_path == tmp_path / ".ordercart" / "ordercart.db"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = OrderCartSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "ordercart.toml").write_text(
            '[orders]\ncurrency = "€"\ntimeout_seconds = 5\n[session]\nuser_id = "alice"\n'
        )
        settings = OrderCartSettings.from_cli(root=tmp_path)
        assert settings.orders.currency == "€"
        assert settings.orders.timeout_seconds == 5
        assert settings.orders.notification_seconds == 6.0
        assert settings.session.user_id == "alice"
        assert settings.config_path == tmp_path / "ordercart.toml"

    def test_root_follows_discovered_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "ordercart.toml").write_text("[store]\ndirname = \"data\"\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = OrderCartSettings.from_cli()
        assert settings.root == tmp_path
        assert settings.db_path == tmp_path / "data" / "ordercart.db"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[catalog]\nerror_message = "Menu unavailable"\n')
        settings = OrderCartSettings.from_cli(config_path=str(custom), root=tmp_path)
        assert settings.catalog.error_message == "Menu unavailable"
        assert settings.config_path == custom

    def test_invalid_toml_raises_click_exception(self, tmp_path: Path) -> None:
        (tmp_path / "ordercart.toml").write_text("[orders\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            OrderCartSettings.from_cli(root=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "ordercart.toml").write_text('[orders]\ncurrency = "€"\n')
        monkeypatch.setenv("ORDERCART_ORDERS__CURRENCY", "£")
        settings = OrderCartSettings.from_cli(root=tmp_path)
        assert settings.orders.currency == "£"

    def test_cli_flag_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ORDERCART_USER", "env-user")
        assert OrderCartSettings.from_cli(root=tmp_path).user == "env-user"
        assert OrderCartSettings.from_cli(root=tmp_path, user="cli-user").user == "cli-user"

    def test_none_flags_are_dropped(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ORDERCART_USER", "env-user")
        assert OrderCartSettings.from_cli(root=tmp_path, user=None).user == "env-user"


class TestFindConfig:
    def test_walks_up(self, tmp_path: Path) -> None:
        config = tmp_path / "ordercart.toml"
        config.write_text("")
        nested = tmp_path / "x" / "y"
        nested.mkdir(parents=True)
        assert find_config(nested) == config

    def test_nearest_wins(self, tmp_path: Path) -> None:
        (tmp_path / "ordercart.toml").write_text("")
        inner = tmp_path / "shop"
        inner.mkdir()
        (inner / "ordercart.toml").write_text("")
        assert find_config(inner) == inner / "ordercart.toml"

    def test_not_found(self, tmp_path: Path) -> None:
        assert find_config(tmp_path) is None

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "ordercart.toml").write_text("")
        other = tmp_path / "elsewhere.toml"
        other.write_text('[orders]\ncurrency = "¥"\n')
        monkeypatch.setenv(CONFIG_ENV_VAR, str(other))
        assert find_config(tmp_path) == other
        assert OrderCartSettings.from_cli(root=tmp_path).orders.currency == "¥"

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "ordercart.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None

    def test_missing_explicit_path_means_defaults(self, tmp_path: Path) -> None:
        settings = OrderCartSettings.from_cli(config_path=str(tmp_path / "nope.toml"), root=tmp_path)
        assert settings.config_path is None
        assert settings.orders.currency == "$"
