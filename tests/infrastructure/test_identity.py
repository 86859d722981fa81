"""Tests for the static session provider."""

from __future__ import annotations

from pathlib import Path

from ordercart.config.models import SessionConfig
from ordercart.config.settings import OrderCartSettings
from ordercart.domain.identity import Identity
from ordercart.infrastructure.identity import StaticSessionProvider
from ordercart.services.collaborators import SessionProvider


def _settings(tmp_path: Path, *, user: str | None = None, **session: str) -> OrderCartSettings:
    return OrderCartSettings.from_cli(root=tmp_path, user=user).model_copy(
        update={"session": SessionConfig(**session)}
    )


class TestStaticSessionProvider:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(StaticSessionProvider(), SessionProvider)

    def test_fixed_identity(self) -> None:
        assert StaticSessionProvider().current_user is None
        assert StaticSessionProvider(Identity(id="alice")).current_user == Identity(id="alice")


class TestFromSettings:
    def test_no_user_configured(self, tmp_path: Path) -> None:
        assert StaticSessionProvider.from_settings(_settings(tmp_path)).current_user is None

    def test_config_user_with_name(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path, user_id="alice", user_name="Alice A.")
        assert StaticSessionProvider.from_settings(settings).current_user == Identity(
            id="alice", name="Alice A."
        )

    def test_cli_user_wins(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path, user="bob", user_id="alice", user_name="Alice A.")
        assert StaticSessionProvider.from_settings(settings).current_user == Identity(id="bob")

    def test_blank_user_means_none(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path, user="  ")
        assert StaticSessionProvider.from_settings(settings).current_user is None
