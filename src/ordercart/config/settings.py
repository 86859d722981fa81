"""OrderCartSettings — one frozen object for flags, env vars, and ``ordercart.toml``.

Later sources only fill what earlier ones left unset:

  1. keyword arguments (the global CLI flags)
  2. ``ORDERCART_*`` environment variables, ``__`` between nested keys
  3. the ``ordercart.toml`` located by :func:`find_config`
  4. defaults baked into the section models

The TOML file is read by pydantic-settings' ``TomlConfigSettingsSource``.
Which file to read is decided per construction in :meth:`from_cli` and
handed to :meth:`settings_customise_sources` through a context variable.
"""

from __future__ import annotations

import os
import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, TomlConfigSettingsSource

from ordercart.config.models import (
    CatalogConfig,
    OrdersConfig,
    PluginsConfig,
    SessionConfig,
    StoreConfig,
)

CONFIG_FILENAME = "ordercart.toml"
CONFIG_ENV_VAR = "ORDERCART_CONFIG"

_toml_file: ContextVar[Path | None] = ContextVar("ordercart_toml_file", default=None)


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd).

    ``$ORDERCART_CONFIG`` names the file outright; if it points nowhere
    there is no config. Otherwise the nearest ``ordercart.toml`` in
    *start* or one of its parents wins.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class OrderCartSettings(BaseSettings):
    """Settings for the ordercart CLI and embedding applications.

    ``root`` is where the ``.ordercart/`` store lives: the directory of
    the config file, else the working directory.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ORDERCART_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False
    user: str | None = None

    store: StoreConfig = Field(default_factory=StoreConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    orders: OrdersConfig = Field(default_factory=OrdersConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @property
    def db_path(self) -> Path:
        return self.root / self.store.dirname / self.store.db_name

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        toml_file = _toml_file.get()
        if toml_file is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_file))
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> OrderCartSettings:
        """Build settings for one CLI invocation.

        ``--config`` skips discovery; a path that is not a file means no
        config. Flags passed as ``None`` were not given on the command
        line and are left for env vars and TOML to fill.
        """
        if config_path:
            explicit = Path(config_path)
            toml_file = explicit if explicit.is_file() else None
        else:
            toml_file = find_config(root)

        if root is None:
            root = toml_file.parent if toml_file is not None else Path.cwd()
        overrides = {name: value for name, value in cli_flags.items() if value is not None}

        token = _toml_file.set(toml_file)
        try:
            return cls(root=root, config_path=toml_file, **overrides)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_file}: {exc}") from exc
        finally:
            _toml_file.reset(token)
