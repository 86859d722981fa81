"""Command group: menu catalog (list, import)."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

import click

from ordercart.commands._base import OrderGroup

if TYPE_CHECKING:
    from ordercart.commands._context import AppContext

_MENU_EXAMPLES = """\
  ordercart menu list
  ordercart menu import menu.json
  ordercart --json menu list"""


@click.group(cls=OrderGroup, examples=_MENU_EXAMPLES)
@click.pass_obj
def menu(app: AppContext) -> None:
    """Browse and seed the menu catalog."""


@menu.command(
    "list",
    examples="""\
  ordercart menu list
  ordercart -v menu list
  ordercart -q menu list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """Load the catalog and show every available item."""
    from ordercart.services.session import OrderSession

    session = OrderSession(app.backend)
    app.emit(asyncio.run(session.load_catalog()))


@menu.command(
    "import",
    examples="""\
  ordercart menu import menu.json
  ordercart menu import menu.toml --replace""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--replace", is_flag=True, help="Hide items not present in the file.")
@click.pass_obj
def import_cmd(app: AppContext, path: Path, replace: bool) -> None:
    """Import menu items from a JSON or TOML file."""
    from ordercart.services.menu import MenuService

    app.emit(MenuService(app.backend).import_file(path, replace=replace))
