"""Subcommand modules for ordercart.

Provides register_commands() which uses deferred imports to keep
``ordercart --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from ordercart.commands.menu import menu
    from ordercart.commands.order import order

    cli.add_command(menu)
    cli.add_command(order)

    # --- Standalone commands ---
    from ordercart.commands.shell import shell

    cli.add_command(shell)
