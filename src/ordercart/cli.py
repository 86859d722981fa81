"""Root CLI group for ordercart with global flags and command registration."""

from __future__ import annotations

import click

from ordercart import __version__
from ordercart.commands import register_commands
from ordercart.commands._context import AppContext
from ordercart.config.settings import OrderCartSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="ordercart")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no prompts).")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("-u", "--user", default=None, help="Act as this user id.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    config_path: str | None,
    user: str | None,
) -> None:
    """ordercart — menu, cart and order submission CLI."""
    ctx.ensure_object(dict)
    settings = OrderCartSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
        user=user,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
