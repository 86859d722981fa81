"""Command: interactive cart session on one event loop."""

from __future__ import annotations

import asyncio
import shlex
from typing import TYPE_CHECKING

import click

from ordercart.commands._base import OrderCommand

if TYPE_CHECKING:
    from ordercart.commands._context import AppContext
    from ordercart.services.result import ServiceResult
    from ordercart.services.session import OrderSession
    from ordercart.services.state import SessionSnapshot

SHELL_HELP = """\
  menu            reload and show the menu
  add ID          add one unit of a menu item
  qty ID N        set a line's quantity
  rm ID           remove a line
  cart            show the cart
  submit          submit the cart as an order
  dismiss         dismiss the current notification
  clear           clear the submission error
  help            show this help
  quit            leave the shell"""


class _Shell:
    """Line-oriented driver for an :class:`OrderSession`."""

    def __init__(self, app: AppContext, session: OrderSession) -> None:
        self._app = app
        self._session = session
        self._latest: SessionSnapshot = session.state.snapshot()
        self._shown: tuple[object, ...] = self._notice_key(self._latest)
        self._unsubscribe = session.subscribe(self._on_change)

    @staticmethod
    def _notice_key(snap: SessionSnapshot) -> tuple[object, ...]:
        return (snap.load_error, snap.submission_error, snap.notification)

    def _on_change(self, snap: SessionSnapshot) -> None:
        self._latest = snap

    def _show(self, result: ServiceResult) -> None:
        click.echo(self._app.render(result), err=not result.ok)
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
        self._shown = self._notice_key(self._latest)

    def _show_notices(self) -> None:
        """Print banners that changed since the last command output."""
        key = self._notice_key(self._latest)
        if key == self._shown:
            return
        self._shown = key
        from ordercart.output.renderers import render_notices

        text = render_notices(self._latest)
        if text:
            click.echo(text)

    async def _dispatch(self, words: list[str]) -> bool:
        """Run one command; return False to leave the loop."""
        session = self._session
        cmd, args = words[0].lower(), words[1:]

        if cmd in ("quit", "exit"):
            return False
        if cmd == "help":
            click.echo(SHELL_HELP)
        elif cmd == "menu":
            self._show(await session.load_catalog())
        elif cmd == "cart":
            self._show(session.cart())
        elif cmd == "submit":
            self._show(await session.submit())
        elif cmd == "dismiss":
            self._show(session.dismiss_notification())
        elif cmd == "clear":
            self._show(session.clear_errors())
        elif cmd in ("add", "rm") and len(args) == 1 and args[0].isdigit():
            item_id = int(args[0])
            self._show(session.add_item_by_id(item_id) if cmd == "add" else session.remove_item(item_id))
        elif cmd == "qty" and len(args) == 2 and all(a.lstrip("-").isdigit() for a in args):
            self._show(session.update_quantity(int(args[0]), int(args[1])))
        else:
            click.echo(f"Unrecognized command: {' '.join(words)} (try 'help')", err=True)
        return True

    async def run(self) -> None:
        self._show(await self._session.load_catalog())
        try:
            while True:
                self._show_notices()
                try:
                    line = await asyncio.to_thread(
                        click.prompt, "ordercart", default="", show_default=False, prompt_suffix="> "
                    )
                except click.Abort:
                    break
                try:
                    words = shlex.split(line)
                except ValueError as exc:
                    click.echo(f"Parse error: {exc}", err=True)
                    continue
                if words and not await self._dispatch(words):
                    break
        finally:
            self._unsubscribe()


@click.command(
    cls=OrderCommand,
    examples="""\
  ordercart --user alice shell
  ordercart -v shell""",
)
@click.pass_obj
def shell(app: AppContext) -> None:
    """Start an interactive cart session."""
    if app.settings.no_interact:
        raise click.UsageError("'shell' is interactive and cannot run with --no-interact.")

    from ordercart.services.session import OrderSession

    asyncio.run(_Shell(app, OrderSession(app.backend)).run())
