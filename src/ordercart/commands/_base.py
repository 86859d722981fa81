"""Click command classes that carry usage examples.

``@menu.command("import", examples="...")`` stores the text on the
command; ``--examples`` prints it and exits before any argument checks,
so ``ordercart order place --examples`` works without item specs.
"""

from __future__ import annotations

from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    examples = getattr(ctx.command, "examples", None) or ""
    click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
    ctx.exit(0)


class _ExamplesMixin:
    examples: str | None

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params: list[click.Parameter] = super().get_params(ctx)  # type: ignore[misc]
        if not self.examples:
            return params
        flag = click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=_print_examples,
            help="Show usage examples and exit.",
        )
        return [*params, flag]


class OrderCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples


class OrderGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands default to :class:`OrderCommand`."""

    command_class = OrderCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
