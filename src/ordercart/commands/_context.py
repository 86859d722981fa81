"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Backend initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ordercart.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from ordercart.config.settings import OrderCartSettings
    from ordercart.infrastructure.backend import Backend
    from ordercart.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The backend is lazily initialized on first use so ``--help`` and
    ``--version`` never trigger database access.
    """

    def __init__(self, settings: OrderCartSettings) -> None:
        self.settings = settings
        self._backend: Backend | None = None

        from ordercart.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from ordercart.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def backend(self) -> Backend:
        """The backend instance (created lazily on first access)."""
        if self._backend is None:
            from ordercart.infrastructure.backend import Backend

            self._backend = Backend(self.settings)
            self._backend.init_event_bus()
        return self._backend

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            currency=self.settings.orders.currency,
        )

    def render(self, result: ServiceResult) -> str:
        return format_result(result, settings=self.output_settings)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = self.render(result)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        if self._backend is not None:
            self._backend.close()
            self._backend = None
