"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Builds the data store on demand and centralizes
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hakot.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from hakot.config.settings import HakotSettings
    from hakot.infrastructure.store import DataStore
    from hakot.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store is only built when a command asks for it, so ``--help`` and
    ``--version`` never touch the snapshot.
    """

    def __init__(self, settings: HakotSettings) -> None:
        self.settings = settings

        from hakot.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from hakot.services.telemetry import enable_telemetry

            enable_telemetry()

    def open_store(self) -> DataStore:
        """Build the configured snapshot store (unconfigured stores fail on fetch)."""
        from hakot.infrastructure.store import SnapshotStore

        return SnapshotStore.from_settings(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
