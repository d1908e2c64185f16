"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. The store is opened lazily so ``--help`` and
``--version`` never touch the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from roamclosure.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from roamclosure.config.settings import RoamSettings
    from roamclosure.infrastructure.store import Store
    from roamclosure.services.result import ServiceResult


class AppContext:
    """Settings plus the lazily opened store."""

    def __init__(self, settings: RoamSettings) -> None:
        self.settings = settings
        self._store: Store | None = None

        from roamclosure.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def store(self) -> Store:
        """The org-roam store (created on first access)."""
        if self._store is None:
            from roamclosure.infrastructure.store import Store

            self._store = Store.from_settings(self.settings)
            click.get_current_context().call_on_close(self._store.close)
        return self._store

    def emit(self, result: ServiceResult) -> None:
        """Write *result* and set the exit status.

        * Success: output to stdout; warnings to stderr unless in JSON
          mode, where they are already part of the payload.
        * Failure: output to stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
