"""AppContext: shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  Builds DoomOptions lazily so ``--help`` never
parses rules, and routes every ServiceResult to stdout/stderr with the
right exit code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NoReturn

import click

from doomctl.config.logging import configure_logging
from doomctl.domain.errors import ParseError
from doomctl.output.formatters import OutputSettings, format_result
from doomctl.services.result import ServiceResult

if TYPE_CHECKING:
    from doomctl.config.settings import DoomSettings
    from doomctl.domain.options import DoomOptions

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: DoomSettings) -> None:
        self.settings = settings
        self._options: DoomOptions | None = None

        export_dir = settings.doom_export if settings.export_logs else None
        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            export_dir=export_dir,
        )

    @property
    def options(self) -> DoomOptions:
        """The parsed job options (built on first access).

        A malformed rule is fatal: the error is emitted and the process
        exits with status 1 instead of falling back to defaults.
        """
        if self._options is None:
            try:
                self._options = self.settings.to_options()
            except ParseError as exc:
                logger.debug("Rejected configuration: %s", exc)
                self.fail(
                    ServiceResult.failure("load_options", exc.code, str(exc), value=exc.value)
                )
            logger.debug(
                "Loaded %d rule(s) for %s", len(self._options.rules), self._options.doom_path
            )
        return self._options

    def _output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, returns normally.  Warnings go to
          stderr so they don't pollute piped output.
        * Failure: see :meth:`fail`.
        """
        if not result.ok:
            self.fail(result)
        settings = self._output_settings()
        output = format_result(result, settings=settings)
        if output:
            click.echo(output)
        # In JSON mode, warnings are already in the serialized payload.
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

    def fail(self, result: ServiceResult) -> NoReturn:
        """Write a failed result to stderr and exit with code 1."""
        click.echo(format_result(result, settings=self._output_settings()), err=True)
        raise SystemExit(1)
