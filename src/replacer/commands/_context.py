"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides the render service and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from replacer.config.logging import configure_logging
from replacer.output.formatters import OutputSettings, format_result, is_raw_output

if TYPE_CHECKING:
    from replacer.config.settings import ReplacerSettings
    from replacer.services.render import RenderService
    from replacer.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: ReplacerSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> RenderService:
        from replacer.services.render import RenderService

        return RenderService(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          A render to stdout is written verbatim, with no added newline.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output, nl=not is_raw_output(result, settings))
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
