"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Workspace initialization, the logging
lifecycle, and centralized result emission (stdout/stderr routing + exit
codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from layerctl.config.logging import LoggingHandle
    from layerctl.config.settings import LayerSettings
    from layerctl.infrastructure.workspace import Workspace
    from layerctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``. The workspace is lazily
    initialized on first use so ``--help`` and ``--version`` never build
    one. :meth:`close` must run when the command finishes; the root group
    registers it with ``ctx.call_on_close``.
    """

    def __init__(self, settings: LayerSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from layerctl.config.logging import configure_logging

        try:
            self._logging: LoggingHandle = configure_logging(
                verbose=settings.verbose,
                log_json=settings.log_json,
                log_file=settings.logging.file,
            )
        except OSError as exc:
            msg = f"Cannot open log file: {settings.logging.file} ({exc})"
            raise click.ClickException(msg) from exc

        if settings.verbose:
            from layerctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def workspace(self) -> Workspace:
        """The workspace instance (created lazily on first access)."""
        if self._workspace is None:
            from layerctl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

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
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        """Release the log file sink."""
        self._logging.close()
