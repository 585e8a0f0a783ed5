"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides the lazily prepared ADR configuration and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from radr.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from radr.config.models import AdrConfig
    from radr.config.settings import RadrSettings
    from radr.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The ADR directory is
    created on first access to :attr:`config` so ``--help`` and
    ``--version`` never touch the filesystem.
    """

    def __init__(self, settings: RadrSettings) -> None:
        self.settings = settings
        self._config: AdrConfig | None = None

        # Configure structured logging
        from radr.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from radr.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def config(self) -> AdrConfig:
        """The service configuration; ensures the ADR directory exists."""
        if self._config is None:
            config = self.settings.adr_config()
            config.adr_dir.mkdir(parents=True, exist_ok=True)
            self._config = config
        return self._config

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
