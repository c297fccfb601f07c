"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Builds the FolderService from settings, runs a
batch with its progress reporter, and centralizes result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING

import click

from folco.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from folco.config.settings import FolcoSettings
    from folco.services.folders import FolderService, ProgressStream
    from folco.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: FolcoSettings) -> None:
        self.settings = settings

        from folco.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def folder_service(self) -> FolderService:
        """FolderService wired to the default renderer and installer."""
        from folco.infrastructure.installer import DirectoryFileInstaller
        from folco.infrastructure.render import SvgCompositeRenderer
        from folco.services.folders import FolderService

        return FolderService(
            SvgCompositeRenderer(
                size=self.settings.render.size,
                base_color=self.settings.render.base_color,
            ),
            DirectoryFileInstaller(icon_stem=self.settings.install.icon_stem),
            max_workers=self.settings.batch.max_workers,
            channel_capacity=self.settings.batch.channel_capacity,
        )

    def run_batch(
        self,
        op: str,
        start: Callable[[FolderService], ProgressStream],
        *,
        action: str,
    ) -> ServiceResult:
        """Run one batch: producer and progress consumer as separate tasks."""
        from folco.output.progress import ProgressReporter

        out = self.output_settings
        reporter = ProgressReporter(
            verbose=out.verbose,
            enabled=not (out.json_output or out.quiet),
            action=action,
        )
        service = self.folder_service()

        async def _run() -> ServiceResult:
            stream = start(service)
            consumer = asyncio.create_task(reporter.consume(stream))
            report = await consumer
            await stream.result()
            return report.to_result(op)

        return asyncio.run(_run())

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
