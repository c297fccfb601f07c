"""Entry point: the ``folco`` command group.

Global flags shape how results are shown (``--json``, ``--quiet``,
``--verbose``), where logs go (``--log-json``), which config file applies
(``--config``) and how many directories a batch touches at once
(``--jobs``).  They are folded into one :class:`FolcoSettings` that every
subcommand receives through :class:`AppContext`.
"""

from __future__ import annotations

import click

from folco import __version__
from folco.commands import register_commands
from folco.commands._base import FolcoGroup
from folco.commands._context import AppContext
from folco.config.settings import FolcoSettings


@click.group(cls=FolcoGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="folco")
@click.option("--json", "json_output", is_flag=True, help="Emit the result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="One-line result, no progress bar.")
@click.option("-v", "--verbose", is_flag=True, help="Full error chains and debug logs.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Use this folco.toml instead of discovering one.",
)
@click.option(
    "-j",
    "--jobs",
    "max_workers",
    type=click.IntRange(min=1),
    help="Directories processed concurrently (1 keeps input order).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    max_workers: int | None,
) -> None:
    """folco: customize folder icons with colors, decals and emoji overlays."""
    settings = FolcoSettings.from_cli(
        config_path=config_path,
        max_workers=max_workers,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
