"""Command: restore the default icon of folders."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from folco.commands._base import FolcoCommand

if TYPE_CHECKING:
    from folco.commands._context import AppContext


@click.command(
    cls=FolcoCommand,
    examples=(
        "folco reset ~/Projects",
        "folco reset ~/Music ~/Videos",
        "folco --json reset ~/Projects",
    ),
)
@click.argument("directories", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.pass_obj
def reset(app: AppContext, directories: tuple[Path, ...]) -> None:
    """Reset folder icons to the system default."""
    app.emit(
        app.run_batch(
            "reset",
            lambda service: service.start_reset(directories),
            action="Resetting",
        )
    )
