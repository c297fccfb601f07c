"""Command: list the folder color palette."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from folco.commands._base import FolcoCommand

if TYPE_CHECKING:
    from folco.commands._context import AppContext


@click.command(cls=FolcoCommand, examples=("folco colors", "folco --json colors"))
@click.pass_obj
def colors(app: AppContext) -> None:
    """List color presets and the HSL mutation each one applies."""
    from folco.domain.color import FOLDER_COLOR_MUTATIONS
    from folco.services.result import ServiceResult

    items = [
        {"name": color.value, **mutation.model_dump()}
        for color, mutation in FOLDER_COLOR_MUTATIONS.items()
    ]
    app.emit(ServiceResult(ok=True, op="colors", data={"count": len(items), "items": items}))
