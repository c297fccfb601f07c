"""Command: print the JSON Schema of the profile encoding."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from folco.commands._base import FolcoCommand

if TYPE_CHECKING:
    from folco.commands._context import AppContext


@click.command(cls=FolcoCommand, examples=("folco schema > profile.schema.json",))
@click.pass_obj
def schema(app: AppContext) -> None:
    """Print the JSON Schema describing serialized profiles."""
    from folco.domain.profile import profile_json_schema
    from folco.services.result import ServiceResult

    app.emit(ServiceResult(ok=True, op="schema", data={"schema": profile_json_schema()}))
