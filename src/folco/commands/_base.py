"""Click command classes for folco subcommands.

Every subcommand accepts ``--examples``: it prints the command's example
invocations (one per line, indented under a header) and exits without
running the command or validating its arguments.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click


class FolcoCommand(click.Command):
    """Command with an optional list of example invocations."""

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        for line in self.examples:
            click.echo(f"  {line}")
        ctx.exit(0)


class FolcoGroup(click.Group):
    """Root group; subcommands default to :class:`FolcoCommand`."""

    command_class = FolcoCommand
