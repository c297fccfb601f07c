"""Subcommand modules for folco.

Provides register_commands() which uses deferred imports to keep
``folco --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from folco.commands.colors import colors
    from folco.commands.customize import customize
    from folco.commands.reset import reset
    from folco.commands.schema import schema

    cli.add_command(customize)
    cli.add_command(reset)
    cli.add_command(schema)
    cli.add_command(colors)
