"""Subcommand modules for radr.

Provides register_commands() which uses deferred imports to keep
``radr --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from radr.commands.accept import accept
    from radr.commands.index import index
    from radr.commands.list_cmd import list_cmd
    from radr.commands.new import new
    from radr.commands.reformat import reformat
    from radr.commands.reject import reject
    from radr.commands.supersede import supersede

    cli.add_command(new)
    cli.add_command(accept)
    cli.add_command(reject)
    cli.add_command(supersede)
    cli.add_command(list_cmd)
    cli.add_command(index)
    cli.add_command(reformat)
