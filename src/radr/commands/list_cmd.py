"""Command: list ADRs and regenerate the index."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from radr.commands._base import RadrCommand

if TYPE_CHECKING:
    from radr.commands._context import AppContext


@click.command(
    "list",
    cls=RadrCommand,
    examples="""\
  radr list
  radr -q list
  radr --json list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List all ADRs in number order (also regenerates the index)."""
    from radr.services.index import IndexService

    app.emit(IndexService(app.config).list_records())
