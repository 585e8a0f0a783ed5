"""Command: accept an ADR."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from radr.commands._base import RadrCommand

if TYPE_CHECKING:
    from radr.commands._context import AppContext


@click.command(
    cls=RadrCommand,
    examples="""\
  radr accept 3
  radr accept 0003
  radr accept "Use PostgreSQL for persistence\"""",
)
@click.argument("id_or_title")
@click.pass_obj
def accept(app: AppContext, id_or_title: str) -> None:
    """Mark an ADR as Accepted and refresh its date."""
    from radr.services.update import UpdateService

    app.emit(UpdateService(app.config).accept(id_or_title))
