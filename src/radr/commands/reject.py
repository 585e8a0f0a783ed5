"""Command: reject an ADR."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from radr.commands._base import RadrCommand

if TYPE_CHECKING:
    from radr.commands._context import AppContext


@click.command(
    cls=RadrCommand,
    examples="""\
  radr reject 4
  radr --json reject "Switch to SQLite\"""",
)
@click.argument("id_or_title")
@click.pass_obj
def reject(app: AppContext, id_or_title: str) -> None:
    """Mark an ADR as Rejected and refresh its date."""
    from radr.services.update import UpdateService

    app.emit(UpdateService(app.config).reject(id_or_title))
