"""Command: create a new ADR."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from radr.commands._base import ADR_NUMBER, RadrCommand

if TYPE_CHECKING:
    from radr.commands._context import AppContext


@click.command(
    cls=RadrCommand,
    examples="""\
  radr new "Use PostgreSQL for persistence"
  radr new "Switch to SQLite" --supersedes 3
  radr --json new "Adopt structured logging\"""",
)
@click.argument("title")
@click.option(
    "--supersedes",
    type=ADR_NUMBER,
    default=None,
    help="Record that the new ADR replaces this number (does not mark the old one).",
)
@click.pass_obj
def new(app: AppContext, title: str, supersedes: int | None) -> None:
    """Create a new Proposed ADR dated today."""
    from radr.services.create import CreateService

    app.emit(CreateService(app.config).create(title, supersedes=supersedes))
