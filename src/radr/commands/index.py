"""Command: regenerate the index document."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from radr.commands._base import RadrCommand

if TYPE_CHECKING:
    from radr.commands._context import AppContext


@click.command(
    cls=RadrCommand,
    examples="""\
  radr index
  radr -c radr.toml index""",
)
@click.pass_obj
def index(app: AppContext) -> None:
    """Rewrite the ADR index from the documents on disk."""
    from radr.services.index import IndexService

    app.emit(IndexService(app.config).regenerate())
