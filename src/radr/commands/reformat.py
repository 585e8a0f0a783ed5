"""Command: reformat ADRs into the configured format."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from radr.commands._base import ADR_NUMBER, RadrCommand

if TYPE_CHECKING:
    from radr.commands._context import AppContext


@click.command(
    cls=RadrCommand,
    examples="""\
  radr reformat 3
  radr reformat --all
  RADR_FORMAT=mdx RADR_FRONT_MATTER=1 radr reformat --all""",
)
@click.argument("number", type=ADR_NUMBER, required=False)
@click.option("--all", "all_records", is_flag=True, help="Reformat every ADR.")
@click.pass_obj
def reformat(app: AppContext, number: int | None, all_records: bool) -> None:
    """Re-render one ADR (or all) and fix links to renamed files."""
    if (number is None) == (not all_records):
        raise click.UsageError("Pass either an ADR NUMBER or --all.")

    from radr.services.reformat import ReformatService

    service = ReformatService(app.config)
    if all_records:
        app.emit(service.reformat_all())
    else:
        assert number is not None
        app.emit(service.reformat(number))
