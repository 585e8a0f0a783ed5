"""Command: supersede an ADR with a newly created one."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from radr.commands._base import ADR_NUMBER, RadrCommand

if TYPE_CHECKING:
    from radr.commands._context import AppContext


@click.command(
    cls=RadrCommand,
    examples="""\
  radr supersede 2 "Switch to SQLite"
  radr supersede 0002 "Revert to PostgreSQL" --force""",
)
@click.argument("old_number", type=ADR_NUMBER)
@click.argument("title")
@click.option("--force", is_flag=True, help="Supersede even if the ADR is already superseded.")
@click.pass_obj
def supersede(app: AppContext, old_number: int, title: str, force: bool) -> None:
    """Create a new ADR that supersedes OLD_NUMBER and mark the old one."""
    from radr.domain.lifecycle import is_superseded_status
    from radr.domain.slugs import format_number
    from radr.services.create import CreateService
    from radr.services.index import IndexService
    from radr.services.result import ServiceResult, failure
    from radr.services.update import UpdateService

    op = "supersede"
    existing = IndexService(app.config).get(old_number)
    if not existing.ok:
        app.emit(
            failure(
                op,
                "NOT_FOUND",
                f"Could not find ADR {format_number(old_number)} to supersede",
                number=old_number,
            )
        )
        return
    superseded_by = existing.data.get("superseded_by")
    status = existing.data["status"]
    if (superseded_by is not None or is_superseded_status(status)) and not force:
        reason = (
            f"superseded by {format_number(superseded_by)}"
            if superseded_by is not None
            else f"marked '{status}'"
        )
        app.emit(
            failure(
                op,
                "ALREADY_SUPERSEDED",
                (
                    f"ADR {format_number(old_number)} is already {reason}; "
                    "use --force to supersede it again"
                ),
                number=old_number,
                superseded_by=superseded_by,
            )
        )
        return

    created = CreateService(app.config).create(title, supersedes=old_number)
    if not created.ok:
        app.emit(created)
        return
    marked = UpdateService(app.config).supersede(old_number, created.data["number"])
    if not marked.ok:
        app.emit(marked)
        return

    app.emit(
        ServiceResult(
            ok=True,
            op=op,
            data=created.data,
            meta=created.meta,
        )
    )
