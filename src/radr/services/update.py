"""UpdateService — status transitions and supersession.

Pipeline: RESOLVE → APPLY → INDEX → RESPOND

Both operations rewrite exactly one document through the targeted field
update of :func:`radr.domain.content.update_fields`, so the number,
filename, representation, and body of the document never change.
"""

from __future__ import annotations

import logging

from radr.domain.content import update_fields
from radr.domain.lifecycle import (
    DECISION_STATUSES,
    AdrStatus,
    is_superseded_status,
    superseded_status,
)
from radr.domain.records import AdrRecord, find_by_number, resolve_record
from radr.domain.slugs import format_number
from radr.services._helpers import today_iso
from radr.services.base import BaseService
from radr.services.result import ServiceResult, failure
from radr.services.telemetry import traced

logger = logging.getLogger(__name__)

_TRANSITION_OPS: dict[AdrStatus, str] = {
    AdrStatus.ACCEPTED: "accept",
    AdrStatus.REJECTED: "reject",
}


class UpdateService(BaseService):
    """Handles accept/reject transitions and supersession links."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def accept(self, id_or_title: str) -> ServiceResult:
        return self.transition(id_or_title, AdrStatus.ACCEPTED)

    def reject(self, id_or_title: str) -> ServiceResult:
        return self.transition(id_or_title, AdrStatus.REJECTED)

    @traced
    def transition(self, id_or_title: str, status: AdrStatus) -> ServiceResult:
        """Set the status of one ADR and refresh its date to today.

        The ADR is resolved by number (``3`` or ``0003``) or by exact,
        case-insensitive title. A superseded ADR is refused: its status
        must keep reflecting the supersession.
        """
        if status not in DECISION_STATUSES:
            msg = f"Not a decision status: {status!r}"
            raise ValueError(msg)
        op = _TRANSITION_OPS[status]

        records = self._repo.list()
        target = resolve_record(records, id_or_title)
        if target is None:
            return failure(
                op,
                "NOT_FOUND",
                f"ADR not found by id or title: {id_or_title}",
                query=id_or_title,
            )
        if target.superseded_by is not None or is_superseded_status(target.status):
            return failure(
                op,
                "INVALID_TRANSITION",
                f"ADR {target.display_number} is {target.status}; cannot set {status}",
                path=str(target.path),
            )

        raw = self._repo.read(target.path)
        self._repo.write(target.path, update_fields(raw, {"status": str(status), "date": today_iso()}))
        logger.debug("Set ADR %s to %s", target.display_number, status)

        updated = _same_file(self._refresh(), target)
        return ServiceResult(ok=True, op=op, data=updated.to_summary())

    @traced
    def supersede(self, old_number: int, new_number: int) -> ServiceResult:
        """Mark ADR *old_number* as superseded by *new_number*.

        Writes ``Status: Superseded by <new>`` with ``Superseded-by: <new>``
        directly after it. The date is left unchanged.
        """
        op = "supersede"
        records = self._repo.list()
        target = find_by_number(records, old_number)
        if target is None:
            return failure(
                op,
                "NOT_FOUND",
                f"Could not find ADR {format_number(old_number)} to supersede",
                number=old_number,
            )

        raw = self._repo.read(target.path)
        changes: dict[str, str | int] = {
            "status": superseded_status(new_number),
            "superseded_by": new_number,
        }
        self._repo.write(target.path, update_fields(raw, changes))
        logger.debug(
            "Marked ADR %s superseded by %s",
            target.display_number,
            format_number(new_number),
        )

        updated = _same_file(self._refresh(), target)
        return ServiceResult(ok=True, op=op, data=updated.to_summary())


def _same_file(records: list[AdrRecord], target: AdrRecord) -> AdrRecord:
    """Find the re-parsed version of *target* by its storage path."""
    for record in records:
        if record.path == target.path:
            return record
    msg = f"ADR vanished during update: {target.path}"
    raise FileNotFoundError(msg)
