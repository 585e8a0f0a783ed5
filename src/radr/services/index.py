"""IndexService — listing the collection and regenerating the index."""

from __future__ import annotations

from radr.domain.records import find_by_number
from radr.domain.slugs import format_number
from radr.services.base import BaseService
from radr.services.result import ServiceResult, failure
from radr.services.telemetry import traced


class IndexService(BaseService):
    """Read-side operations; both regenerate the index as a side effect."""

    @traced
    def list_records(self) -> ServiceResult:
        """List every ADR in number order and regenerate the index."""
        records = self._refresh()
        return ServiceResult(
            ok=True,
            op="list",
            data={
                "items": [r.to_summary() for r in records],
                "count": len(records),
                "index_path": str(self._config.index_path),
            },
        )

    @traced
    def regenerate(self) -> ServiceResult:
        """Rewrite the index document from the current collection."""
        records = self._refresh()
        return ServiceResult(
            ok=True,
            op="index",
            data={"index_path": str(self._config.index_path), "count": len(records)},
        )

    def get(self, number: int) -> ServiceResult:
        """Look up a single ADR by number without writing anything."""
        record = find_by_number(self._repo.list(), number)
        if record is None:
            return failure(
                "get", "NOT_FOUND", f"No ADR with number {format_number(number)}", number=number
            )
        return ServiceResult(ok=True, op="get", data=record.to_summary())
