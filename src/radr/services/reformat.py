"""ReformatService — re-encode documents into the configured format.

Two phases per operation:

1. Re-render the target(s): the heading and metadata block (or front
   matter) are generated fresh from the record's fields and joined with
   the untouched body tail. A changed filename writes the new file and
   removes the old one.
2. Re-link: every other document's ``Supersedes: [NNNN](...)`` line that
   points at a renamed record is patched to the new filename. Nothing
   else in those files changes.

Reformatting an already-conforming document is a byte-identical no-op.
"""

from __future__ import annotations

import logging
from pathlib import Path

from radr.domain.content import relink_supersedes, render_document
from radr.domain.records import AdrRecord, filename_map, find_by_number
from radr.domain.slugs import build_filename, format_number
from radr.services.base import BaseService
from radr.services.result import ServiceResult, failure
from radr.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class ReformatService(BaseService):
    """Re-renders ADRs and repairs inbound supersession links."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def reformat(self, number: int) -> ServiceResult:
        """Reformat the ADR with *number* into the configured format."""
        op = "reformat"
        records = self._repo.list()
        target = find_by_number(records, number)
        if target is None:
            return failure(
                op,
                "NOT_FOUND",
                f"Could not find ADR {format_number(number)} to reformat",
                number=number,
            )

        new_path = self._target_path(target)
        occupant = next((r for r in records if r.path == new_path and r is not target), None)
        if occupant is not None:
            return _path_conflict(op, target.path, occupant.path, new_path)
        filenames = filename_map(records)
        filenames[target.number] = new_path.name

        with trace_span("render"):
            if self._rewrite(target, new_path, filenames):
                self._repo.delete(target.path)
        with trace_span("relink"):
            relinked = self._relink(
                [r for r in records if r.path != target.path],
                {target.number: new_path.name},
            )

        refreshed = self._refresh()
        record = next(r for r in refreshed if r.path == new_path)
        data = record.to_summary()
        data["previous_path"] = str(target.path)
        data["relinked"] = relinked
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def reformat_all(self) -> ServiceResult:
        """Reformat every ADR into the configured format.

        Nothing is written when two ADRs would land on the same path.
        """
        op = "reformat_all"
        records = self._repo.list()
        new_paths = {r.path: self._target_path(r) for r in records}
        claimed: dict[Path, Path] = {}
        for record in records:
            new_path = new_paths[record.path]
            if new_path in claimed:
                return _path_conflict(op, claimed[new_path], record.path, new_path)
            claimed[new_path] = record.path

        filenames: dict[int, str] = {}
        for record in records:
            filenames.setdefault(record.number, new_paths[record.path].name)

        with trace_span("render"):
            moved_from = [
                record.path
                for record in records
                if self._rewrite(record, new_paths[record.path], filenames)
            ]
            # A vacated path may already hold another ADR's rewrite.
            for old_path in moved_from:
                if old_path not in claimed:
                    self._repo.delete(old_path)
        with trace_span("relink") as span:
            moved = [r.model_copy(update={"path": new_paths[r.path]}) for r in records]
            relinked = self._relink(moved, filenames)
            if span is not None:
                span.annotate("relinked", len(relinked))

        refreshed = self._refresh()
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "items": [r.to_summary() for r in refreshed],
                "count": len(refreshed),
                "relinked": relinked,
            },
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _target_path(self, record: AdrRecord) -> Path:
        return self._repo.root / build_filename(record.number, record.title, self._config.extension)

    def _rewrite(self, record: AdrRecord, new_path: Path, filenames: dict[int, str]) -> bool:
        """Phase 1: render *record* fresh at *new_path*.

        Returns True when the record moved; removing the old file is left
        to the caller.
        """
        content = render_document(
            record.model_copy(update={"path": new_path}),
            self._config.representation,
            filenames,
        )
        if new_path != record.path:
            self._repo.write(new_path, content)
            logger.debug("Moved ADR %s: %s -> %s", record.display_number, record.path, new_path)
            return True
        if content != self._repo.read(record.path):
            self._repo.write(new_path, content)
            logger.debug("Re-rendered ADR %s", record.display_number)
        return False

    def _relink(self, records: list[AdrRecord], renamed: dict[int, str]) -> list[str]:
        """Phase 2: point ``Supersedes`` links in *records* at new filenames."""
        relinked: list[str] = []
        for record in records:
            raw = self._repo.read(record.path)
            patched = raw
            for number, filename in renamed.items():
                patched = relink_supersedes(patched, number, filename)
            if patched != raw:
                self._repo.write(record.path, patched)
                relinked.append(str(record.path))
        return relinked


def _path_conflict(op: str, first: Path, second: Path, new_path: Path) -> ServiceResult:
    return failure(
        op,
        "PATH_CONFLICT",
        f"{first.name} and {second.name} would both be written to {new_path.name}",
        paths=[str(first), str(second)],
        path=str(new_path),
    )
