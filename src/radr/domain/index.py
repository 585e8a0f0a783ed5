"""Index projection — the generated listing of all ADRs.

The index is always regenerated in full from the current record list;
there is no incremental update path. Supersession links are resolved
against a number -> filename map built from the same list, so they always
point at each target's current filename.
"""

from __future__ import annotations

from radr.domain.records import AdrRecord, filename_map, sort_records
from radr.domain.slugs import markdown_link

INDEX_HEADING = "# Architecture Decision Records"


def display_status(record: AdrRecord, filenames: dict[int, str]) -> str:
    """Status as shown in the index.

    A superseded record is re-derived as ``Superseded by [0002](...)``.
    """
    if record.superseded_by is None:
        return record.status
    return f"Superseded by {markdown_link(record.superseded_by, filenames)}"


def render_index_line(record: AdrRecord, filenames: dict[int, str]) -> str:
    return (
        f"- [{record.display_number}: {record.title}]({record.filename})"
        f" — Status: {display_status(record, filenames)}"
        f" — Date: {record.date}"
    )


def render_index(records: list[AdrRecord]) -> str:
    """Render the full index document for *records* (any order)."""
    ordered = sort_records(records)
    filenames = filename_map(ordered)
    lines = [INDEX_HEADING, ""]
    lines.extend(render_index_line(record, filenames) for record in ordered)
    return "\n".join(lines) + "\n\n"
